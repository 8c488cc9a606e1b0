###########EXTERNAL IMPORTS############

from dataclasses import dataclass
from typing import Dict, Any

#######################################

#############LOCAL IMPORTS#############

#######################################


@dataclass
class APIErrorDef:
    """Defines a canonical API error with status code, identifier, and default message."""

    status_code: int
    error_section: str
    error_id: str
    default_message: str


class APIException(Exception):
    """Base exception for API errors constructed from a centralized error definition."""

    def __init__(
        self,
        error: APIErrorDef,
        message: str | None = None,
        details: Dict[str, Any] | None = None,
    ):

        self.status_code = error.status_code
        self.error_id = error.error_id
        self.error_section = error.error_section
        self.message = message or error.default_message
        self.details = details or {}
        super().__init__(self.message)


##########     G E N E R A L     E X C E P T I O N S     ##########


class InvalidRequest(APIException):
    """Raised when a request is malformed or contains invalid data."""

    pass


##########     L O G S     E X C E P T I O N S     ##########


class InvalidRange(APIException):
    """Raised when a requested index range cannot be served by the cursor."""

    pass


class FetchFailed(APIException):
    """Raised when the cursor could not fetch from the underlying log source."""

    pass


class ItemNotLoaded(APIException):
    """Raised when a requested log index is not present in the cursor window."""

    pass


##########     C E N T R A L I Z E D     E R R O R S     O B J E C T     ##########


class Errors:
    INVALID_QUERY_PARAMS = APIErrorDef(
        status_code=400,
        error_section="GLOBAL",
        error_id="INVALID_QUERY_PARAMS",
        default_message="Missing or invalid query parameters.",
    )
    INTERNAL_SERVER_ERROR = APIErrorDef(
        status_code=500,
        error_section="GLOBAL",
        error_id="INTERNAL_SERVER_ERROR",
        default_message="Got an unexpected internal server error.",
    )

    class LOGS:
        INVALID_RANGE = APIErrorDef(
            status_code=400,
            error_section="LOGS",
            error_id="INVALID_RANGE",
            default_message="The requested index range cannot be loaded.",
        )
        FETCH_FAILED = APIErrorDef(
            status_code=502,
            error_section="LOGS",
            error_id="FETCH_FAILED",
            default_message="Failed to fetch log records from the log source.",
        )
        NOT_LOADED = APIErrorDef(
            status_code=404,
            error_section="LOGS",
            error_id="NOT_LOADED",
            default_message="The log record is not loaded in the current window.",
        )
