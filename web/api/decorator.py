###########EXTERNAL IMPORTS############

from functools import wraps
from typing import Dict, Any, Callable, Awaitable
from fastapi import Request
from fastapi.responses import JSONResponse

#######################################

#############LOCAL IMPORTS#############

from controller.exceptions import InvalidRangeError, StrategyFetchError
from util.debug import LoggerManager
import util.functions.web as web_util
import web.exceptions as api_exception

#######################################


EndpointFunc = Callable[..., Awaitable[JSONResponse]]


def _to_api_exception(e: Exception) -> api_exception.APIException | None:
    """Maps cursor and parsing errors to their API error, or None for unexpected errors."""

    if isinstance(e, api_exception.APIException):
        return e
    if isinstance(e, InvalidRangeError):
        return api_exception.InvalidRange(api_exception.Errors.LOGS.INVALID_RANGE, str(e))
    if isinstance(e, StrategyFetchError):
        return api_exception.FetchFailed(api_exception.Errors.LOGS.FETCH_FAILED, str(e))
    if isinstance(e, (KeyError, ValueError)):
        return api_exception.InvalidRequest(api_exception.Errors.INVALID_QUERY_PARAMS, str(e).strip("'"))
    return None


def api_endpoint(func: EndpointFunc) -> Callable:
    """
    Wraps an endpoint so errors are returned as structured JSON responses.

    APIException and cursor errors are rendered with their status code and
    error identifiers; any other exception is logged and returned as a 500.
    """

    @wraps(func)
    async def wrapper(request: Request, **kwargs) -> JSONResponse:

        logger = LoggerManager.get_logger(__name__)

        try:
            return await func(request, **kwargs)

        except Exception as e:
            api_error = _to_api_exception(e)
            content: Dict[str, Any] = {}

            if api_error is None:
                logger.exception(f"Failed {web_util.get_api_url(request)} API due to server error: {str(e)}")
                content["message"] = str(e)
                content["error_section"] = api_exception.Errors.INTERNAL_SERVER_ERROR.error_section
                content["error_code"] = api_exception.Errors.INTERNAL_SERVER_ERROR.error_id
                return JSONResponse(status_code=api_exception.Errors.INTERNAL_SERVER_ERROR.status_code, content=content)

            logger.warning(f"Failed {web_util.get_api_url(request)} API due to error: {api_error.message}")
            content["message"] = api_error.message
            content["error_section"] = api_error.error_section
            content["error_code"] = api_error.error_id
            content.update(api_error.details)
            return JSONResponse(status_code=api_error.status_code, content=content)

    return wrapper
