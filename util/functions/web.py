###########EXTERNAL IMPORTS############

from typing import Any, Dict
from fastapi import Request


#######################################

#############LOCAL IMPORTS#############

from controller.cursor.cursor import BufferedCursor

#######################################


def get_api_url(request: Request) -> str:
    """
    Returns the path of the API URL from the given request.
    """

    return request.url.path


def get_window_payload(cursor: BufferedCursor, total: int | None = None) -> Dict[str, Any]:
    """
    Serializes the cursor window for the HTTP API.

    Values are expected to expose to_dict(); each item carries its key as "index".

    Args:
        cursor: Cursor whose window is serialized.
        total: Optional size of the underlying data source.
    """

    items = [{"index": entry.key, **entry.value.to_dict()} for entry in cursor.to_array()]
    payload: Dict[str, Any] = {
        "items": items,
        "window_start": cursor.get_window_start(),
        "window_end": cursor.get_window_end(),
        "at_start": cursor.is_at_start(),
        "at_end": cursor.is_at_end(),
    }
    if total is not None:
        payload["total"] = total
    return payload
