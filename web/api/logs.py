###########EXTERNAL IMPORTS############

from fastapi import APIRouter, Request, Depends
from fastapi.responses import JSONResponse

#######################################

#############LOCAL IMPORTS#############

from controller.cursor.cursor import BufferedCursor
from data.logs import LogStore
from web.api.decorator import api_endpoint
from web.dependencies import services
import util.functions.objects as objects
import util.functions.web as web_util
import web.exceptions as api_exception

#######################################


router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("/get_window")
@api_endpoint
async def get_window(
    request: Request, cursor: BufferedCursor = Depends(services.get_cursor), store: LogStore = Depends(services.get_store)
) -> JSONResponse:
    """Retrieves the log records currently held in the cursor window."""

    return JSONResponse(content=web_util.get_window_payload(cursor, len(store)))


@router.post("/bootstrap")
@api_endpoint
async def bootstrap(
    request: Request, cursor: BufferedCursor = Depends(services.get_cursor), store: LogStore = Depends(services.get_store)
) -> JSONResponse:
    """Resets the cursor window to its initial unit."""

    await cursor.bootstrap()
    return JSONResponse(content=web_util.get_window_payload(cursor, len(store)))


@router.post("/load_before")
@api_endpoint
async def load_before(
    request: Request, cursor: BufferedCursor = Depends(services.get_cursor), store: LogStore = Depends(services.get_store)
) -> JSONResponse:
    """Extends the window by one unit of older records."""

    await cursor.load_before()
    return JSONResponse(content=web_util.get_window_payload(cursor, len(store)))


@router.post("/load_after")
@api_endpoint
async def load_after(
    request: Request, cursor: BufferedCursor = Depends(services.get_cursor), store: LogStore = Depends(services.get_store)
) -> JSONResponse:
    """Extends the window by one unit of newer records."""

    await cursor.load_after()
    return JSONResponse(content=web_util.get_window_payload(cursor, len(store)))


@router.get("/ensure_range")
@api_endpoint
async def ensure_range(
    request: Request, cursor: BufferedCursor = Depends(services.get_cursor), store: LogStore = Depends(services.get_store)
) -> JSONResponse:
    """Loads the records between the start and stop indexes (inclusive) and returns the window."""

    start = objects.require_int_param(request.query_params, "start")
    stop = objects.require_int_param(request.query_params, "stop")

    await cursor.ensure_range(start, stop)
    return JSONResponse(content=web_util.get_window_payload(cursor, len(store)))


@router.get("/get_item")
@api_endpoint
async def get_item(request: Request, cursor: BufferedCursor = Depends(services.get_cursor)) -> JSONResponse:
    """Retrieves a single loaded log record by index."""

    index = objects.require_int_param(request.query_params, "index")
    entry = cursor.get_item(index)
    if entry is None:
        raise api_exception.ItemNotLoaded(api_exception.Errors.LOGS.NOT_LOADED, details={"index": index})

    return JSONResponse(content={"index": entry.key, **entry.value.to_dict()})
