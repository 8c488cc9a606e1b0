###########EXTERNAL IMPORTS############

from datetime import datetime
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple, TypeVar

#######################################

#############LOCAL IMPORTS#############

from controller.cursor.strategy import CursorStrategy, StrategyKind, TrimPolicy
from model.cursor import Direction, Entry, FetchOptions
from util.debug import LoggerManager

#######################################

V = TypeVar("V")

RangeFetch = Callable[[int, int, FetchOptions], Awaitable[Sequence[Any]]]
PageFetch = Callable[[int, int, FetchOptions], Awaitable[Sequence[Any]]]
TimestampFetch = Callable[[Optional[datetime], int], Awaitable[Sequence[Tuple[datetime, Any]]]]


def _identity(value: int) -> int:
    return value


def index_strategy(fetch_range: RangeFetch, initial_key: Optional[int] = None, trim: Optional[TrimPolicy] = None) -> CursorStrategy[int, Any]:
    """
    Builds a strategy over an index-dense data source.

    Keys are absolute positions. Each fetch resolves to one contiguous
    [start, stop) range handed to fetch_range, and entry keys are assigned
    from start.

    Args:
        fetch_range: Coroutine function (start, stop, options) returning the values
            in [start, stop), fewer only at the end of the data source.
        initial_key: Key bootstrap fetches after (None starts at index 0).
        trim: Optional trim policy overriding the cursor configured one.
    """

    async def fetch(key: Optional[int], options: FetchOptions) -> List[Entry[int, Any]]:
        logger = LoggerManager.get_logger(__name__)

        if options.direction is Direction.AFTER:
            start = 0 if key is None else key + 1
            stop = start + options.limit
        else:
            if key is None or key <= 0:
                return []  # Nothing precedes index 0
            stop = key
            start = max(0, key - options.limit)

        logger.debug(f"Index fetch {options.direction.value} key={key} range=[{start}, {stop})")
        values = await fetch_range(start, stop, options)
        return [Entry(start + i, value) for i, value in enumerate(values)]

    return CursorStrategy(
        kind=StrategyKind.INDEX,
        fetch=fetch,
        initial_key=initial_key,
        index_of=_identity,
        key_at=_identity,
        trim=trim,
    )


def page_strategy(fetch_page: PageFetch, initial_key: Optional[int] = None, trim: Optional[TrimPolicy] = None) -> CursorStrategy[int, Any]:
    """
    Builds a strategy over a page-numbered data source.

    Keys are absolute positions mapped to pages through floor(key / limit). A
    fetch resolves the [start, stop) range of positions it needs, like the index
    strategy, and requests every page overlapping it: one page when the cursor
    key sits on a page boundary, two when a jump left it mid-page.

    Args:
        fetch_page: Coroutine function (page, size, options) returning the values of
            that page, fewer only for the last page.
        initial_key: Key bootstrap fetches after (None starts at page 0).
        trim: Optional trim policy overriding the cursor configured one.
    """

    async def fetch(key: Optional[int], options: FetchOptions) -> List[Entry[int, Any]]:
        logger = LoggerManager.get_logger(__name__)
        limit = options.limit

        if options.direction is Direction.AFTER:
            start = 0 if key is None else key + 1
            stop = start + limit
        else:
            if key is None or key <= 0:
                return []  # Nothing precedes page 0
            stop = key
            start = max(0, key - limit)

        first_page = start // limit
        values: List[Any] = []
        for page in range(first_page, (stop - 1) // limit + 1):
            logger.debug(f"Page fetch {options.direction.value} key={key} page={page} size={limit}")
            rows = list(await fetch_page(page, limit, options))
            values.extend(rows)
            if len(rows) < limit:
                break

        offset = start - first_page * limit
        values = values[offset : offset + stop - start]
        return [Entry(start + i, value) for i, value in enumerate(values)]

    return CursorStrategy(
        kind=StrategyKind.PAGE,
        fetch=fetch,
        initial_key=initial_key,
        index_of=_identity,
        key_at=_identity,
        trim=trim,
    )


def timestamp_strategy(
    fetch_before: TimestampFetch,
    fetch_after: TimestampFetch,
    initial_key: Optional[datetime] = None,
    trim: Optional[TrimPolicy] = None,
) -> CursorStrategy[datetime, Any]:
    """
    Builds a strategy over a time-ordered data source.

    Keys are instants. BEFORE and AFTER are resolved by value through two
    separate queries, so the key space does not need to be dense.

    Args:
        fetch_before: Coroutine function (ts, limit) returning up to limit
            (timestamp, value) pairs strictly before ts, closest to ts first or
            ascending. Results are re-sorted ascending.
        fetch_after: Coroutine function (ts, limit) returning up to limit
            (timestamp, value) pairs strictly after ts. A ts of None means from the
            start of the data source.
        initial_key: Instant bootstrap fetches after (None starts at the beginning).
        trim: Optional trim policy overriding the cursor configured one.
    """

    async def fetch(key: Optional[datetime], options: FetchOptions) -> List[Entry[datetime, Any]]:
        logger = LoggerManager.get_logger(__name__)

        if options.direction is Direction.BEFORE:
            if key is None:
                return []  # Default start has nothing before it
            logger.debug(f"Timestamp fetch before {key.isoformat()} limit={options.limit}")
            rows = await fetch_before(key, options.limit)
        else:
            logger.debug(f"Timestamp fetch after {key.isoformat() if key else 'start'} limit={options.limit}")
            rows = await fetch_after(key, options.limit)

        entries = [Entry(ts, value) for ts, value in rows]
        entries.sort(key=lambda entry: entry.key)
        return entries

    return CursorStrategy(kind=StrategyKind.TIMESTAMP, fetch=fetch, initial_key=initial_key, trim=trim)
