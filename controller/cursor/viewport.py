###########EXTERNAL IMPORTS############

from typing import Optional

#######################################

#############LOCAL IMPORTS#############

from controller.cursor.cursor import BufferedCursor
from model.cursor import Direction

#######################################


def edge_direction(cursor: BufferedCursor, visible_start: int, visible_stop: int, threshold: int) -> Optional[Direction]:
    """
    Returns the window edge the visible rows are approaching.

    Args:
        cursor: Cursor backing the list.
        visible_start: First visible absolute index.
        visible_stop: Last visible absolute index.
        threshold: Distance in rows from a window edge that counts as approaching.

    Returns:
        Direction.BEFORE or Direction.AFTER, or None when both edges are farther
        than threshold or the data source boundary on that side was reached.
    """

    if len(cursor) == 0:
        return None

    to_start = visible_start - cursor.get_window_start()
    to_end = cursor.get_window_end() - visible_stop
    near_start = to_start < threshold and not cursor.is_at_start()
    near_end = to_end < threshold and not cursor.is_at_end()

    if near_start and near_end:
        return Direction.BEFORE if to_start < to_end else Direction.AFTER
    if near_end:
        return Direction.AFTER
    if near_start:
        return Direction.BEFORE
    return None


def _keeps_visible(cursor: BufferedCursor, direction: Direction, visible_start: int, visible_stop: int) -> bool:
    """True if one more unit in direction would not evict visible rows (directional eviction)."""

    if direction is Direction.AFTER:
        projected_start = max(cursor.get_window_start(), cursor.get_window_end() + cursor.unit_size - cursor.capacity + 1)
        return visible_start >= projected_start
    projected_end = min(cursor.get_window_end(), cursor.get_window_start() - cursor.unit_size + cursor.capacity - 1)
    return visible_stop <= projected_end


async def follow_viewport(cursor: BufferedCursor, visible_start: int, visible_stop: int, threshold: int) -> Optional[Direction]:
    """
    Keeps the cursor window ahead of a scrolling viewport.

    Ensures the visible rows are loaded, then loads one more unit toward the
    edge the viewport is approaching when that does not evict visible rows.

    Returns:
        The direction of the extra load, or None when no extra load was issued.
    """

    await cursor.ensure_range(visible_start, visible_stop)

    direction = edge_direction(cursor, visible_start, visible_stop, threshold)
    if direction is None or not _keeps_visible(cursor, direction, visible_start, visible_stop):
        return None

    if direction is Direction.AFTER:
        await cursor.load_after()
    else:
        await cursor.load_before()
    return direction
