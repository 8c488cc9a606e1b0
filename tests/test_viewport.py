###########EXTERNAL IMPORTS############

import pytest
from typing import List

#######################################

#############LOCAL IMPORTS#############

from controller.cursor.cursor import BufferedCursor
from controller.cursor.strategies import index_strategy
from controller.cursor.viewport import edge_direction, follow_viewport
from model.cursor import CursorConfig, Direction, FetchOptions

#######################################

ITEMS = [f"item{i}" for i in range(100)]


class DummySource:
    def __init__(self):
        self.calls = []

    async def fetch_range(self, start: int, stop: int, options: FetchOptions) -> List[str]:
        self.calls.append((start, stop))
        return ITEMS[start:stop]


def keys(cursor: BufferedCursor) -> List[int]:
    return [entry.key for entry in cursor.to_array()]


async def make_cursor(source: DummySource) -> BufferedCursor:
    cursor = BufferedCursor(index_strategy(source.fetch_range), CursorConfig(unit_size=5, retention_units=2))
    await cursor.bootstrap()
    await cursor.load_before()
    await cursor.load_after()
    return cursor


def test_edge_direction_on_empty_cursor():
    cursor = BufferedCursor(index_strategy(DummySource().fetch_range), CursorConfig(unit_size=5))
    assert edge_direction(cursor, 0, 3, 2) is None


@pytest.mark.asyncio
async def test_follow_viewport_loads_toward_approached_edge():
    source = DummySource()
    cursor = BufferedCursor(index_strategy(source.fetch_range), CursorConfig(unit_size=5, retention_units=4))
    await cursor.bootstrap()
    await cursor.load_before()

    direction = await follow_viewport(cursor, 0, 3, threshold=2)
    assert direction is Direction.AFTER
    assert keys(cursor) == list(range(10))


@pytest.mark.asyncio
async def test_follow_viewport_far_from_edges():
    source = DummySource()
    cursor = await make_cursor(source)
    calls = len(source.calls)

    assert await follow_viewport(cursor, 3, 5, threshold=2) is None
    assert len(source.calls) == calls


@pytest.mark.asyncio
async def test_follow_viewport_does_not_evict_visible_rows():
    source = DummySource()
    cursor = await make_cursor(source)
    calls = len(source.calls)

    assert edge_direction(cursor, 2, 8, threshold=3) is Direction.AFTER
    assert await follow_viewport(cursor, 2, 8, threshold=3) is None
    assert len(source.calls) == calls
    assert keys(cursor) == list(range(10))


@pytest.mark.asyncio
async def test_follow_viewport_ignores_reached_boundary():
    source = DummySource()
    config = CursorConfig(unit_size=5, retention_units=4, reset_opposite_boundary=False)
    cursor = BufferedCursor(index_strategy(source.fetch_range), config)
    await cursor.bootstrap()
    await cursor.load_before()
    await cursor.load_after()
    assert cursor.is_at_start() is True
    calls = len(source.calls)

    assert await follow_viewport(cursor, 0, 2, threshold=3) is None
    assert len(source.calls) == calls
