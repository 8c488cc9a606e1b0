###########EXTERNAL IMPORTS############

import pytest
from typing import List, Sequence, Tuple

#######################################

#############LOCAL IMPORTS#############

from controller.cursor.cursor import BufferedCursor
from controller.cursor.strategies import index_strategy
from controller.cursor.trim import centered_trim, check_trim_result, directional_trim, get_trim_policy
from controller.exceptions import TrimPolicyError
from model.cursor import CursorConfig, Direction, Entry, FetchOptions, TrimMode, TrimParams

#######################################

ITEMS = [f"item{i}" for i in range(20)]
PARAMS = TrimParams(unit_size=5, retention_units=2, fetched_count=5)


async def fetch_range(start: int, stop: int, options: FetchOptions) -> List[str]:
    return ITEMS[start:stop]


def entries(count: int) -> List[Entry]:
    return [Entry(i, i) for i in range(count)]


def keys(cursor: BufferedCursor) -> List[int]:
    return [entry.key for entry in cursor.to_array()]


def test_directional_trim_drops_opposite_end():
    assert directional_trim(entries(12), Direction.AFTER, PARAMS) == (2, 0)
    assert directional_trim(entries(12), Direction.BEFORE, PARAMS) == (0, 2)
    assert directional_trim(entries(10), Direction.AFTER, PARAMS) == (0, 0)


def test_centered_trim_keeps_half_capacity_around_midpoint():
    assert centered_trim(entries(15), Direction.AFTER, PARAMS) == (3, 2)
    assert centered_trim(entries(15), Direction.BEFORE, PARAMS) == (2, 3)
    assert centered_trim(entries(11), Direction.AFTER, PARAMS) == (0, 1)
    assert centered_trim(entries(8), Direction.AFTER, PARAMS) == (0, 0)


def test_get_trim_policy():
    assert get_trim_policy(TrimMode.DIRECTIONAL) is directional_trim
    assert get_trim_policy("centered") is centered_trim
    with pytest.raises(ValueError):
        get_trim_policy("newest")


def test_check_trim_result_rejects_invalid_counts():
    check_trim_result(15, 5, 0, PARAMS)
    with pytest.raises(TrimPolicyError):
        check_trim_result(15, -1, 6, PARAMS)
    with pytest.raises(TrimPolicyError):
        check_trim_result(15, 2, 0, PARAMS)
    with pytest.raises(TrimPolicyError):
        check_trim_result(15, 8, 4, PARAMS)
    check_trim_result(3, 0, 0, PARAMS)


@pytest.mark.asyncio
async def test_cursor_with_centered_trim():
    cursor = BufferedCursor(index_strategy(fetch_range), CursorConfig(unit_size=5, retention_units=2, trim_mode=TrimMode.CENTERED))
    await cursor.bootstrap()
    await cursor.load_after()
    await cursor.load_after()
    assert keys(cursor) == list(range(3, 13))
    assert cursor.get_window_start() == 3
    assert cursor.get_window_end() == 12
    assert cursor.is_at_end() is False


@pytest.mark.asyncio
async def test_strategy_trim_overrides_configured_policy():
    def keep_newest(window: Sequence[Entry], direction: Direction, params: TrimParams) -> Tuple[int, int]:
        return max(0, len(window) - params.capacity), 0

    cursor = BufferedCursor(index_strategy(fetch_range, trim=keep_newest), CursorConfig(unit_size=5, retention_units=2))
    await cursor.bootstrap()
    await cursor.load_after()
    await cursor.load_after()
    assert keys(cursor) == list(range(5, 15))

    await cursor.load_before()
    assert keys(cursor) == list(range(5, 15))
    assert cursor.get_window_start() == 5


@pytest.mark.asyncio
async def test_invalid_policy_leaves_window_unchanged():
    def keep_everything(window: Sequence[Entry], direction: Direction, params: TrimParams) -> Tuple[int, int]:
        return 0, 0

    cursor = BufferedCursor(index_strategy(fetch_range, trim=keep_everything), CursorConfig(unit_size=5, retention_units=2))
    await cursor.bootstrap()
    await cursor.load_after()
    with pytest.raises(TrimPolicyError):
        await cursor.load_after()
    assert keys(cursor) == list(range(10))
    assert cursor.get_window_start() == 0


def test_centered_trim_keeps_fetched_entries():
    short_batch = TrimParams(unit_size=5, retention_units=2, fetched_count=2)
    assert centered_trim(entries(12), Direction.AFTER, short_batch) == (2, 0)
    assert centered_trim(entries(12), Direction.BEFORE, short_batch) == (0, 2)

    single = TrimParams(unit_size=1, retention_units=4, fetched_count=1)
    assert centered_trim(entries(5), Direction.AFTER, single) == (1, 0)
    assert centered_trim(entries(5), Direction.BEFORE, single) == (0, 1)


@pytest.mark.asyncio
async def test_centered_trim_reaches_end_of_data():
    items = ITEMS[:8]
    calls = []

    async def fetch_items(start: int, stop: int, options: FetchOptions) -> List[str]:
        calls.append((start, stop))
        return items[start:stop]

    cursor = BufferedCursor(index_strategy(fetch_items), CursorConfig(unit_size=3, retention_units=2, trim_mode=TrimMode.CENTERED))
    await cursor.bootstrap()
    for _ in range(6):
        await cursor.load_after()

    assert cursor.is_at_end() is True
    assert keys(cursor) == list(range(2, 8))
    assert calls == [(0, 3), (3, 6), (6, 9)]


@pytest.mark.asyncio
async def test_centered_trim_reaches_start_of_data():
    items = ITEMS[:8]

    async def fetch_items(start: int, stop: int, options: FetchOptions) -> List[str]:
        return items[start:stop]

    config = CursorConfig(unit_size=3, retention_units=2, trim_mode=TrimMode.CENTERED)
    cursor = BufferedCursor(index_strategy(fetch_items, initial_key=7), config)
    await cursor.bootstrap(Direction.BEFORE)
    for _ in range(4):
        await cursor.load_before()

    assert cursor.is_at_start() is True
    assert keys(cursor) == list(range(6))
    assert cursor.get_window_start() == 0
