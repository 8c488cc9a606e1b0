###########EXTERNAL IMPORTS############

from typing import Dict, Sequence, Tuple

#######################################

#############LOCAL IMPORTS#############

from controller.cursor.strategy import TrimPolicy
from controller.exceptions import TrimPolicyError
from model.cursor import Direction, Entry, TrimMode, TrimParams

#######################################

# Trim policies receive the window after insertion of the fetched batch and
# return how many entries to drop from the front and from the back.


def directional_trim(entries: Sequence[Entry], direction: Direction, params: TrimParams) -> Tuple[int, int]:
    """
    Drops the excess from the end opposite to the extension direction.

    Extending AFTER drops from the front, extending BEFORE drops from the back.
    """

    excess = len(entries) - params.capacity
    if excess <= 0:
        return 0, 0
    if direction is Direction.AFTER:
        return excess, 0
    return 0, excess


def centered_trim(entries: Sequence[Entry], direction: Direction, params: TrimParams) -> Tuple[int, int]:
    """
    Keeps capacity // 2 entries on each side of the window midpoint.

    The kept slice is shifted toward the extension end so that at least half of
    the fetched batch survives, and all of it when the batch was short. A short
    batch marks a dataset edge, which must stay loaded for the boundary flag to
    hold, and every load keeps at least one new entry.
    """

    length = len(entries)
    capacity = params.capacity
    if length <= capacity:
        return 0, 0

    midpoint = length // 2
    lower = max(0, midpoint - capacity // 2)
    upper = min(length, lower + capacity)
    lower = max(0, upper - capacity)

    fetched = min(params.fetched_count, length)
    required = fetched if fetched < params.unit_size else (fetched + 1) // 2
    if direction is Direction.AFTER:
        upper = max(upper, length - fetched + required)
        lower = max(0, upper - capacity)
    else:
        lower = min(lower, fetched - required)
        upper = min(length, lower + capacity)
    return lower, length - upper


TRIM_POLICIES: Dict[TrimMode, TrimPolicy] = {
    TrimMode.DIRECTIONAL: directional_trim,
    TrimMode.CENTERED: centered_trim,
}


def get_trim_policy(mode: TrimMode | str) -> TrimPolicy:
    """
    Returns the built-in trim policy registered for mode.

    Raises:
        ValueError: If mode is not a known trim mode.
    """

    return TRIM_POLICIES[TrimMode(mode)]


def check_trim_result(length: int, drop_front: int, drop_back: int, params: TrimParams) -> None:
    """
    Validates the counts returned by a trim policy.

    Args:
        length: Window length before trimming.
        drop_front: Entries the policy drops from the front.
        drop_back: Entries the policy drops from the back.
        params: Trim context.

    Raises:
        TrimPolicyError: If a count is negative, the result exceeds capacity, or the
            result would be shorter than one fetch unit (or the whole window when it
            is smaller than a unit).
    """

    if drop_front < 0 or drop_back < 0:
        raise TrimPolicyError(f"Trim policy returned negative counts ({drop_front}, {drop_back})")

    remaining = length - drop_front - drop_back
    if remaining > params.capacity:
        raise TrimPolicyError(f"Trim policy kept {remaining} entries, capacity is {params.capacity}")
    if remaining < min(length, params.unit_size):
        raise TrimPolicyError(f"Trim policy kept {remaining} entries, less than one unit of {params.unit_size}")
