###########EXTERNAL IMPORTS############

from enum import Enum
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

#######################################

#############LOCAL IMPORTS#############

from model.cursor import Direction, Entry, FetchOptions, TrimParams

#######################################

K = TypeVar("K")
V = TypeVar("V")

FetchFunc = Callable[[Optional[Any], FetchOptions], Awaitable[List[Entry]]]
TrimPolicy = Callable[[Sequence[Entry], Direction, TrimParams], Tuple[int, int]]


class StrategyKind(str, Enum):
    """Key space handled by a strategy."""

    INDEX = "index"  # Keys are absolute integer positions
    PAGE = "page"  # Keys are positions mapped to pages of the fetch limit
    TIMESTAMP = "timestamp"  # Keys are comparable instants
    CUSTOM = "custom"


@dataclass(frozen=True)
class CursorStrategy(Generic[K, V]):
    """
    Fetch policy consumed by the buffered cursor.

    A strategy is a plain value: the cursor only relies on the capabilities
    below and never inspects the kind beyond logging.

    Fetch contract:
        - Direction.AFTER: entries with keys strictly greater than the cursor key
          (dataset start when the key is None), ascending.
        - Direction.BEFORE: entries with keys strictly smaller than the cursor key,
          ascending (oldest first).
        - Fewer than options.limit entries means the end of the dataset was reached
          in that direction. The cursor marks the boundary permanently on a short
          batch, so a strategy must not return one for transient reasons.

    Attributes:
        kind: Key space handled by the strategy.
        fetch: Coroutine function fetching one batch.
        initial_key: Key used by bootstrap. None means the default start.
        index_of: Optional mapping from a key to its absolute index.
        key_at: Optional mapping from an absolute index to its key. Required for
            jumps in ensure_range.
        trim: Optional trim policy overriding the cursor configured one.
    """

    kind: StrategyKind
    fetch: FetchFunc
    initial_key: Optional[K] = None
    index_of: Optional[Callable[[K], int]] = None
    key_at: Optional[Callable[[int], K]] = None
    trim: Optional[TrimPolicy] = None

    @property
    def index_keyed(self) -> bool:
        """True when keys can be mapped to and from absolute indexes."""

        return self.index_of is not None and self.key_at is not None
