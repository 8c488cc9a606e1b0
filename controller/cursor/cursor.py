###########EXTERNAL IMPORTS############

import asyncio
from typing import Dict, Generic, List, Optional, Sequence, TypeVar

#######################################

#############LOCAL IMPORTS#############

from controller.cursor.strategy import CursorStrategy, TrimPolicy
from controller.cursor.trim import get_trim_policy, check_trim_result
from controller.exceptions import CursorConfigError, InvalidRangeError, StrategyFetchError, TrimPolicyError
from model.cursor import CursorConfig, Direction, Entry, FetchOptions, TrimParams
from model.struct.sliding_window import EntryWindow
from util.debug import LoggerManager

#######################################

K = TypeVar("K")
V = TypeVar("V")


class BufferedCursor(Generic[K, V]):
    """
    Bidirectional, memory-bounded window over a totally ordered data source.

    The cursor holds at most config.capacity entries, ascending by key and
    without duplicates, and grows the window on demand by calling the
    strategy fetch one unit at a time. After every load the trim policy
    evicts entries to keep the window within capacity.

    Concurrency:
        bootstrap, load_before, load_after and ensure_range acquire an internal
        asyncio.Lock before reading the window and hold it across the strategy
        fetch, so overlapping calls run one at a time in arrival order. A batch
        is applied only once the fetch has returned, which makes a failed or
        cancelled fetch a no-op on the window and the boundary flags.

    Attributes:
        strategy (CursorStrategy): Fetch policy for the data source.
        config (CursorConfig): Sizing and behaviour settings.
        window (EntryWindow): Current in-memory entries.
        reached (Dict[Direction, bool]): Boundary flags per direction.
        window_start (int): Absolute index of the first window entry.
    """

    @staticmethod
    def check_config_valid(config: CursorConfig) -> None:
        """
        Validates the cursor configuration.

        Raises:
            CursorConfigError: If a size is not a positive integer.
        """

        if not isinstance(config.unit_size, int) or config.unit_size < 1:
            raise CursorConfigError(f"Unit size must be a positive integer, got {config.unit_size}")
        if not isinstance(config.retention_units, int) or config.retention_units < 1:
            raise CursorConfigError(f"Retention units must be a positive integer, got {config.retention_units}")

    def __init__(self, strategy: CursorStrategy[K, V], config: CursorConfig):

        BufferedCursor.check_config_valid(config)

        self.strategy = strategy
        self.config = config
        self.window: EntryWindow[K, V] = EntryWindow()
        self.reached: Dict[Direction, bool] = {Direction.BEFORE: False, Direction.AFTER: False}
        self.window_start = 0
        self.trim_policy: TrimPolicy = strategy.trim or get_trim_policy(config.trim_mode)
        self.lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self.window)

    @property
    def unit_size(self) -> int:
        return self.config.unit_size

    @property
    def capacity(self) -> int:
        return self.config.capacity

    ##########     P U B L I C     O P E R A T I O N S     ##########

    async def bootstrap(self, direction: Direction = Direction.AFTER, cancel_event: Optional[asyncio.Event] = None) -> None:
        """
        Seeds the window with one unit fetched from the strategy initial key.

        Any previous window content and boundary flags are discarded once the
        fetch succeeds. An empty result leaves an empty window with the
        boundary flag of the direction set.

        Args:
            direction: Direction of the seeding fetch.
            cancel_event: Optional cancellation token for the fetch.

        Raises:
            StrategyFetchError: If the strategy fetch fails.
        """

        logger = LoggerManager.get_logger(__name__)

        async with self.lock:
            batch = await self._fetch(self.strategy.initial_key, direction, cancel_event, use_window_keys=False)
            if batch is None:
                return

            self._reseed(batch, direction)
            logger.debug(f"Bootstrapped {self.strategy.kind.value} cursor with {len(self.window)} entries ({direction.value})")

    async def load_before(self, from_key: Optional[K] = None, cancel_event: Optional[asyncio.Event] = None) -> None:
        """
        Extends the window by one unit before the front entry (or before from_key).

        No-op when the start of the data source has already been reached.

        Raises:
            StrategyFetchError: If the strategy fetch fails.
        """

        async with self.lock:
            await self._load(Direction.BEFORE, from_key, cancel_event)

    async def load_after(self, from_key: Optional[K] = None, cancel_event: Optional[asyncio.Event] = None) -> None:
        """
        Extends the window by one unit after the back entry (or after from_key).

        No-op when the end of the data source has already been reached.

        Raises:
            StrategyFetchError: If the strategy fetch fails.
        """

        async with self.lock:
            await self._load(Direction.AFTER, from_key, cancel_event)

    async def ensure_range(self, start_index: int, stop_index: int, cancel_event: Optional[asyncio.Event] = None) -> None:
        """
        Makes every absolute index in [start_index, stop_index] present in the window.

        Best effort: stops early when a boundary of the data source is reached.
        Gaps adjacent to the window are filled with incremental loads. A range
        farther than one capacity from the window (or any range not starting at
        0 on an empty window) is reached with a jump fetch anchored at
        start_index, after which the remainder is filled incrementally. The jump
        is also taken when the incremental loads evicted part of the range.
        Index-keyed strategies only jump; the others fill incrementally. Calling
        it again with the same range issues no fetch.

        Args:
            start_index: First absolute index of the range.
            stop_index: Last absolute index of the range (inclusive).
            cancel_event: Optional cancellation token passed to every fetch.

        Raises:
            InvalidRangeError: If the range lies entirely below index 0 or is wider
                than the window capacity.
            StrategyFetchError: If a strategy fetch fails.
        """

        logger = LoggerManager.get_logger(__name__)

        if start_index > stop_index:
            start_index, stop_index = stop_index, start_index
        if stop_index < 0:
            raise InvalidRangeError(f"Range [{start_index}, {stop_index}] is outside the addressable indexes")
        start_index = max(0, start_index)
        if stop_index - start_index + 1 > self.capacity:
            raise InvalidRangeError(f"Range [{start_index}, {stop_index}] is wider than the window capacity {self.capacity}")

        async with self.lock:
            if self._covers(start_index, stop_index):
                return

            if self._is_jump(start_index, stop_index):
                logger.debug(f"Jumping to range [{start_index}, {stop_index}] from [{self.get_window_start()}, {self.get_window_end()}]")
                if not await self._jump(start_index, cancel_event):
                    return

            await self._fill(start_index, stop_index, cancel_event)

            if not self.strategy.index_keyed or not self._is_missing(start_index, stop_index) or self._cancelled(cancel_event):
                return

            # Loading one side evicted the other end of the range
            logger.debug(f"Range [{start_index}, {stop_index}] not covered by [{self.get_window_start()}, {self.get_window_end()}], jumping")
            if await self._jump(start_index, cancel_event):
                await self._fill(start_index, stop_index, cancel_event)

    def get_item(self, key: K) -> Optional[Entry[K, V]]:
        """Returns the entry stored under key, or None when it is not loaded."""

        return self.window.get(key)

    def is_key_loaded(self, key: K) -> bool:
        return key in self.window

    def to_array(self) -> List[Entry[K, V]]:
        """Returns a snapshot of the window, ascending by key."""

        return self.window.get_list()

    def is_at_start(self) -> bool:
        return self.reached[Direction.BEFORE]

    def is_at_end(self) -> bool:
        return self.reached[Direction.AFTER]

    def get_window_start(self) -> int:
        return self.window_start

    def get_window_end(self) -> int:
        return self.window_start + len(self.window) - 1

    def close(self) -> None:
        """Discards the window and the boundary flags."""

        self.window.clear()
        self.reached = {Direction.BEFORE: False, Direction.AFTER: False}
        self.window_start = 0

    ##########     I N T E R N A L     M E T H O D S     ##########

    async def _fetch(
        self,
        key: Optional[K],
        direction: Direction,
        cancel_event: Optional[asyncio.Event],
        use_window_keys: bool = True,
    ) -> Optional[List[Entry[K, V]]]:
        """
        Calls the strategy fetch for one unit.

        Returns:
            The fetched batch, or None when the fetch was cancelled through
            cancel_event.

        Raises:
            StrategyFetchError: If the strategy fetch raises.
        """

        logger = LoggerManager.get_logger(__name__)

        front = self.window.peek_front() if use_window_keys else None
        back = self.window.peek_back() if use_window_keys else None
        options = FetchOptions(
            direction=direction,
            limit=self.unit_size,
            current_start_key=front.key if front else None,
            current_end_key=back.key if back else None,
            cancel_event=cancel_event,
        )

        try:
            batch = list(await self.strategy.fetch(key, options))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Strategy fetch {direction.value} from key {key} failed: {e}")
            raise StrategyFetchError(f"Failed to fetch {direction.value} key {key}: {e}") from e

        if options.cancelled:
            logger.debug(f"Discarded cancelled fetch {direction.value} from key {key}")
            return None

        return batch

    def _accept_batch(self, batch: Sequence[Entry[K, V]], direction: Direction) -> List[Entry[K, V]]:
        """
        Filters a fetched batch down to the entries insertable at the matching end.

        Entries whose key is already loaded are dropped. Entries that would break
        the ascending order at the insertion end are dropped with a warning.
        """

        logger = LoggerManager.get_logger(__name__)

        front = self.window.peek_front()
        back = self.window.peek_back()
        accepted: List[Entry[K, V]] = []
        duplicates = 0
        misplaced = 0

        for entry in batch:
            if entry.key in self.window:
                duplicates += 1
                continue
            if accepted and not accepted[-1].key < entry.key:
                misplaced += 1
                continue
            if direction is Direction.AFTER and back is not None and not back.key < entry.key:
                misplaced += 1
                continue
            if direction is Direction.BEFORE and front is not None and not entry.key < front.key:
                misplaced += 1
                continue
            accepted.append(entry)

        if duplicates:
            logger.debug(f"Dropped {duplicates} already loaded entries from {direction.value} batch")
        if misplaced:
            logger.warning(f"Dropped {misplaced} out of order entries from {direction.value} batch")

        return accepted

    def _index_of_front(self) -> int:
        front = self.window.peek_front()
        if front is None or self.strategy.index_of is None:
            return 0
        return self.strategy.index_of(front.key)

    async def _load(self, direction: Direction, from_key: Optional[K], cancel_event: Optional[asyncio.Event]) -> None:
        """
        Extends the window by one unit in direction. The cursor lock must be held.
        """

        logger = LoggerManager.get_logger(__name__)

        if self.reached[direction]:
            logger.debug(f"Skipping {direction.value} load, boundary already reached")
            return

        if from_key is None:
            edge = self.window.peek_back() if direction is Direction.AFTER else self.window.peek_front()
            from_key = edge.key if edge else None

        batch = await self._fetch(from_key, direction, cancel_event)
        if batch is None:
            return

        self._apply_batch(batch, direction)

    def _apply_batch(self, batch: Sequence[Entry[K, V]], direction: Direction) -> None:
        """
        Inserts a fetched batch, updates the boundary flags and trims the window.

        The trim result is validated on the prospective window before anything is
        mutated.

        Raises:
            TrimPolicyError: If the trim policy returns invalid counts.
        """

        logger = LoggerManager.get_logger(__name__)

        was_empty = len(self.window) == 0
        front = self.window.peek_front()
        back = self.window.peek_back()
        entries = self._accept_batch(batch, direction)
        current = self.window.get_list()
        prospective = current + entries if direction is Direction.AFTER else entries + current

        params: TrimParams = TrimParams(
            unit_size=self.unit_size,
            retention_units=self.config.retention_units,
            fetched_count=len(entries),
            fetch_start_key=front.key if front else None,
            fetch_end_key=back.key if back else None,
        )
        drop_front, drop_back = self.trim_policy(prospective, direction, params)
        check_trim_result(len(prospective), drop_front, drop_back, params)

        reached = dict(self.reached)
        if self.config.reset_opposite_boundary:
            reached[direction.opposite] = False
        if len(batch) < self.unit_size:
            reached[direction] = True
        if drop_front:
            reached[Direction.BEFORE] = False
        if drop_back:
            reached[Direction.AFTER] = False

        if direction is Direction.AFTER:
            self.window.extend_back(entries)
        else:
            self.window.extend_front(entries)
            self.window_start -= len(entries)
        if was_empty:
            self.window_start = self._index_of_front()

        self.window.drop_front(drop_front)
        self.window.drop_back(drop_back)
        self.window_start += drop_front
        self.reached = reached

        if drop_front or drop_back:
            logger.debug(f"Trimmed {drop_front} front and {drop_back} back entries after {direction.value} load")

    @staticmethod
    def _cancelled(cancel_event: Optional[asyncio.Event]) -> bool:
        return cancel_event is not None and cancel_event.is_set()

    def _covers(self, start_index: int, stop_index: int) -> bool:
        return len(self.window) > 0 and self.window_start <= start_index and stop_index <= self.get_window_end()

    def _is_missing(self, start_index: int, stop_index: int) -> bool:
        """True when part of the range is outside the window on a side whose boundary is not reached."""

        if stop_index > self.get_window_end() and not self.reached[Direction.AFTER]:
            return True
        return start_index < self.window_start and not self.reached[Direction.BEFORE]

    def _is_jump(self, start_index: int, stop_index: int) -> bool:
        """True when the range is too far from the window to be reached incrementally."""

        if not self.strategy.index_keyed:
            return False
        if len(self.window) == 0:
            return start_index > 0
        return start_index > self.get_window_end() + self.capacity or stop_index < self.window_start - self.capacity

    async def _fill(self, start_index: int, stop_index: int, cancel_event: Optional[asyncio.Event]) -> None:
        """
        Loads units after and then before the window until the range is covered. The cursor lock must be held.
        """

        while stop_index > self.get_window_end() and not self.reached[Direction.AFTER] and not self._cancelled(cancel_event):
            window_end = self.get_window_end()
            await self._load(Direction.AFTER, None, cancel_event)
            if self.get_window_end() <= window_end:
                break

        while start_index < self.window_start and not self.reached[Direction.BEFORE] and not self._cancelled(cancel_event):
            window_start = self.window_start
            await self._load(Direction.BEFORE, None, cancel_event)
            if self.window_start >= window_start:
                break

    async def _jump(self, start_index: int, cancel_event: Optional[asyncio.Event]) -> bool:
        """
        Replaces the window with the unit starting at start_index. The cursor lock must be held.

        Returns:
            True if the window was replaced, False if the fetch was cancelled or
            returned nothing (range past the end of the data source).
        """

        logger = LoggerManager.get_logger(__name__)

        key_at = self.strategy.key_at
        if key_at is None:
            return False

        anchor = key_at(start_index - 1) if start_index > 0 else None

        batch = await self._fetch(anchor, Direction.AFTER, cancel_event)
        if batch is None:
            return False
        if not batch:
            logger.debug(f"Jump to index {start_index} returned no entries, window kept")
            return False

        self._reseed(batch, Direction.AFTER)
        return True

    def _reseed(self, batch: Sequence[Entry[K, V]], direction: Direction) -> None:
        """
        Replaces the window with a single fetched batch.

        The previous window and flags are restored if the batch cannot be applied.
        """

        previous = (self.window.get_list(), dict(self.reached), self.window_start)
        self.close()
        try:
            self._apply_batch(batch, direction)
        except TrimPolicyError:
            entries, self.reached, self.window_start = previous
            self.window.replace(entries)
            raise
