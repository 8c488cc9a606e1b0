###########EXTERNAL IMPORTS############

import asyncio
import random
from bisect import bisect_left, bisect_right
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

#######################################

#############LOCAL IMPORTS#############

from model.cursor import FetchOptions
from model.logs import LogLevel, LogRecord, Subsystem

#######################################

MESSAGES = [
    "Request processed successfully",
    "Database connection established",
    "User authentication failed",
    "Cache miss occurred",
    "Queue job completed",
    "Worker started processing",
    "API rate limit exceeded",
    "Database query timeout",
    "Invalid token provided",
    "Cache hit ratio improved",
    "Queue overflow detected",
    "Worker health check passed",
    "Request validation failed",
    "Database transaction rolled back",
    "Session expired",
    "Cache eviction triggered",
    "Queue processing delayed",
    "Worker memory usage high",
]

HISTORY_SPAN = timedelta(days=30)


def generate_log_records(count: int, seed: int = 0, end: Optional[datetime] = None) -> List[LogRecord]:
    """
    Generates synthetic log records in chronological order.

    Timestamps are drawn at random over the HISTORY_SPAN preceding end, sorted,
    and ids are assigned sequentially after sorting so id order matches time
    order. Equal seeds give equal datasets.

    Args:
        count: Number of records.
        seed: Random seed.
        end: Latest possible timestamp (defaults to now, UTC).
    """

    rng = random.Random(seed)
    end = end or datetime.now(timezone.utc)
    start = end - HISTORY_SPAN
    span_seconds = HISTORY_SPAN.total_seconds()

    timestamps = sorted(start + timedelta(seconds=rng.random() * span_seconds) for _ in range(count))
    return [
        LogRecord(
            id=i,
            timestamp=ts,
            level=rng.choice(list(LogLevel)),
            subsystem=rng.choice(list(Subsystem)),
            message=rng.choice(MESSAGES),
        )
        for i, ts in enumerate(timestamps)
    ]


class LogStore:
    """
    In-memory log source exposing the queries used by the cursor strategies.

    Provides index range reads for index_strategy and strictly before / after
    timestamp queries for timestamp_strategy. An optional delay simulates
    network latency.

    Attributes:
        records (List[LogRecord]): Records in chronological order.
        delay (float): Seconds awaited before answering each query.
    """

    def __init__(self, records: Sequence[LogRecord], delay: float = 0.0):
        self.records: List[LogRecord] = list(records)
        self.timestamps = [record.timestamp for record in self.records]
        self.delay = delay

    def __len__(self) -> int:
        return len(self.records)

    async def fetch_range(self, start: int, stop: int, options: Optional[FetchOptions] = None) -> List[LogRecord]:
        """Returns the records with index in [start, stop)."""

        if self.delay:
            await asyncio.sleep(self.delay)
        return self.records[max(0, start) : max(0, stop)]

    async def fetch_before(self, ts: Optional[datetime], limit: int) -> List[Tuple[datetime, LogRecord]]:
        """Returns up to limit records strictly before ts, ascending."""

        if self.delay:
            await asyncio.sleep(self.delay)
        if ts is None:
            return []
        stop = bisect_left(self.timestamps, ts)
        return [(record.timestamp, record) for record in self.records[max(0, stop - limit) : stop]]

    async def fetch_after(self, ts: Optional[datetime], limit: int) -> List[Tuple[datetime, LogRecord]]:
        """Returns up to limit records strictly after ts (from the first record when ts is None), ascending."""

        if self.delay:
            await asyncio.sleep(self.delay)
        start = 0 if ts is None else bisect_right(self.timestamps, ts)
        return [(record.timestamp, record) for record in self.records[start : start + limit]]
