###########EXTERNAL IMPORTS############

import asyncio
from enum import Enum
from dataclasses import dataclass
from typing import Generic, TypeVar, Optional

#######################################

#############LOCAL IMPORTS#############

#######################################

K = TypeVar("K")  # Key type (totally ordered)
V = TypeVar("V")  # Value type (opaque)


class Direction(str, Enum):
    """Direction in which the cursor window is extended."""

    BEFORE = "before"
    AFTER = "after"

    @property
    def opposite(self) -> "Direction":
        return Direction.AFTER if self is Direction.BEFORE else Direction.BEFORE


class TrimMode(str, Enum):
    """Built-in eviction policies selectable from the configuration."""

    DIRECTIONAL = "directional"  # Drop from the end opposite to the extension
    CENTERED = "centered"  # Keep half the capacity on each side of the midpoint


@dataclass(frozen=True)
class Entry(Generic[K, V]):
    """
    Immutable key/value pair held by the cursor window.

    Attributes:
        key: Unique, totally ordered key defined by the data source.
        value: Opaque payload.
    """

    key: K
    value: V


@dataclass
class FetchOptions(Generic[K]):
    """
    Parameters handed to a strategy fetch.

    Attributes:
        direction: Direction of the fetch relative to the cursor key.
        limit: Number of entries requested (one unit).
        current_start_key: Key of the first window entry before the fetch, or None.
        current_end_key: Key of the last window entry before the fetch, or None.
        cancel_event: Optional cancellation token. When set by the time the fetch
            returns, the batch is discarded.
    """

    direction: Direction
    limit: int
    current_start_key: Optional[K] = None
    current_end_key: Optional[K] = None
    cancel_event: Optional[asyncio.Event] = None

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()


@dataclass
class TrimParams(Generic[K]):
    """
    Context given to a trim policy after a load.

    Attributes:
        unit_size: Entries requested per fetch.
        retention_units: Units kept in memory.
        fetched_count: Entries inserted by the load that triggered the trim.
        fetch_start_key: First window key before the load, or None if the window was empty.
        fetch_end_key: Last window key before the load, or None if the window was empty.
    """

    unit_size: int
    retention_units: int
    fetched_count: int
    fetch_start_key: Optional[K] = None
    fetch_end_key: Optional[K] = None

    @property
    def capacity(self) -> int:
        return self.unit_size * self.retention_units


@dataclass
class CursorConfig:
    """
    Cursor sizing and behaviour settings.

    Attributes:
        unit_size: Number of entries requested per fetch.
        retention_units: Number of units kept in the window. Capacity is
            retention_units * unit_size.
        trim_mode: Eviction policy applied when the window exceeds capacity.
        reset_opposite_boundary: If True, a completed fetch in one direction clears
            the boundary flag of the opposite direction.
    """

    unit_size: int
    retention_units: int = 2
    trim_mode: TrimMode = TrimMode.DIRECTIONAL
    reset_opposite_boundary: bool = True

    @property
    def capacity(self) -> int:
        return self.unit_size * self.retention_units


@dataclass
class ServiceConfig:
    """
    Settings for the log window HTTP service.

    Attributes:
        host: Address the HTTP server binds to.
        port: Port the HTTP server listens on.
        log_level: Name of the logging level (e.g. "INFO").
        mock_log_count: Number of synthetic log entries served.
    """

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    mock_log_count: int = 10000
