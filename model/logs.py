###########EXTERNAL IMPORTS############

from enum import Enum
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any

#######################################

#############LOCAL IMPORTS#############

#######################################


class LogLevel(str, Enum):
    """Severity of a log record."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    FATAL = "FATAL"


class Subsystem(str, Enum):
    """Subsystem that emitted a log record."""

    API = "API"
    DATABASE = "DATABASE"
    AUTH = "AUTH"
    CACHE = "CACHE"
    QUEUE = "QUEUE"
    WORKER = "WORKER"


@dataclass(frozen=True)
class LogRecord:
    """
    Single log line served by the log window service.

    Attributes:
        id: Position of the record in chronological order.
        timestamp: Time the record was emitted (timezone-aware).
        level: Severity.
        subsystem: Emitting subsystem.
        message: Log text.
    """

    id: int
    timestamp: datetime
    level: LogLevel
    subsystem: Subsystem
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "subsystem": self.subsystem.value,
            "message": self.message,
        }
