"""Event data models."""

from dataclasses import dataclass
from enum import Enum

MAX_ID = 2**64  # activity/parent ids are unsigned 64-bit


class Kind(str, Enum):
    """Operational outcome category of an event."""

    OK = "OK"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    PANIC = "PANIC"  # viewers raise an alert for these


class Severity(str, Enum):
    """Intensity of an event, orthogonal to its kind."""

    NONE = "NONE"
    LOW = "LOW"
    MID = "MID"
    HIGH = "HIGH"


@dataclass(frozen=True)
class Event:
    """One admitted, identity-assigned log record."""

    kind: Kind
    severity: Severity
    timestamp: int  # microseconds, monotonic clock
    activity_id: int  # 0 = ungrouped
    sequence_id: int  # 1-based, gap-free per recorder
    parent_id: int  # 0 = none
    message: str
