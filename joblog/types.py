from dataclasses import dataclass
from datetime import time
from enum import Enum, auto


# Failure reasons recorded by the ingest metrics
TOO_FEW_FIELDS = "too_few_fields"
BAD_TIMESTAMP = "bad_timestamp"
BAD_PID = "bad_pid"


class EventKind(Enum):
    """
    Lifecycle marker carried by a log line.

    Anything that is not START or END is still a valid line: it
    creates the job record but touches neither timestamp.
    """
    START = auto()
    END = auto()
    OTHER = auto()

    @classmethod
    def from_field(cls, text: str) -> "EventKind":
        value = text.strip().upper()
        if value == "START":
            return cls.START
        if value == "END":
            return cls.END
        return cls.OTHER


@dataclass(frozen=True)
class JobEvent:
    """
    One well-formed line of the job log.

    This is the ONLY structure the store consumes.
    """
    timestamp: time
    description: str
    kind: EventKind
    pid: int
    raw: str


@dataclass
class ParseFailure:
    raw: str
    reason: str
