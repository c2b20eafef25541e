import re
from datetime import datetime, time
from typing import List, Optional, Union

from .types import (
    BAD_PID,
    BAD_TIMESTAMP,
    TOO_FEW_FIELDS,
    EventKind,
    JobEvent,
    ParseFailure,
)


MIN_FIELDS = 4

# Zero-padded 24h clock, e.g. 09:05:00
CLOCK_RE = re.compile(r"^\d{2}:\d{2}:\d{2}$")

PID_RE = re.compile(r"^[+-]?[0-9]+$")


def split_fields(line: str) -> List[str]:
    """
    Split a raw line on commas.

    Trailing empty fields are dropped, so "a,b,c," counts as three
    fields and is skipped like any other short line.
    """
    fields = line.rstrip("\r\n").split(",")
    while fields and fields[-1] == "":
        fields.pop()
    return fields


def parse_timestamp(text: str, time_format: str) -> Optional[time]:
    text = text.strip()
    if not CLOCK_RE.match(text):
        return None
    try:
        return datetime.strptime(text, time_format).time()
    except ValueError:
        return None


def parse_pid(text: str) -> Optional[int]:
    text = text.strip()
    if not PID_RE.match(text):
        return None
    return int(text)


def parse_line(line: str, time_format: str) -> Union[JobEvent, ParseFailure]:
    """
    Parse lines like:
      11:35:23, job one, START, 1

    Fields past the fourth are ignored. Never throws: anything that
    cannot become a JobEvent comes back as a ParseFailure.
    """
    fields = split_fields(line)
    if len(fields) < MIN_FIELDS:
        return ParseFailure(raw=line, reason=TOO_FEW_FIELDS)

    pid = parse_pid(fields[3])
    if pid is None:
        return ParseFailure(raw=line, reason=BAD_PID)

    timestamp = parse_timestamp(fields[0], time_format)
    if timestamp is None:
        return ParseFailure(raw=line, reason=BAD_TIMESTAMP)

    return JobEvent(
        timestamp=timestamp,
        description=fields[1].strip(),
        kind=EventKind.from_field(fields[2]),
        pid=pid,
        raw=line.rstrip("\r\n"),
    )
