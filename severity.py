from datetime import timedelta
from enum import Enum


class DurationFlag(str, Enum):
    OK = "OK"
    WARNING = "WARNING"
    ERROR = "ERROR"


def classify(
    duration: timedelta,
    warning_time: timedelta,
    error_time: timedelta,
) -> DurationFlag:
    # Both thresholds are strict: exactly 5:00 is OK, exactly 10:00 a warning.
    if duration > error_time:
        return DurationFlag.ERROR
    if duration > warning_time:
        return DurationFlag.WARNING
    return DurationFlag.OK


def _minutes(delta: timedelta) -> str:
    minutes = delta.total_seconds() / 60
    return str(int(minutes)) if minutes.is_integer() else f"{minutes:g}"


def flag_suffix(
    flag: DurationFlag,
    warning_time: timedelta,
    error_time: timedelta,
) -> str:
    if flag is DurationFlag.ERROR:
        return f" ERROR: Job took longer than {_minutes(error_time)} minutes."
    if flag is DurationFlag.WARNING:
        return f" WARNING: Job took longer than {_minutes(warning_time)} minutes."
    return ""
