import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


TIME_FORMAT = "%H:%M:%S"

ENV_PREFIX = "JOBWATCH_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    log_file: str = "logs.log"
    report_file: str = "report.out"
    time_format: str = TIME_FORMAT
    warning_time: timedelta = timedelta(minutes=5)
    error_time: timedelta = timedelta(minutes=10)
    workers: int = 4
    batch_size: int = 256
    log_level: str = "WARNING"


# ---------- Env helpers ----------

def _env(name: str, default: str) -> str:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(name: str, default: int, minimum: Optional[int] = None) -> int:
    raw = _env(name, str(default))
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from e

    if minimum is not None and value < minimum:
        raise ValueError(f"{ENV_PREFIX}{name} must be >= {minimum}, got {value}")
    return value


# ---------- Loader ----------

def load_settings() -> Settings:
    """
    Build the process-wide settings once, from the environment.

    A local .env file is merged in at import time. The result is
    immutable and is handed to the aggregator and the report generator.
    """
    warning_minutes = _env_int("WARNING_MINUTES", 5, minimum=0)
    error_minutes = _env_int("ERROR_MINUTES", 10, minimum=0)
    if warning_minutes > error_minutes:
        raise ValueError(
            f"warning threshold ({warning_minutes} min) exceeds "
            f"error threshold ({error_minutes} min)"
        )

    log_level = _env("LOG_LEVEL", "WARNING").upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
        )

    return Settings(
        log_file=_env("LOG_FILE", "logs.log"),
        report_file=_env("REPORT_FILE", "report.out"),
        warning_time=timedelta(minutes=warning_minutes),
        error_time=timedelta(minutes=error_minutes),
        workers=_env_int("WORKERS", 4, minimum=1),
        batch_size=_env_int("BATCH_SIZE", 256, minimum=1),
        log_level=log_level,
    )
