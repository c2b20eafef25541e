import logging
import threading
from typing import Dict, Optional

from .parsers import parse_line
from .types import TOO_FEW_FIELDS, JobEvent, ParseFailure

logger = logging.getLogger(__name__)


# ---------- Metrics ----------

class IngestMetrics:
    """Counters shared by every ingest worker."""

    def __init__(self):
        self.parsed = 0
        self.failed = 0
        self.failures_by_reason: Dict[str, int] = {}
        self._lock = threading.Lock()

    def record_success(self):
        with self._lock:
            self.parsed += 1

    def record_failure(self, reason: str):
        with self._lock:
            self.failed += 1
            self.failures_by_reason[reason] = (
                self.failures_by_reason.get(reason, 0) + 1
            )


# ---------- Ingest ----------

def ingest_line(
    line: str,
    time_format: str,
    metrics: Optional[IngestMetrics] = None,
) -> Optional[JobEvent]:
    """
    Ingest a single raw line and convert it into a JobEvent.

    Short lines are skipped quietly; a bad timestamp or pid gets a
    warning. Returns None for every dropped line.
    """
    result = parse_line(line, time_format)

    if isinstance(result, ParseFailure):
        if metrics is not None:
            metrics.record_failure(result.reason)
        if result.reason == TOO_FEW_FIELDS:
            logger.debug("Skipping short line: %r", result.raw)
        else:
            logger.warning("Dropping malformed line (%s): %r", result.reason, result.raw)
        return None

    if metrics is not None:
        metrics.record_success()
    return result
