import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from itertools import islice
from typing import Dict, Iterable, Iterator, List, Optional

from config import Settings
from joblog.ingest import IngestMetrics, ingest_line
from store import JobRecord, JobStore

logger = logging.getLogger(__name__)


@dataclass
class AggregationResult:
    jobs: Dict[int, JobRecord]
    metrics: IngestMetrics
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """False when the source could not be fully read."""
        return self.error is None


def _batched(lines: Iterable[str], size: int) -> Iterator[List[str]]:
    it = iter(lines)
    while True:
        batch = list(islice(it, size))
        if not batch:
            return
        yield batch


class LogAggregator:
    """
    Folds START/END lines into one JobRecord per pid.

    Pipeline:
      raw lines
        -> batches
          -> worker threads (parse + per-pid upsert)
            -> pid -> JobRecord mapping

    Line order is not preserved across workers; only per-pid updates
    are serialized, by the store.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def _ingest_batch(
        self,
        batch: List[str],
        store: JobStore,
        metrics: IngestMetrics,
    ):
        for line in batch:
            event = ingest_line(line, self.settings.time_format, metrics)
            if event is not None:
                store.upsert(event)

    def aggregate_lines(self, lines: Iterable[str]) -> AggregationResult:
        store = JobStore()
        metrics = IngestMetrics()

        with ThreadPoolExecutor(max_workers=self.settings.workers) as executor:
            futures = [
                executor.submit(self._ingest_batch, batch, store, metrics)
                for batch in _batched(lines, self.settings.batch_size)
            ]
            for future in futures:
                future.result()

        return AggregationResult(jobs=store.snapshot(), metrics=metrics)

    def process_logs(self, path: str) -> AggregationResult:
        """
        Read and aggregate a whole log file.

        Undecodable bytes are replaced, so such a line parses or fails
        like any other. If the file cannot be opened or read, the
        failure is logged and stored on the result; whatever was
        aggregated before it is still returned.
        """
        store = JobStore()
        metrics = IngestMetrics()
        error = None

        with ThreadPoolExecutor(max_workers=self.settings.workers) as executor:
            futures = []
            try:
                with open(path, encoding="utf-8", errors="replace") as f:
                    for batch in _batched(f, self.settings.batch_size):
                        futures.append(
                            executor.submit(self._ingest_batch, batch, store, metrics)
                        )
            except OSError as e:
                logger.error("Error reading the log file %s: %s", path, e)
                error = str(e)

            for future in futures:
                future.result()

        return AggregationResult(jobs=store.snapshot(), metrics=metrics, error=error)


def process_logs(path: str, settings: Optional[Settings] = None) -> AggregationResult:
    return LogAggregator(settings or Settings()).process_logs(path)
