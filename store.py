import threading
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional

from joblog.types import EventKind, JobEvent


# Any fixed day works; both ends of a job are placed on it.
_REFERENCE_DAY = date(2000, 1, 1)


@dataclass
class JobRecord:
    pid: int
    description: str
    start: Optional[time] = None
    end: Optional[time] = None

    def apply(self, event: JobEvent):
        if event.kind is EventKind.START:
            self.start = event.timestamp
        elif event.kind is EventKind.END:
            self.end = event.timestamp

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    def duration(self) -> Optional[timedelta]:
        """
        end - start, both taken as times on the same day.

        A job that crosses midnight comes out negative.
        """
        if not self.is_complete:
            return None
        return (
            datetime.combine(_REFERENCE_DAY, self.end)
            - datetime.combine(_REFERENCE_DAY, self.start)
        )


class JobStore:
    """
    pid -> JobRecord, safe for concurrent ingest workers.

    Keys are spread over a fixed set of locks; every update for a pid
    runs under that pid's lock, so lookup, mutation and write-back are
    atomic per key. Updates to pids on different stripes never wait on
    each other.
    """

    def __init__(self, stripes: int = 16):
        if stripes < 1:
            raise ValueError("stripes must be >= 1")
        self._jobs: Dict[int, JobRecord] = {}
        self._locks: List[threading.Lock] = [
            threading.Lock() for _ in range(stripes)
        ]

    # ---------- Internal helpers ----------

    def _lock_for(self, pid: int) -> threading.Lock:
        return self._locks[hash(pid) % len(self._locks)]

    # ---------- Write API ----------

    def upsert(self, event: JobEvent) -> JobRecord:
        with self._lock_for(event.pid):
            job = self._jobs.get(event.pid)
            if job is None:
                job = JobRecord(pid=event.pid, description=event.description)
            job.apply(event)
            self._jobs[event.pid] = job
            return job

    # ---------- Read API ----------

    def get(self, pid: int) -> Optional[JobRecord]:
        return self._jobs.get(pid)

    def snapshot(self) -> Dict[int, JobRecord]:
        return dict(self._jobs)

    def __len__(self) -> int:
        return len(self._jobs)
