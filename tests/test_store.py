import threading
from datetime import time, timedelta

import pytest

from joblog.types import EventKind, JobEvent
from store import JobRecord, JobStore


def event(pid, kind, ts, description="job"):
    return JobEvent(timestamp=ts, description=description, kind=kind, pid=pid, raw="")


class TestJobRecord:
    def test_duration(self):
        job = JobRecord(1, "job", start=time(10, 0, 0), end=time(10, 3, 30))
        assert job.is_complete
        assert job.duration() == timedelta(minutes=3, seconds=30)

    def test_missing_end(self):
        job = JobRecord(1, "job", start=time(10, 0, 0))
        assert not job.is_complete
        assert job.duration() is None

    def test_cross_midnight_is_negative(self):
        job = JobRecord(1, "job", start=time(23, 59, 0), end=time(0, 1, 0))
        assert job.duration() == timedelta(minutes=-1438)

    def test_other_event_leaves_times_alone(self):
        job = JobRecord(1, "job", start=time(10, 0, 0))
        job.apply(event(1, EventKind.OTHER, time(11, 0, 0)))
        assert job.start == time(10, 0, 0)
        assert job.end is None


class TestJobStore:
    def test_create_then_update(self):
        store = JobStore()
        store.upsert(event(1, EventKind.START, time(10, 0, 0), "first"))
        store.upsert(event(1, EventKind.END, time(10, 5, 0), "second"))

        job = store.get(1)
        assert job.description == "first"
        assert job.start == time(10, 0, 0)
        assert job.end == time(10, 5, 0)
        assert len(store) == 1

    def test_later_start_overwrites(self):
        store = JobStore()
        store.upsert(event(1, EventKind.START, time(10, 0, 0)))
        store.upsert(event(1, EventKind.START, time(10, 2, 0)))
        assert store.get(1).start == time(10, 2, 0)

    def test_other_event_creates_record(self):
        store = JobStore()
        store.upsert(event(9, EventKind.OTHER, time(10, 0, 0)))
        job = store.get(9)
        assert job is not None
        assert job.start is None and job.end is None

    def test_snapshot_is_a_copy(self):
        store = JobStore()
        store.upsert(event(1, EventKind.START, time(10, 0, 0)))
        snap = store.snapshot()
        store.upsert(event(2, EventKind.START, time(10, 0, 0)))
        assert list(snap) == [1]

    def test_invalid_stripes(self):
        with pytest.raises(ValueError):
            JobStore(stripes=0)

    def test_concurrent_upserts(self):
        store = JobStore(stripes=4)
        pids = range(200)

        def worker(kind, ts):
            for pid in pids:
                store.upsert(event(pid, kind, ts))

        threads = [
            threading.Thread(target=worker, args=(EventKind.START, time(10, 0, 0))),
            threading.Thread(target=worker, args=(EventKind.END, time(10, 7, 0))),
            threading.Thread(target=worker, args=(EventKind.OTHER, time(9, 0, 0))),
            threading.Thread(target=worker, args=(EventKind.END, time(10, 7, 0))),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        snap = store.snapshot()
        assert len(snap) == 200
        for pid, job in snap.items():
            assert job.pid == pid
            assert job.start == time(10, 0, 0)
            assert job.end == time(10, 7, 0)
