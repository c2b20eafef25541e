import logging
import sys
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, List, Mapping, Optional, Tuple

from config import Settings
from severity import DurationFlag, classify, flag_suffix
from store import JobRecord

logger = logging.getLogger(__name__)


STDOUT = "-"


# ---------- Output Model ----------

@dataclass(frozen=True)
class ReportLine:
    pid: int
    text: str
    flag: Optional[DurationFlag]  # None when START or END is missing


@dataclass
class ReportResult:
    lines: List[ReportLine]
    output: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def counts(self) -> Dict[str, int]:
        tally = Counter(
            "incomplete" if line.flag is None else line.flag.value.lower()
            for line in self.lines
        )
        return {key: tally.get(key, 0) for key in ("ok", "warning", "error", "incomplete")}


# ---------- Formatting ----------

def format_duration(delta: timedelta) -> Tuple[int, int]:
    """
    Split a duration into whole minutes and leftover seconds.

    Minutes truncate toward zero and the seconds keep the same sign,
    so -90s is (-1, -30) rather than (-2, 30).
    """
    total = int(delta.total_seconds())
    minutes = int(total / 60)
    return minutes, total - minutes * 60


def format_job(job: JobRecord, settings: Settings) -> ReportLine:
    duration = job.duration()
    if duration is None:
        return ReportLine(
            pid=job.pid,
            text=f"PID {job.pid} ({job.description}) is missing a START or END event.",
            flag=None,
        )

    minutes, seconds = format_duration(duration)
    flag = classify(duration, settings.warning_time, settings.error_time)
    text = (
        f"PID {job.pid} ({job.description}): Duration: {minutes} min {seconds} sec."
        + flag_suffix(flag, settings.warning_time, settings.error_time)
    )
    return ReportLine(pid=job.pid, text=text, flag=flag)


# ---------- Generator ----------

class ReportGenerator:
    def __init__(self, settings: Settings):
        self.settings = settings

    def build(self, jobs: Mapping[int, JobRecord]) -> List[ReportLine]:
        # Workers only read their own record; map() keeps input order.
        with ThreadPoolExecutor(max_workers=self.settings.workers) as executor:
            return list(
                executor.map(
                    lambda job: format_job(job, self.settings),
                    jobs.values(),
                )
            )

    def write(self, lines: List[ReportLine], output: str) -> Optional[str]:
        """
        Write one line per job to `output` ("-" for stdout).

        Returns the error text on failure, None on success.
        """
        text = "".join(line.text + "\n" for line in lines)

        if output == STDOUT:
            try:
                sys.stdout.write(text)
                sys.stdout.flush()
            except OSError as e:
                logger.error("Error writing the report to stdout: %s", e)
                return str(e)
            return None

        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            logger.error("Error writing the report file %s: %s", output, e)
            return str(e)
        return None

    def generate(self, jobs: Mapping[int, JobRecord], output: str) -> ReportResult:
        lines = self.build(jobs)
        error = self.write(lines, output)
        return ReportResult(lines=lines, output=output, error=error)


def generate_report(
    jobs: Mapping[int, JobRecord],
    output: str,
    settings: Optional[Settings] = None,
) -> ReportResult:
    return ReportGenerator(settings or Settings()).generate(jobs, output)
