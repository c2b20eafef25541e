import datetime
import random

JOB_NAMES = ["backup", "etl-load", "report-build", "cache-warm", "index-rebuild",
             "invoice-run", "thumbnail-gen", "log-rotate", "db-vacuum", "email-digest"]


def generate_job_logs(
    filename="logs.log",
    jobs=1000,
    seed=None,
    incomplete_ratio=0.05,
    malformed_ratio=0.01,
    shuffle=True,
):
    """
    Write a synthetic job log and return the number of lines written.

    Each job gets a START line and, unless it is picked as incomplete,
    an END line 1 second to 15 minutes later. A few malformed lines are
    mixed in. The same seed always produces the same file.
    """
    rng = random.Random(seed)
    day = datetime.date(2026, 1, 3)
    current_time = datetime.datetime.combine(day, datetime.time(8, 0, 0))

    lines = []
    for pid in range(1, jobs + 1):
        name = f"{rng.choice(JOB_NAMES)} {pid}"

        # Simple jump in time
        current_time += datetime.timedelta(seconds=rng.randint(0, 5))
        start = current_time
        end = start + datetime.timedelta(seconds=rng.randint(1, 15 * 60))

        lines.append(f"{start:%H:%M:%S}, {name}, START, {pid}")
        if rng.random() >= incomplete_ratio:
            lines.append(f"{end:%H:%M:%S}, {name}, END, {pid}")

        if rng.random() < malformed_ratio:
            lines.append(rng.choice([
                "bad,line",
                f"{start:%H:%M}, {name}, START, {pid}",
                f"{start:%H:%M:%S}, {name}, END, pid-{pid}",
            ]))

    if shuffle:
        rng.shuffle(lines)

    with open(filename, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")

    return len(lines)


if __name__ == "__main__":
    written = generate_job_logs()
    print(f"Generated {written} lines in logs.log")
