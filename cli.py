import logging

from aggregator import LogAggregator
from config import load_settings
from report import STDOUT, ReportGenerator


# ---------------- Main ----------------

def main() -> int:
    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Configuration error: {e}")
        print("Nothing was processed.")
        return 0

    logging.basicConfig(
        level=logging.getLevelName(settings.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    # ---- Ingest ----
    aggregation = LogAggregator(settings).process_logs(settings.log_file)
    metrics = aggregation.metrics

    # ---- Report ----
    result = ReportGenerator(settings).generate(aggregation.jobs, settings.report_file)

    # Keep the summary off stdout when the report itself goes there.
    if settings.report_file == STDOUT:
        return 0

    print("\nIngestion summary")
    print(f"  Parsed lines : {metrics.parsed}")
    print(f"  Failed lines : {metrics.failed}")

    if metrics.failures_by_reason:
        print("  Failure reasons:")
        for reason, count in sorted(metrics.failures_by_reason.items()):
            print(f"    {reason}: {count}")

    if not aggregation.ok:
        print(f"  Read error   : {aggregation.error}")
        print("  NOTE: the log could not be fully read; the report is incomplete.")

    counts = result.counts()
    print("\nReport summary")
    print(f"  Jobs       : {len(result.lines)}")
    print(f"  Warnings   : {counts['warning']}")
    print(f"  Errors     : {counts['error']}")
    print(f"  Incomplete : {counts['incomplete']}")

    if result.ok:
        print(f"\nReport written to {result.output}")
    else:
        print(f"\nCould not write report to {result.output}: {result.error}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
