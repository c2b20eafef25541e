from aggregator import process_logs
from loggen import generate_job_logs


class TestGenerateJobLogs:
    def test_complete_jobs(self, tmp_path):
        path = tmp_path / "logs.log"
        written = generate_job_logs(str(path), jobs=300, seed=1,
                                    incomplete_ratio=0.0, malformed_ratio=0.0)
        assert written == 600

        result = process_logs(str(path))
        assert result.metrics.failed == 0
        assert len(result.jobs) == 300
        assert all(job.is_complete for job in result.jobs.values())

    def test_same_seed_same_file(self, tmp_path):
        a, b = tmp_path / "a.log", tmp_path / "b.log"
        generate_job_logs(str(a), jobs=50, seed=3)
        generate_job_logs(str(b), jobs=50, seed=3)
        assert a.read_text() == b.read_text()

    def test_malformed_lines_are_dropped(self, tmp_path):
        path = tmp_path / "logs.log"
        written = generate_job_logs(str(path), jobs=200, seed=5, malformed_ratio=0.5)

        result = process_logs(str(path))
        assert result.metrics.failed > 0
        assert result.metrics.parsed + result.metrics.failed == written
        assert len(result.jobs) == 200
