from pathlib import Path
from unittest.mock import patch

import pytest

from runbench.workloads import fileio
from runbench.workloads.base import WorkloadError
from runbench.workloads.fileio import (
    FileIOSuite,
    concurrent_file_ops,
    concurrent_paths,
    create_test_data,
    read_file,
    remove_file,
    write_file,
)


def test_create_test_data_line_format():
    data = create_test_data(3)

    lines = data.splitlines(keepends=True)
    assert len(lines) == 3
    assert lines[0] == "Line 0: " + "x" * 50 + "\n"
    assert lines[2] == "Line 2: " + "x" * 50 + "\n"


def test_write_then_read_1000_lines(tmp_path):
    data = create_test_data(1000)
    path = write_file(tmp_path / "blob.txt", data)

    read_back = read_file(path)

    written_bytes = len(data.encode("utf-8"))
    assert len(read_back.encode("utf-8")) == written_bytes
    assert path.stat().st_size == written_bytes
    assert read_back.count("\n") == 1000


def test_remove_file_ignores_missing(tmp_path):
    remove_file(tmp_path / "never-created.txt")


def test_concurrent_batch_creates_distinct_files(tmp_path):
    base = tmp_path / "test_python"
    data = create_test_data(1000)

    batch = concurrent_file_ops(base, 10, data)

    assert len(batch.paths) == 10
    assert len(set(batch.paths)) == 10
    assert all(p.exists() for p in batch.paths)
    assert batch.bytes_read == batch.bytes_written == len(data) * 10

    fileio.remove_files(batch.paths)
    assert not any(p.exists() for p in batch.paths)


def test_concurrent_batch_measured_once(tmp_path, runner):
    base = tmp_path / "test_python"
    data = create_test_data(1000)

    stats = runner.measure(
        "batch",
        1,
        lambda: concurrent_file_ops(base, 10, data),
        cleanup=lambda batch: fileio.remove_files(batch.paths),
    )

    assert stats.successful_runs == 1
    assert len(stats.results) == 1
    assert len(stats.results[0].return_value.paths) == 10
    assert list(tmp_path.iterdir()) == []


def test_concurrent_batch_failure_fails_whole_batch(tmp_path):
    base = tmp_path / "test_python"
    failing = concurrent_paths(base, 4)[2]
    real_write = fileio.write_file

    def flaky_write(path, data):
        if Path(path) == failing:
            raise OSError("no space left on device")
        return real_write(path, data)

    with patch.object(fileio, "write_file", side_effect=flaky_write):
        with pytest.raises(WorkloadError, match="1/4 operations failed"):
            concurrent_file_ops(base, 4, "payload")

    # partial writes are removed
    assert list(tmp_path.iterdir()) == []


def test_failed_batch_is_excluded_from_aggregate(tmp_path, runner):
    with patch.object(fileio, "read_file", side_effect=OSError("boom")):
        stats = runner.measure(
            "batch",
            1,
            lambda: concurrent_file_ops(tmp_path / "x", 3, "payload"),
        )

    assert stats.successful_runs == 0
    assert "WorkloadError" in stats.errors[0]


def test_file_io_suite_cleans_up(config, runner, output):
    result = FileIOSuite(config=config, runner=runner).run()

    labels = [s.label for s in result.stats]
    assert labels == [
        "File Write (10 lines)",
        "File Read (10 lines)",
        "Concurrent File Ops (3 files)",
    ]
    assert all(s.successful_runs == s.attempted_runs for s in result.stats)

    read_stats = result.stats[1]
    expected = len(create_test_data(10))
    assert all(len(r.return_value) == expected for r in read_stats.results)

    # data directory exists and every scratch file is gone
    assert config.data_dir.is_dir()
    assert list(config.data_dir.iterdir()) == []
    assert "Average per file:" in output.getvalue()


def test_file_io_suite_tolerates_existing_data_dir(config, runner):
    config.data_dir.mkdir(parents=True)

    result = FileIOSuite(config=config, runner=runner).run()

    assert len(result.stats) == 3
