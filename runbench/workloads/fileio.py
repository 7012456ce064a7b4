"""
File I/O workloads: sequential write/read and concurrent batches.
"""

import itertools
import logging
from concurrent.futures import ThreadPoolExecutor, Future
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Iterable, Optional

from ..benchmark.runner import SuiteResult
from .base import BaseSuite, WorkloadError

logger = logging.getLogger(__name__)

LINE_PADDING = "x" * 50
BASE_NAME = "test_python"


@dataclass
class BatchResult:
    """Files touched by one concurrent batch."""
    paths: List[Path] = field(default_factory=list)
    bytes_written: int = 0
    bytes_read: int = 0


def create_test_data(lines: int) -> str:
    """Build a text blob of ``lines`` lines: 'Line {i}: ' followed by 50 'x'."""
    return "".join(f"Line {i}: {LINE_PADDING}\n" for i in range(lines))


def write_file(path: Path, data: str) -> Path:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(data)
    return path


def read_file(path: Path) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def remove_file(path: Path) -> None:
    Path(path).unlink(missing_ok=True)


def remove_files(paths: Iterable[Path]) -> None:
    for path in paths:
        remove_file(path)


def concurrent_paths(base_path: Path, file_count: int) -> List[Path]:
    """Paths of a batch, suffixed with the worker index so they never collide."""
    return [Path(f"{base_path}_concurrent_{i}.txt") for i in range(file_count)]


def _wait_all(futures: List[Future]) -> list:
    """
    Wait for every future and return their results in submission order.

    Raises:
        WorkloadError: If any operation in the batch failed
    """
    results = []
    errors = []
    for future in futures:
        try:
            results.append(future.result())
        except Exception as e:
            errors.append(e)

    if errors:
        raise WorkloadError(
            f"{len(errors)}/{len(futures)} operations failed: {errors[0]}"
        ) from errors[0]
    return results


def concurrent_file_ops(
    base_path: Path,
    file_count: int,
    data: str,
    max_workers: Optional[int] = None,
) -> BatchResult:
    """
    Write ``file_count`` files concurrently, then read them back concurrently.

    The call returns only after every operation has finished. Files are
    left in place for the caller to delete, unless the batch fails, in
    which case they are removed before the error propagates.

    Raises:
        WorkloadError: If any write or read in the batch failed
    """
    paths = concurrent_paths(base_path, file_count)

    try:
        with ThreadPoolExecutor(max_workers=max_workers or max(file_count, 1)) as executor:
            _wait_all([executor.submit(write_file, p, data) for p in paths])
            contents = _wait_all([executor.submit(read_file, p) for p in paths])
    except WorkloadError:
        remove_files(paths)
        raise

    return BatchResult(
        paths=paths,
        bytes_written=len(data.encode("utf-8")) * file_count,
        bytes_read=sum(len(c.encode("utf-8")) for c in contents),
    )


class FileIOSuite(BaseSuite):
    """
    File write/read timings at several file sizes plus concurrent batches.

    Scratch files live under ``config.data_dir`` and are deleted right
    after each measurement.
    """

    name = "fileio"
    display_name = "File I/O"
    go_program_dir = "fileio"

    def _run(self, result: SuiteResult) -> None:
        data_dir = Path(self.config.data_dir)
        data_dir.mkdir(parents=True, exist_ok=True)
        base_path = data_dir / BASE_NAME

        for size in self.config.file_sizes:
            self.reporter.print_section(f"Testing with {size} lines")
            data = create_test_data(size)

            result.add(self.measure_write(base_path, size, data))
            result.add(self.measure_read(base_path, size, data))

        self.reporter.print_section("Concurrent File Operations")
        for count in self.config.concurrent_file_counts:
            result.add(self.measure_concurrent(base_path, count))

    def measure_write(self, base_path: Path, size: int, data: str):
        """Time writing ``data`` to a fresh file on every run."""
        self.reporter.console.print(f"Testing file write ({len(data)} bytes)...")
        counter = itertools.count()

        def write_once() -> Path:
            return write_file(Path(f"{base_path}_{size}_{next(counter)}.txt"), data)

        return self.runner.measure(
            f"File Write ({size} lines)",
            self.config.iterations,
            write_once,
            describe=lambda path: "",
            cleanup=remove_file,
        )

    def measure_read(self, base_path: Path, size: int, data: str):
        """Time reading back a file holding ``data``."""
        self.reporter.console.print("Testing file read...")
        path = write_file(Path(f"{base_path}_{size}.txt"), data)

        try:
            return self.runner.measure(
                f"File Read ({size} lines)",
                self.config.iterations,
                lambda: read_file(path),
                describe=lambda text: f"({len(text)} bytes)",
            )
        finally:
            remove_file(path)

    def measure_concurrent(self, base_path: Path, file_count: int):
        """Time one concurrent batch of writes followed by reads."""
        self.reporter.console.print(f"Testing concurrent file operations ({file_count} files)...")
        data = create_test_data(1000)

        stats = self.runner.measure(
            f"Concurrent File Ops ({file_count} files)",
            1,
            lambda: concurrent_file_ops(base_path, file_count, data),
            describe=lambda batch: f"{len(batch.paths)} files, {batch.bytes_read} bytes read",
            cleanup=lambda batch: remove_files(batch.paths),
        )

        if stats.has_data and file_count:
            self.reporter.console.print(f"Average per file: {stats.average / file_count:.3f}ms")
        else:
            logger.warning(f"Concurrent batch of {file_count} files failed")

        return stats
