import io

import pytest
from rich.console import Console

from runbench.benchmark.reporter import Reporter
from runbench.benchmark.runner import BenchmarkConfig, BenchmarkRunner


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def reporter(output):
    return Reporter(Console(file=output, width=200, highlight=False, color_system=None))


@pytest.fixture
def runner(reporter):
    return BenchmarkRunner(reporter=reporter)


@pytest.fixture
def config(tmp_path):
    return BenchmarkConfig(
        iterations=2,
        large_iterations=1,
        fib_sizes=(10,),
        large_fib_sizes=(100,),
        file_sizes=(10,),
        concurrent_file_counts=(3,),
        data_dir=tmp_path / "data",
        results_dir=tmp_path / "results",
        go_dir=tmp_path / "go",
        http_timeout=1.0,
        ready_timeout=0.0,
    )


class FakeClock:
    """Clock advancing by a fixed step on every call."""

    def __init__(self, step=0.5):
        self.now = 0.0
        self.step = step

    def __call__(self):
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def fake_clock():
    return FakeClock()
