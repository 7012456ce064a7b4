"""
Benchmark runner for timing repeated workload invocations.
"""

import time
import logging
from pathlib import Path
from typing import List, Dict, Any, Optional, Callable, Tuple
from dataclasses import dataclass, field

from ..config import Config
from .metrics import MetricsCollector, AggregateStats, RunOutcome, WorkloadResult
from .reporter import Reporter

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark session."""
    iterations: int = 5
    large_iterations: int = 3

    # Workload sizes
    fib_sizes: Tuple[int, ...] = (30, 32, 35)
    large_fib_sizes: Tuple[int, ...] = (1000, 5000, 10000)
    file_sizes: Tuple[int, ...] = (1000, 10000, 100000)
    concurrent_file_counts: Tuple[int, ...] = (10, 50)

    # Filesystem
    data_dir: Path = Config.DATA_DIR
    results_dir: Path = Config.RESULTS_DIR
    go_dir: Path = Config.GO_DIR

    # HTTP
    http_host: str = "localhost"
    http_requests: int = 5
    http_timeout: float = 10.0
    ready_timeout: float = 30.0
    ports: Dict[str, int] = field(default_factory=lambda: {"python": 3000, "go": 3001})

    # Child process timeouts (seconds)
    script_timeout: int = 120
    suite_timeout: int = 300

    @classmethod
    def from_env(cls) -> "BenchmarkConfig":
        """Build a configuration from Config (environment and .env)."""
        return cls(
            iterations=Config.ITERATIONS,
            large_iterations=Config.LARGE_ITERATIONS,
            fib_sizes=Config.FIB_SIZES,
            large_fib_sizes=Config.LARGE_FIB_SIZES,
            file_sizes=Config.FILE_SIZES,
            concurrent_file_counts=Config.CONCURRENT_FILE_COUNTS,
            data_dir=Config.DATA_DIR,
            results_dir=Config.RESULTS_DIR,
            go_dir=Config.GO_DIR,
            http_host=Config.HTTP_HOST,
            http_requests=Config.HTTP_REQUESTS,
            http_timeout=Config.HTTP_TIMEOUT,
            ready_timeout=Config.READY_TIMEOUT,
            ports=Config.get_target_ports(),
            script_timeout=Config.SCRIPT_TIMEOUT,
            suite_timeout=Config.SUITE_TIMEOUT,
        )


@dataclass
class SuiteResult:
    """Result of a complete suite run."""
    suite: str
    runtime: str = "python"
    stats: List[AggregateStats] = field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = None

    def add(self, stats: AggregateStats) -> AggregateStats:
        self.stats.append(stats)
        return stats

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "suite": self.suite,
            "runtime": self.runtime,
            "stats": [s.to_dict() for s in self.stats],
            "metadata": self.metadata or {},
        }


def _default_describe(value: Any) -> str:
    return f"Result: {value}"


class BenchmarkRunner:
    """
    Times repeated invocations of an arbitrary workload and summarizes them.

    The runner knows nothing about what a workload does: it only needs a
    zero-argument callable and a label. Each run is timed with
    ``time.perf_counter``; a run that raises is logged and left out of
    the aggregate, and the remaining runs still execute.

    Example:
        runner = BenchmarkRunner()
        stats = runner.measure(
            "Fibonacci Iterative",
            5,
            lambda: fibonacci_iterative(35),
        )
    """

    def __init__(
        self,
        reporter: Optional[Reporter] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        """
        Initialize benchmark runner.

        Args:
            reporter: Console reporter for run and summary lines
            clock: Monotonic clock returning seconds
        """
        self.reporter = reporter or Reporter()
        self._clock = clock

    def measure(
        self,
        label: str,
        iterations: int,
        workload: Callable[[], Any],
        describe: Optional[Callable[[Any], str]] = None,
        cleanup: Optional[Callable[[Any], None]] = None,
    ) -> AggregateStats:
        """
        Run a workload several times and aggregate the durations.

        Args:
            label: Human readable name of the workload
            iterations: Number of runs (>= 1)
            workload: Zero-argument callable to time
            describe: Formats a run's return value for display
            cleanup: Called with the return value after the timed window

        Returns:
            AggregateStats over the successful runs
        """
        describe = describe or _default_describe
        collector = MetricsCollector(label)

        if iterations < 1:
            logger.warning(f"{label}: iterations={iterations}, nothing to measure")

        for run_index in range(1, iterations + 1):
            outcome = self._run_once(label, run_index, workload, cleanup)
            collector.record(outcome)
            self.reporter.print_run(outcome, describe)

        stats = collector.calculate()
        self.reporter.print_stats(stats)
        return stats

    def _run_once(
        self,
        label: str,
        run_index: int,
        workload: Callable[[], Any],
        cleanup: Optional[Callable[[Any], None]],
    ) -> RunOutcome:
        """Time a single invocation and wrap it in a RunOutcome."""
        start = self._clock()
        try:
            value = workload()
        except Exception as e:
            logger.error(f"{label} run {run_index} failed: {e}")
            return RunOutcome.failed(run_index, f"{type(e).__name__}: {e}")
        end = self._clock()

        duration_ms = max((end - start) * 1000.0, 0.0)
        logger.debug(f"{label} run {run_index}: {duration_ms:.3f}ms")

        if cleanup:
            try:
                cleanup(value)
            except Exception as e:
                logger.error(f"{label} run {run_index} cleanup failed: {e}")

        return RunOutcome.ok(WorkloadResult(
            label=label,
            run_index=run_index,
            duration_ms=duration_ms,
            return_value=value,
        ))
