"""
Base suite interface for benchmark workloads.
All suites must implement this interface.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..benchmark.runner import BenchmarkRunner, BenchmarkConfig, SuiteResult

logger = logging.getLogger(__name__)


class BaseSuite(ABC):
    """
    Abstract base class for workload suites.

    A suite builds zero-argument workloads and hands them to a
    BenchmarkRunner; the runner owns timing and aggregation.

    Example:
        class MySuite(BaseSuite):
            name = "mysuite"

            def _run(self, result):
                result.add(self.runner.measure("thing", 5, do_thing))
    """

    # Suite identification
    name: str = "base"
    display_name: str = "Base Suite"

    # Runtime measured by this suite
    runtime: str = "python"

    # Directory of the matching Go program, relative to the Go root
    go_program_dir: str = ""

    def __init__(
        self,
        config: Optional[BenchmarkConfig] = None,
        runner: Optional[BenchmarkRunner] = None,
    ):
        """
        Initialize suite.

        Args:
            config: Benchmark configuration (default: from environment)
            runner: Runner used for every measurement
        """
        self.config = config or BenchmarkConfig.from_env()
        self.runner = runner or BenchmarkRunner()
        self.reporter = self.runner.reporter

    @abstractmethod
    def _run(self, result: SuiteResult) -> None:
        """
        Execute the suite's measurements.

        Args:
            result: SuiteResult collecting every AggregateStats
        """
        pass

    def title(self) -> str:
        return f"Python {self.display_name} Tests"

    def run(self) -> SuiteResult:
        """Run the whole suite and return its aggregates."""
        result = SuiteResult(suite=self.name, runtime=self.runtime)
        self.reporter.print_title(self.title())

        logger.info(f"Starting suite: {self.name}")
        self._run(result)
        logger.info(f"Suite complete: {self.name} ({len(result.stats)} workloads)")

        return result

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name})>"


class RunbenchError(Exception):
    """Base exception for benchmark errors."""
    pass


class WorkloadError(RunbenchError):
    """Raised when a workload invocation fails as a whole."""
    pass
