"""
Benchmark workload suites.
Each suite implements the BaseSuite interface.
"""

from typing import Optional

from ..benchmark.runner import BenchmarkConfig, BenchmarkRunner
from .base import BaseSuite, RunbenchError, WorkloadError
from .cpu import CpuSuite
from .fileio import FileIOSuite
from .json_processing import JsonSuite, Complexity
from .http_bench import HttpSuite, UnknownTargetError

# Registry of suites runnable without arguments
SUITES = {
    "cpu": CpuSuite,
    "fileio": FileIOSuite,
    "json": JsonSuite,
}


def get_suite(
    name: str,
    config: Optional[BenchmarkConfig] = None,
    runner: Optional[BenchmarkRunner] = None,
) -> BaseSuite:
    """
    Get a suite instance by name.

    Args:
        name: Suite name (e.g., 'cpu', 'fileio')
        config: Benchmark configuration
        runner: Runner shared by the suite's measurements

    Returns:
        Suite instance

    Raises:
        ValueError: If suite is not found
    """
    suite_class = SUITES.get(name.lower())
    if not suite_class:
        available = ", ".join(SUITES.keys())
        raise ValueError(f"Unknown suite: {name}. Available: {available}")

    return suite_class(config=config, runner=runner)


def list_suites() -> list:
    """List all available suite names."""
    return list(SUITES.keys())


__all__ = [
    "BaseSuite",
    "RunbenchError",
    "WorkloadError",
    "CpuSuite",
    "FileIOSuite",
    "JsonSuite",
    "HttpSuite",
    "Complexity",
    "UnknownTargetError",
    "get_suite",
    "list_suites",
    "SUITES",
]
