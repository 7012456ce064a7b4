"""
Benchmark execution and reporting package.
"""

from .runner import BenchmarkRunner, BenchmarkConfig, SuiteResult
from .metrics import MetricsCollector, AggregateStats, RunOutcome, WorkloadResult
from .reporter import Reporter

__all__ = [
    "BenchmarkRunner",
    "BenchmarkConfig",
    "SuiteResult",
    "MetricsCollector",
    "AggregateStats",
    "RunOutcome",
    "WorkloadResult",
    "Reporter",
]
