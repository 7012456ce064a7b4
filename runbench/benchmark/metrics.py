"""
Metrics collection and calculation for benchmarks.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional


@dataclass(frozen=True)
class WorkloadResult:
    """
    One measured run of a workload.

    The return value is kept for display only and is never compared.
    """
    label: str
    run_index: int
    duration_ms: float
    return_value: Any = None


@dataclass(frozen=True)
class RunOutcome:
    """
    Outcome of a single run: either a measured result or an error.

    Failed outcomes carry no duration and never reach the aggregate.
    """
    run_index: int
    success: bool = False
    result: Optional[WorkloadResult] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, result: WorkloadResult) -> "RunOutcome":
        return cls(run_index=result.run_index, success=True, result=result)

    @classmethod
    def failed(cls, run_index: int, error: str) -> "RunOutcome":
        return cls(run_index=run_index, success=False, error=error)


@dataclass(frozen=True)
class AggregateStats:
    """
    Aggregated timings for all runs sharing a label.

    ``average``, ``min`` and ``max`` are milliseconds, or None when
    no run succeeded.
    """
    label: str
    attempted_runs: int = 0
    successful_runs: int = 0
    average: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    results: List[WorkloadResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def failed_runs(self) -> int:
        return self.attempted_runs - self.successful_runs

    @property
    def has_data(self) -> bool:
        """True when at least one run succeeded."""
        return self.successful_runs > 0

    @property
    def durations(self) -> List[float]:
        return [r.duration_ms for r in self.results]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "label": self.label,
            "attempted_runs": self.attempted_runs,
            "successful_runs": self.successful_runs,
            "failed_runs": self.failed_runs,
            "average_ms": self.average,
            "min_ms": self.min,
            "max_ms": self.max,
            "durations_ms": self.durations,
            "errors": list(self.errors),
        }


class MetricsCollector:
    """
    Collects run outcomes for one label and folds them into AggregateStats.

    Usage:
        collector = MetricsCollector("Fibonacci Iterative")

        for outcome in outcomes:
            collector.record(outcome)

        stats = collector.calculate()
    """

    def __init__(self, label: str):
        self.label = label
        self.results: List[WorkloadResult] = []
        self.errors: List[str] = []
        self.attempted = 0

    def record(self, outcome: RunOutcome) -> None:
        """
        Record a single run outcome.

        Only successful outcomes contribute a duration.
        """
        self.attempted += 1
        if outcome.success and outcome.result is not None:
            self.results.append(outcome.result)
        else:
            self.errors.append(outcome.error or "Unknown error")

    def calculate(self) -> AggregateStats:
        """
        Calculate aggregated metrics.

        The average is taken over successful runs only.
        """
        if not self.results:
            return AggregateStats(
                label=self.label,
                attempted_runs=self.attempted,
                errors=list(self.errors),
            )

        durations = [r.duration_ms for r in self.results]
        lowest, highest = min(durations), max(durations)
        # keep min <= average <= max under float rounding
        average = min(max(sum(durations) / len(durations), lowest), highest)

        return AggregateStats(
            label=self.label,
            attempted_runs=self.attempted,
            successful_runs=len(durations),
            average=average,
            min=lowest,
            max=highest,
            results=list(self.results),
            errors=list(self.errors),
        )
