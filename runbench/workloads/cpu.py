"""
CPU intensive workloads: recursive and iterative fibonacci.
"""

from ..benchmark.runner import SuiteResult
from .base import BaseSuite


# Results longer than this are shown as a digit count
MAX_DISPLAY_DIGITS = 30


def fibonacci(n: int) -> int:
    """Naive recursive fibonacci."""
    if n <= 1:
        return n
    return fibonacci(n - 1) + fibonacci(n - 2)


def fibonacci_iterative(n: int) -> int:
    if n <= 1:
        return n
    a, b = 0, 1
    for _ in range(2, n + 1):
        a, b = b, a + b
    return b


def describe_number(value: int) -> str:
    """Format a fibonacci result for a run line."""
    text = str(value)
    if len(text) > MAX_DISPLAY_DIGITS:
        return f"Result: {text[:12]}... ({len(text)} digits)"
    return f"Result: {text}"


class CpuSuite(BaseSuite):
    """
    Fibonacci workloads at several problem sizes.

    Recursive and iterative variants run for every size in
    ``config.fib_sizes``; the iterative variant then runs on the
    large sizes with ``config.large_iterations`` runs each.
    """

    name = "cpu"
    display_name = "CPU Intensive"
    go_program_dir = "cpu"

    def _run(self, result: SuiteResult) -> None:
        iterations = self.config.iterations

        for n in self.config.fib_sizes:
            self.reporter.print_section(f"Fibonacci Recursive (n={n})")
            result.add(self.runner.measure(
                f"Fibonacci Recursive (n={n})",
                iterations,
                lambda n=n: fibonacci(n),
                describe=describe_number,
            ))

            self.reporter.print_section(f"Fibonacci Iterative (n={n})")
            result.add(self.runner.measure(
                f"Fibonacci Iterative (n={n})",
                iterations,
                lambda n=n: fibonacci_iterative(n),
                describe=describe_number,
            ))

        self.reporter.print_section("Large Number Fibonacci (Iterative)")
        for n in self.config.large_fib_sizes:
            self.reporter.print_section(f"Large Fibonacci (n={n})")
            result.add(self.runner.measure(
                f"Large Fibonacci (n={n})",
                self.config.large_iterations,
                lambda n=n: fibonacci_iterative(n),
                describe=describe_number,
            ))
