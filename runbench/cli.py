"""
Runtime Benchmark - CLI Entry Point

Usage:
    runbench cpu
    runbench fileio --save
    runbench http python
    runbench compare json
    runbench run-all
"""

import sys
import logging
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import Config
from .benchmark.runner import BenchmarkConfig, BenchmarkRunner, SuiteResult
from .benchmark.reporter import Reporter
from .orchestrator import Orchestrator
from .workloads import get_suite, list_suites
from .workloads.base import BaseSuite
from .workloads.http_bench import HttpSuite

logger = logging.getLogger(__name__)

console = Console(highlight=False)


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure root logger
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True
    )

    # Also set level for our modules
    logging.getLogger('runbench').setLevel(level)


def _build_config(iterations: Optional[int] = None) -> BenchmarkConfig:
    config = BenchmarkConfig.from_env()
    if iterations is not None:
        config.iterations = iterations
    return config


def _execute(suite: BaseSuite, save: bool) -> Optional[SuiteResult]:
    """
    Run a suite, print its summary table and optionally export JSON.

    Unexpected errors are logged; the process still exits with status 0.
    """
    try:
        result = suite.run()
    except Exception as e:
        logger.exception(f"Suite {suite.name} aborted")
        console.print(f"[red]Error running {suite.name} suite: {escape(str(e))}[/red]")
        return None

    console.print("")
    suite.reporter.print_summary_table(result)

    if save:
        json_path = suite.reporter.generate_json(result, output_dir=suite.config.results_dir)
        console.print(f"JSON results: [green]{json_path}[/green]")

    return result


def _run_named_suite(name: str, iterations: Optional[int], save: bool) -> None:
    config = _build_config(iterations)
    runner = BenchmarkRunner(reporter=Reporter(console))
    _execute(get_suite(name, config=config, runner=runner), save)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output (INFO level)')
@click.option('--debug', is_flag=True, help='Enable debug output (DEBUG level, logs every run)')
def cli(verbose, debug):
    """
    Runtime Benchmark Tool

    Times CPU, file I/O, JSON and HTTP workloads so the Python runtime
    can be compared with Go.

    Use -v for verbose output, --debug for detailed logs.
    """
    setup_logging(verbose, debug)


@cli.command()
@click.option('--iterations', '-n', default=None, type=click.IntRange(min=1), help='Runs per workload')
@click.option('--save', is_flag=True, help='Export aggregates as JSON into the results directory')
def cpu(iterations, save):
    """
    Run the CPU intensive suite (fibonacci).

    Example:
        runbench cpu -n 3
    """
    _run_named_suite('cpu', iterations, save)


@cli.command()
@click.option('--iterations', '-n', default=None, type=click.IntRange(min=1), help='Runs per workload')
@click.option('--save', is_flag=True, help='Export aggregates as JSON into the results directory')
def fileio(iterations, save):
    """
    Run the file I/O suite (write, read, concurrent batches).

    Example:
        runbench fileio --save
    """
    _run_named_suite('fileio', iterations, save)


@cli.command('json')
@click.option('--iterations', '-n', default=None, type=click.IntRange(min=1), help='Runs per workload')
@click.option('--save', is_flag=True, help='Export aggregates as JSON into the results directory')
def json_cmd(iterations, save):
    """
    Run the JSON processing suite.

    Example:
        runbench json
    """
    _run_named_suite('json', iterations, save)


@cli.command()
@click.argument('target', required=False)
@click.option('--ready-timeout', default=None, type=float, help='Seconds to wait for /health before measuring')
@click.option('--save', is_flag=True, help='Export aggregates as JSON into the results directory')
def http(target, ready_timeout, save):
    """
    Benchmark a running HTTP server.

    TARGET is the runtime of the server under test.

    Example:
        runbench http python
    """
    config = _build_config()
    targets = list(config.ports.keys())

    if target not in targets:
        console.print(f"Usage: runbench http <{'|'.join(targets)}>")
        sys.exit(1)

    if ready_timeout is not None:
        config.ready_timeout = ready_timeout

    console.print(f"\nNote: Make sure the {target} HTTP server is running first!")
    console.print("Start it with:")
    if target == 'python':
        console.print("  runbench serve")
    else:
        console.print("  cd go && go run http-server.go")

    runner = BenchmarkRunner(reporter=Reporter(console))
    _execute(HttpSuite(target, config=config, runner=runner), save)

    console.print("\n=== HTTP Benchmark Complete ===")


@cli.command()
@click.option('--host', default='0.0.0.0', help='Interface to bind')
@click.option('--port', '-p', default=None, type=int, help='Port (default: python target port)')
def serve(host, port):
    """
    Start the HTTP server under test.

    Example:
        runbench serve --port 3000
    """
    from .server import serve as run_server

    run_server(host=host, port=port or Config.PYTHON_PORT)


@cli.command()
@click.argument('suite', type=click.Choice(list_suites()))
def compare(suite):
    """
    Run one suite for Python and then for Go, each as a child process.

    Example:
        runbench compare cpu
    """
    Orchestrator(config=_build_config(), reporter=Reporter(console)).compare(suite)


@cli.command('run-all')
def run_all():
    """
    Run every comparison in sequence.

    Each comparison runs as a child process with its own timeout;
    failures are reported and the remaining comparisons still run.
    """
    Orchestrator(config=_build_config(), reporter=Reporter(console)).run_all()


if __name__ == "__main__":
    cli()
