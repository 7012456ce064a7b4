"""
Sequences benchmark scripts as child processes.

Each script gets a wall-clock timeout; a script that fails, times out or
cannot be launched is logged and the next one still runs.
"""

import os
import sys
import time
import shlex
import signal
import logging
import subprocess
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from rich.markup import escape

from .benchmark.reporter import Reporter
from .benchmark.runner import BenchmarkConfig
from .config import PROJECT_ROOT
from .workloads import SUITES
from .workloads.base import RunbenchError

logger = logging.getLogger(__name__)

# Set for every child that already runs inside a process group owned by an
# outer orchestrator; such children keep their own children in that group.
PROCESS_GROUP_ENV = "RUNBENCH_PROCESS_GROUP"


def run_process(
    command: Sequence[str],
    cwd: Optional[str] = None,
    timeout: Optional[float] = None,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """
    Run a command like subprocess.run, killing its whole process tree on timeout.

    A top-level orchestrator starts each child in a new session, so the
    child and everything it spawns share one process group that can be
    killed at once. Nested orchestrators leave their children in the group
    they were started in.

    Raises:
        subprocess.TimeoutExpired: The child ran past the timeout and was killed
        subprocess.CalledProcessError: check is set and the exit status is non-zero
    """
    own_group = hasattr(os, "killpg") and not os.environ.get(PROCESS_GROUP_ENV)
    env = dict(os.environ, **{PROCESS_GROUP_ENV: "1"}) if own_group else None

    process = subprocess.Popen(list(command), cwd=cwd, env=env, start_new_session=own_group)
    try:
        returncode = process.wait(timeout=timeout)
    except (subprocess.TimeoutExpired, KeyboardInterrupt):
        _kill(process, own_group)
        raise

    if check and returncode != 0:
        raise subprocess.CalledProcessError(returncode, list(command))
    return subprocess.CompletedProcess(list(command), returncode)


def _kill(process: subprocess.Popen, own_group: bool) -> None:
    if own_group:
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    else:
        process.kill()
    process.wait()


class OrchestrationError(RunbenchError):
    """Raised when a script cannot be built for a requested suite."""
    pass


@dataclass
class ScriptSpec:
    """A child process to run."""
    name: str
    command: List[str]
    cwd: Optional[Path] = None
    timeout: float = 120

    @property
    def command_line(self) -> str:
        return " ".join(shlex.quote(part) for part in self.command)


@dataclass
class ScriptOutcome:
    """How a child process ended."""
    name: str
    success: bool
    returncode: Optional[int] = None
    error: Optional[str] = None
    duration: float = 0.0


class Orchestrator:
    """
    Runs the Python and Go side of each comparison, one after another.

    Example:
        orchestrator = Orchestrator()
        orchestrator.compare("cpu")
        orchestrator.run_all()
    """

    def __init__(
        self,
        config: Optional[BenchmarkConfig] = None,
        reporter: Optional[Reporter] = None,
        run: Optional[Callable[..., subprocess.CompletedProcess]] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            config: Benchmark configuration (timeouts, Go directory)
            reporter: Console reporter for banners
            run: subprocess.run compatible callable (default: run_process)
        """
        self.config = config or BenchmarkConfig.from_env()
        self.reporter = reporter or Reporter()
        self._run = run or run_process

    def python_script(self, suite_name: str) -> ScriptSpec:
        return ScriptSpec(
            name=f"Python {self._suite_class(suite_name).display_name} Test",
            command=[sys.executable, "-m", "runbench", suite_name],
            cwd=PROJECT_ROOT,
            timeout=self.config.script_timeout,
        )

    def go_script(self, suite_name: str) -> ScriptSpec:
        suite_class = self._suite_class(suite_name)
        return ScriptSpec(
            name=f"Go {suite_class.display_name} Test",
            command=["go", "run", "main.go"],
            cwd=Path(self.config.go_dir) / suite_class.go_program_dir,
            timeout=self.config.script_timeout,
        )

    def _suite_class(self, suite_name: str):
        suite_class = SUITES.get(suite_name)
        if suite_class is None:
            available = ", ".join(SUITES.keys())
            raise OrchestrationError(f"Unknown suite: {suite_name}. Available: {available}")
        return suite_class

    def run_script(self, script: ScriptSpec) -> ScriptOutcome:
        """
        Run one child process with inherited stdio and a timeout.

        On timeout the child is killed. Failures are logged, never raised.
        """
        self.reporter.print_section(script.name)
        self.reporter.console.print(f"Command: {script.command_line}", markup=False)
        self.reporter.console.print("-" * 40)

        start = time.monotonic()
        returncode = None
        try:
            completed = self._run(
                script.command,
                cwd=str(script.cwd) if script.cwd else None,
                timeout=script.timeout,
                check=True,
            )
        except subprocess.TimeoutExpired:
            error = f"timed out after {script.timeout}s"
        except subprocess.CalledProcessError as e:
            returncode = e.returncode
            error = f"exited with code {e.returncode}"
        except OSError as e:
            error = f"could not start: {e}"
        else:
            return ScriptOutcome(
                name=script.name,
                success=True,
                returncode=completed.returncode,
                duration=time.monotonic() - start,
            )

        logger.error(f"Error running {script.name}: {error}")
        self.reporter.console.print(f"[red]Error running {escape(script.name)}: {escape(error)}[/red]")
        return ScriptOutcome(
            name=script.name,
            success=False,
            returncode=returncode,
            error=error,
            duration=time.monotonic() - start,
        )

    def run_scripts(self, scripts: Sequence[ScriptSpec]) -> List[ScriptOutcome]:
        return [self.run_script(script) for script in scripts]

    def compare(self, suite_name: str) -> List[ScriptOutcome]:
        """Run the Python suite and then the matching Go program."""
        display_name = self._suite_class(suite_name).display_name
        self.reporter.print_title(f"{display_name} Performance Comparison")

        outcomes = self.run_scripts([
            self.python_script(suite_name),
            self.go_script(suite_name),
        ])

        self.reporter.console.print(f"\n=== {display_name} Performance Test Complete ===")
        return outcomes

    def run_all(self) -> List[ScriptOutcome]:
        """
        Run every comparison as its own child process.

        Returns:
            One outcome per comparison, in execution order
        """
        self.reporter.print_title("Complete Python vs Go Performance Benchmark")
        self.reporter.console.print(f"Started at: {_utc_now()}\n")

        Path(self.config.results_dir).mkdir(parents=True, exist_ok=True)

        outcomes = []
        for suite_name, suite_class in SUITES.items():
            name = f"{suite_class.display_name} Tests"
            self.reporter.print_banner(f"Running {name}")

            script = ScriptSpec(
                name=name,
                command=[sys.executable, "-m", "runbench", "compare", suite_name],
                cwd=PROJECT_ROOT,
                timeout=self.config.suite_timeout,
            )
            outcomes.append(self.run_script(script))
            self.reporter.console.print(f"\n{name} completed.\n")

        self.print_http_instructions()

        self.reporter.print_banner("All Benchmark Tests Completed!")
        self.reporter.console.print(f"Finished at: {_utc_now()}")
        self.reporter.console.print("=" * 60)

        failed = [o.name for o in outcomes if not o.success]
        if failed:
            logger.warning(f"Failed tests: {', '.join(failed)}")
        return outcomes

    def print_http_instructions(self) -> None:
        """HTTP tests need servers started by hand."""
        self.reporter.print_banner("HTTP Server Tests")
        lines = [
            "\nTo run HTTP server tests:",
            "1. Start Python server: runbench serve",
            "2. In another terminal: runbench http python",
            "3. Stop Python server (Ctrl+C)",
            "4. Start Go server: cd go && go run http-server.go",
            "5. In another terminal: runbench http go",
            "6. Stop Go server (Ctrl+C)",
        ]
        for line in lines:
            self.reporter.console.print(line)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()
