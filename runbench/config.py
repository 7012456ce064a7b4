"""
Configuration management for the runtime benchmark harness.
Loads optional overrides from environment variables and .env file.
"""

import os
from pathlib import Path
from typing import Dict, Tuple
from dotenv import load_dotenv

# Load .env file from project root
PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")


def _int_list(value: str) -> Tuple[int, ...]:
    """Parse a comma-separated list of integers."""
    return tuple(int(part) for part in value.split(",") if part.strip())


class Config:
    """Central configuration management."""

    # ==========================================================================
    # Benchmark Settings
    # ==========================================================================
    ITERATIONS: int = int(os.getenv("RUNBENCH_ITERATIONS", "5"))
    LARGE_ITERATIONS: int = int(os.getenv("RUNBENCH_LARGE_ITERATIONS", "3"))

    FIB_SIZES: Tuple[int, ...] = _int_list(os.getenv("RUNBENCH_FIB_SIZES", "30,32,35"))
    LARGE_FIB_SIZES: Tuple[int, ...] = _int_list(os.getenv("RUNBENCH_LARGE_FIB_SIZES", "1000,5000,10000"))
    FILE_SIZES: Tuple[int, ...] = _int_list(os.getenv("RUNBENCH_FILE_SIZES", "1000,10000,100000"))
    CONCURRENT_FILE_COUNTS: Tuple[int, ...] = _int_list(os.getenv("RUNBENCH_CONCURRENT_FILES", "10,50"))

    # Child process timeouts (seconds)
    SCRIPT_TIMEOUT: int = int(os.getenv("RUNBENCH_SCRIPT_TIMEOUT", "120"))
    SUITE_TIMEOUT: int = int(os.getenv("RUNBENCH_SUITE_TIMEOUT", "300"))

    # Output directories
    DATA_DIR: Path = PROJECT_ROOT / os.getenv("RUNBENCH_DATA_DIR", "data")
    RESULTS_DIR: Path = PROJECT_ROOT / os.getenv("RUNBENCH_RESULTS_DIR", "results")
    GO_DIR: Path = PROJECT_ROOT / os.getenv("RUNBENCH_GO_DIR", "go")

    # ==========================================================================
    # HTTP Settings
    # ==========================================================================
    HTTP_HOST: str = os.getenv("RUNBENCH_HTTP_HOST", "localhost")
    HTTP_REQUESTS: int = int(os.getenv("RUNBENCH_HTTP_REQUESTS", "5"))
    HTTP_TIMEOUT: float = float(os.getenv("RUNBENCH_HTTP_TIMEOUT", "10"))
    READY_TIMEOUT: float = float(os.getenv("RUNBENCH_READY_TIMEOUT", "30"))

    PYTHON_PORT: int = int(os.getenv("RUNBENCH_PYTHON_PORT", "3000"))
    GO_PORT: int = int(os.getenv("RUNBENCH_GO_PORT", "3001"))

    @classmethod
    def get_target_ports(cls) -> Dict[str, int]:
        """Ports of the HTTP servers under test, keyed by runtime token."""
        return {
            "python": cls.PYTHON_PORT,
            "go": cls.GO_PORT,
        }
