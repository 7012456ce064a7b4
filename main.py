#!/usr/bin/env python3
"""
Runtime Benchmark - CLI Entry Point

Usage:
    python main.py cpu
    python main.py http python
    python main.py run-all
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from runbench.cli import cli


if __name__ == "__main__":
    cli()
