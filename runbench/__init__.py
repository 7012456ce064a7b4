"""
Runtime Benchmark - Python vs Go micro-benchmark harness.
"""

__version__ = "1.0.0"
