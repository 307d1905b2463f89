"""
Generic benchmarking engine: lifecycle contract, iteration state, statistics,
results and the sequential runner.
"""

from .operation import Operation
from .result import Result
from .runner import BenchmarkRunner, format_tester_result
from .state import IterationPhase, IterationState
from .stats import PhaseStats
from .tester import BaseTester

__all__ = [
    "BaseTester",
    "BenchmarkRunner",
    "IterationPhase",
    "IterationState",
    "Operation",
    "PhaseStats",
    "Result",
    "format_tester_result",
]
