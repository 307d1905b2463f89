"""
The lifecycle contract a benchmark implements to be driven by ``BaseTester``.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from dbbench.engine.result import Result
from dbbench.engine.state import IterationState
from dbbench.engine.stats import PhaseStats

StateT = TypeVar("StateT", bound=IterationState)


class Operation(ABC, Generic[StateT]):
    """
    A piece of code whose latency is measured.

    Only ``timed_body`` is measured. ``before_each`` and ``after_each`` run
    right before and right after it on every iteration and are excluded from
    the sample. ``init`` and ``finish`` bracket the whole run.
    """

    async def init(self) -> int:
        """
        Acquire the resources needed by the iterations.

        Returns:
            0 on success, any other value aborts the run.
        """
        return 0

    async def finish(self) -> None:
        """Release the resources acquired by ``init``."""

    async def before_each(self, state: StateT) -> None:
        pass

    @abstractmethod
    async def timed_body(self, state: StateT) -> None:
        raise NotImplementedError()

    async def after_each(self, state: StateT) -> None:
        pass

    def make_state(self) -> StateT:
        """Create the state threaded through the hooks of one run."""
        return IterationState()

    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError()

    def describe(self) -> str:
        return ""

    def report(self, result: Result, warmup: PhaseStats, measured: PhaseStats) -> None:
        """Append operation-specific metrics derived from the phase statistics."""
