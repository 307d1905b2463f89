"""
Benchmark engine driving an ``Operation`` through warmup and measured iterations.
"""

import logging
import time
from typing import Callable, Generic, Optional

from dbbench.engine.operation import Operation, StateT
from dbbench.engine.result import Result
from dbbench.engine.state import IterationPhase
from dbbench.engine.stats import PhaseStats
from dbbench.logging_config import get_logger


class BaseTester(Generic[StateT]):
    """
    Executes the same operation a fixed number of times and evaluates the
    min, max and average duration of its timed body (in nanoseconds).

    Before the measured iterations the tester performs a number of warmup
    iterations, recorded separately, to prime caches and connections.

    A failing hook is logged and the iteration records no sample; the run
    continues with the next iteration. ``finish`` runs exactly once for
    every successful ``init``.
    """

    def __init__(
            self,
            operation: Operation[StateT],
            measured_iterations: int,
            warmup_iterations: int = 0,
            logger: Optional[logging.Logger] = None,
            clock: Callable[[], int] = time.perf_counter_ns,
    ):
        if measured_iterations < 0:
            raise ValueError(f"measured_iterations must be non-negative, got {measured_iterations}")
        if warmup_iterations < 0:
            raise ValueError(f"warmup_iterations must be non-negative, got {warmup_iterations}")

        self._operation = operation
        self._measured_iterations = measured_iterations
        self._warmup_iterations = warmup_iterations
        self._logger = logger or get_logger(__name__)
        self._clock = clock

        self._warmup = PhaseStats()
        self._measured = PhaseStats()

    @property
    def operation(self) -> Operation[StateT]:
        return self._operation

    @property
    def measured_iterations(self) -> int:
        return self._measured_iterations

    @property
    def warmup_iterations(self) -> int:
        return self._warmup_iterations

    @property
    def warmup(self) -> PhaseStats:
        return self._warmup

    @property
    def measured(self) -> PhaseStats:
        return self._measured

    def name(self) -> str:
        return self._operation.name()

    def describe(self) -> str:
        info = (
            f"Warmup Executions: {self._warmup_iterations}\n"
            f"Executions: {self._measured_iterations}\n"
        )
        return info + self._operation.describe()

    async def execute(self) -> None:
        """
        Run init, the warmup loop, the measured loop and finish.

        Statistics of a previous run are discarded, so a tester can be
        executed any number of times.
        """
        self._warmup.reset()
        self._measured.reset()

        try:
            init_result = await self._operation.init()
        except Exception:
            self._logger.exception("Initialization of tester '%s' raised an error", self.name())
            init_result = -1

        if init_result != 0:
            self._logger.error("Tester '%s' initialization failed with code %s", self.name(), init_result)
            return

        try:
            try:
                state = self._operation.make_state()
            except Exception:
                self._logger.exception("Tester '%s' failed to create its iteration state", self.name())
                return
            await self._run_phase(state, IterationPhase.WARMUP, self._warmup_iterations, self._warmup)
            await self._run_phase(state, IterationPhase.MEASURED, self._measured_iterations, self._measured)
        finally:
            await self._finish()

    async def _run_phase(
            self, state: StateT, phase: IterationPhase, iterations: int, stats: PhaseStats
    ) -> None:
        state.phase = phase
        for ordinal in range(1, iterations + 1):
            state.ordinal = ordinal
            duration = await self._run_iteration(state)
            if duration is None:
                stats.record_failure()
            else:
                stats.record(duration)

        stats.calculate_derived_metrics()
        if stats.failures:
            self._logger.warning(
                "Tester '%s': %d of %d %s iterations failed",
                self.name(), stats.failures, iterations, phase.value,
            )

    async def _run_iteration(self, state: StateT) -> Optional[int]:
        """Run the hooks of one iteration and return the sample, or None if a hook failed."""
        try:
            await self._operation.before_each(state)
        except Exception:
            self._log_iteration_error("before_each", state)
            return None

        duration = None
        try:
            start = self._clock()
            await self._operation.timed_body(state)
            duration = self._clock() - start
        except Exception:
            self._log_iteration_error("timed_body", state)

        # cleanup runs even when the timed body failed
        try:
            await self._operation.after_each(state)
        except Exception:
            self._log_iteration_error("after_each", state)
            return None

        return duration

    def _log_iteration_error(self, hook: str, state: StateT) -> None:
        self._logger.exception(
            "Tester '%s': %s failed on %s iteration %d",
            self.name(), hook, state.phase.value, state.ordinal,
        )

    async def _finish(self) -> None:
        try:
            await self._operation.finish()
        except Exception:
            self._logger.exception("Tester '%s' failed to release its resources", self.name())

    def results(self) -> Result:
        """Build the metrics of the last run; phases without samples are left out."""
        result = Result()

        if self._warmup.has_data:
            result.put("min-warmup", self._warmup.min_time)
            result.put("max-warmup", self._warmup.max_time)
            result.put("avg-warmup", self._warmup.avg_time)
        if self._warmup.failures:
            result.put("failed-warmup", self._warmup.failures)

        if self._measured.has_data:
            result.put("min", self._measured.min_time)
            result.put("max", self._measured.max_time)
            result.put("avg", self._measured.avg_time)
        if self._measured.failures:
            result.put("failed", self._measured.failures)

        try:
            self._operation.report(result, self._warmup, self._measured)
        except Exception:
            self._logger.exception("Tester '%s' failed to report derived metrics", self.name())

        return result
