"""
Test configuration and fixtures for the dbbench test suite.
Provides a controllable clock, a recording operation and SQLite settings.
"""

import io
from typing import Iterable, Optional, Set, Tuple
from unittest.mock import MagicMock

import pytest

from dbbench.config import BenchmarkSettings, DatabaseSettings, DbmsName, Settings
from dbbench.engine.operation import Operation
from dbbench.engine.state import IterationState

MS = 1_000_000


class FakeClock:
    """Nanosecond clock that only moves when told to."""

    def __init__(self, start: int = 0):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, nanoseconds: int) -> None:
        self.now += nanoseconds


class RecordingOperation(Operation[IterationState]):
    """
    Operation recording every hook call as ``(hook, phase, ordinal)``.

    The timed body advances the fake clock by the next value of ``durations``
    (10ms when exhausted or not given). ``failures`` holds
    ``(hook, phase, ordinal)`` triples that raise ``RuntimeError``.
    """

    def __init__(
            self,
            clock: Optional[FakeClock] = None,
            durations: Optional[Iterable[int]] = None,
            init_result: int = 0,
            failures: Optional[Set[Tuple[str, str, int]]] = None,
            finish_error: Optional[Exception] = None,
            name: str = "Recording",
    ):
        self.clock = clock
        self._durations = iter(durations or [])
        self.init_result = init_result
        self.failures = failures or set()
        self.finish_error = finish_error
        self._name = name
        self.calls = []

    def _record(self, hook: str, state: Optional[IterationState] = None) -> None:
        if state is None:
            self.calls.append((hook,))
            return
        self.calls.append((hook, state.phase.value, state.ordinal))
        if (hook, state.phase.value, state.ordinal) in self.failures:
            raise RuntimeError(f"{hook} failed")

    def hook_calls(self, hook: str) -> list:
        return [call for call in self.calls if call[0] == hook]

    async def init(self) -> int:
        self._record("init")
        return self.init_result

    async def finish(self) -> None:
        self._record("finish")
        if self.finish_error is not None:
            raise self.finish_error

    async def before_each(self, state: IterationState) -> None:
        self._record("before_each", state)

    async def timed_body(self, state: IterationState) -> None:
        if self.clock is not None:
            self.clock.advance(next(self._durations, 10 * MS))
        self._record("timed_body", state)

    async def after_each(self, state: IterationState) -> None:
        self._record("after_each", state)

    def name(self) -> str:
        return self._name

    def describe(self) -> str:
        return "Recording operation\n"


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a clock advanced only by the operations under test."""
    return FakeClock()


@pytest.fixture
def recording_operation(fake_clock):
    """Provide a factory of recording operations bound to the fake clock."""

    def factory(**kwargs) -> RecordingOperation:
        kwargs.setdefault("clock", fake_clock)
        return RecordingOperation(**kwargs)

    return factory


@pytest.fixture
def mock_logger() -> MagicMock:
    """Provide a mock logger to assert on diagnostics."""
    return MagicMock()


@pytest.fixture
def output() -> io.StringIO:
    """Provide a stream capturing the printed report."""
    return io.StringIO()


@pytest.fixture
def sqlite_database_settings(tmp_path) -> DatabaseSettings:
    """Provide database settings pointing to a SQLite file in a temporary directory."""
    return DatabaseSettings(path=str(tmp_path / "bench.sqlite3"))


@pytest.fixture
def sqlite_settings(sqlite_database_settings) -> Settings:
    """Provide small benchmark settings running against SQLite."""
    return Settings(
        benchmark=BenchmarkSettings(
            dbms=DbmsName.SQLITE,
            batch_insert_executions=4,
            inserts_per_transaction=3,
            select_executions=5,
            warmup_executions=2,
        ),
        database=sqlite_database_settings,
    )
