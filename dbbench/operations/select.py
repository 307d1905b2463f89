from dataclasses import dataclass
from typing import Any, List, Optional

from dbbench.database.entry import random_int
from dbbench.engine.state import IterationState
from dbbench.operations.base import DbOperation


@dataclass
class SelectState(IterationState):
    primary_key: int = 0
    rows: Optional[List[Any]] = None


class DbSelectOperation(DbOperation[SelectState]):
    """
    Selects a single row by primary key.

    Keys are drawn from ``1..max(id)``, which assumes the rows were written
    by the insert operation without gaps. An empty table selects key 0.
    """

    def __init__(self, backend_factory, **kwargs):
        super().__init__(backend_factory, **kwargs)
        self.max_primary_key = 0

    def name(self) -> str:
        return "Select Statements by PK"

    def make_state(self) -> SelectState:
        return SelectState()

    async def setup(self) -> None:
        self.max_primary_key = await self.backend.max_primary_key()
        if self.max_primary_key == 0:
            self._logger.warning("Table is empty; selects will not return any row")
        await self.backend.prepare_select()

    async def teardown(self) -> None:
        await self.backend.close_select()

    async def before_each(self, state: SelectState) -> None:
        state.primary_key = random_int(self.max_primary_key) + 1 if self.max_primary_key > 0 else 0
        self.backend.set_select_pk(state.primary_key)

    async def timed_body(self, state: SelectState) -> None:
        state.rows = await self.backend.exec_select()

    async def after_each(self, state: SelectState) -> None:
        state.rows = None
