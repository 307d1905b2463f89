from dbbench.database.entry import DbEntry
from dbbench.engine.result import Result
from dbbench.engine.state import IterationState
from dbbench.engine.stats import PhaseStats
from dbbench.operations.base import DbOperation


class DbInsertOperation(DbOperation[IterationState]):
    """
    Inserts batches of random rows, one transaction per batch.

    Only executing the batch and committing it is measured. The statement is
    prepared once in ``setup`` and the rows of each batch are generated and
    bound in ``before_each``.
    """

    def __init__(self, backend_factory, inserts_per_batch: int, **kwargs):
        if inserts_per_batch <= 0:
            raise ValueError(f"inserts_per_batch must be positive, got {inserts_per_batch}")
        super().__init__(backend_factory, **kwargs)
        self.inserts_per_batch = inserts_per_batch

    def name(self) -> str:
        return "Insert Statements"

    def describe(self) -> str:
        return f"Num of inserts per batch: {self.inserts_per_batch}\n"

    async def setup(self) -> None:
        await self.backend.prepare_insert()

    async def teardown(self) -> None:
        await self.backend.close_insert()

    async def before_each(self, state: IterationState) -> None:
        entries = [DbEntry.random() for _ in range(self.inserts_per_batch)]
        self.backend.set_insert_batch(entries)

    async def timed_body(self, state: IterationState) -> None:
        await self.backend.exec_insert_batch()

    def report(self, result: Result, warmup: PhaseStats, measured: PhaseStats) -> None:
        """Add the cost of a single row, derived from the batch durations."""
        if not measured.has_data:
            return
        result.put("min per record", measured.min_time // self.inserts_per_batch)
        result.put("max per record", measured.max_time // self.inserts_per_batch)
        result.put("avg per record", measured.avg_time // self.inserts_per_batch)
