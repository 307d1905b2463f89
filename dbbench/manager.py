"""
Database benchmark: prepares the test table and runs the insert and select
testers against the configured backend.
"""

import logging
from typing import List, Optional, TextIO

from dbbench.config import Settings
from dbbench.database.backend import DbBackend
from dbbench.database.factory import get_backend
from dbbench.engine.result import Result
from dbbench.engine.runner import BenchmarkRunner
from dbbench.engine.tester import BaseTester
from dbbench.logging_config import get_logger, log_performance
from dbbench.operations.insert import DbInsertOperation
from dbbench.operations.select import DbSelectOperation

logger = get_logger(__name__)

PREPARE_OK = 0
PREPARE_CONNECT_FAILED = -2
PREPARE_CREATE_TABLE_FAILED = -3


class DbBenchmarkManager:
    def __init__(
            self,
            settings: Settings,
            stream: Optional[TextIO] = None,
            logger: Optional[logging.Logger] = None,
    ):
        self.settings = settings
        self._stream = stream
        self._logger = logger or get_logger(__name__)

    def backend_factory(self) -> DbBackend:
        return get_backend(self.settings.benchmark.dbms, self.settings.database)

    @log_performance(logger, "create benchmark table")
    async def prepare(self) -> int:
        """
        Recreate the benchmark table.

        Returns:
            0 on success, -2 if the database is unreachable, -3 if the table
            could not be created
        """
        backend = self.backend_factory()
        try:
            await backend.connect()
        except Exception:
            self._logger.exception("Could not connect to %s", backend.dbms.value)
            return PREPARE_CONNECT_FAILED

        try:
            await backend.create_table()
        except Exception:
            self._logger.exception("Could not create the benchmark table")
            return PREPARE_CREATE_TABLE_FAILED
        finally:
            await backend.close()

        # the table is left in place afterwards so the inserted rows can be inspected
        return PREPARE_OK

    def build_testers(self) -> List[BaseTester]:
        benchmark = self.settings.benchmark
        factory = self.backend_factory

        insert_tester = BaseTester(
            DbInsertOperation(factory, benchmark.inserts_per_transaction),
            measured_iterations=benchmark.batch_insert_executions,
            warmup_iterations=benchmark.warmup_executions,
        )
        select_tester = BaseTester(
            DbSelectOperation(factory),
            measured_iterations=benchmark.select_executions,
            warmup_iterations=benchmark.warmup_executions,
        )
        return [insert_tester, select_tester]

    async def run(self) -> Optional[List[Result]]:
        """
        Prepare the database and run the testers.

        Returns:
            The results of the testers, or None if the preparation failed
        """
        prepare_result = await self.prepare()
        if prepare_result != PREPARE_OK:
            self._logger.error("Benchmark initialization failed with code %s", prepare_result)
            return None

        runner = BenchmarkRunner(self.build_testers(), stream=self._stream)
        return await runner.run()
