"""
Unit tests for dbbench.manager and the dbbench entry point.
"""

from unittest.mock import AsyncMock, patch

import pytest

from dbbench.__main__ import main
from dbbench.config import ConfigurationError, DbmsName
from dbbench.database.backend import DbBackend
from dbbench.database.sqlite import SqliteBackend
from dbbench.manager import (
    DbBenchmarkManager,
    PREPARE_CONNECT_FAILED,
    PREPARE_CREATE_TABLE_FAILED,
    PREPARE_OK,
)
from dbbench.operations import DbInsertOperation, DbSelectOperation


@pytest.fixture
def mock_backend() -> AsyncMock:
    """Provide a mock backend used in place of the configured one."""
    backend = AsyncMock(spec=DbBackend)
    backend.dbms = DbmsName.SQLITE
    return backend


class TestPrepare:
    """Test the creation of the benchmark table."""

    @pytest.mark.asyncio
    async def test_prepare_creates_table(self, sqlite_settings, mock_logger):
        manager = DbBenchmarkManager(sqlite_settings, logger=mock_logger)

        assert await manager.prepare() == PREPARE_OK

        backend = SqliteBackend(sqlite_settings.database)
        await backend.connect()
        try:
            assert await backend.max_primary_key() == 0
        finally:
            await backend.close()

    @pytest.mark.asyncio
    async def test_connect_failure(self, sqlite_settings, mock_backend, mock_logger):
        mock_backend.connect.side_effect = OSError("connection refused")
        manager = DbBenchmarkManager(sqlite_settings, logger=mock_logger)

        with patch.object(manager, "backend_factory", return_value=mock_backend):
            assert await manager.prepare() == PREPARE_CONNECT_FAILED

        mock_backend.create_table.assert_not_awaited()
        mock_logger.exception.assert_called_once()

    @pytest.mark.asyncio
    async def test_create_table_failure(self, sqlite_settings, mock_backend, mock_logger):
        mock_backend.create_table.side_effect = RuntimeError("permission denied")
        manager = DbBenchmarkManager(sqlite_settings, logger=mock_logger)

        with patch.object(manager, "backend_factory", return_value=mock_backend):
            assert await manager.prepare() == PREPARE_CREATE_TABLE_FAILED

        mock_backend.close.assert_awaited_once()


class TestDbBenchmarkManager:
    """Test the benchmark run."""

    def test_build_testers(self, sqlite_settings):
        insert_tester, select_tester = DbBenchmarkManager(sqlite_settings).build_testers()

        assert isinstance(insert_tester.operation, DbInsertOperation)
        assert insert_tester.operation.inserts_per_batch == 3
        assert insert_tester.measured_iterations == 4
        assert insert_tester.warmup_iterations == 2
        assert isinstance(select_tester.operation, DbSelectOperation)
        assert select_tester.measured_iterations == 5
        assert select_tester.warmup_iterations == 2

    @pytest.mark.asyncio
    async def test_run(self, sqlite_settings, output, mock_logger):
        manager = DbBenchmarkManager(sqlite_settings, stream=output, logger=mock_logger)

        results = await manager.run()

        assert len(results) == 2
        insert_result, select_result = results
        assert "min per record" in insert_result
        assert select_result.labels() == ["min-warmup", "max-warmup", "avg-warmup", "min", "max", "avg"]

        text = output.getvalue()
        assert text.index("Executing tester: Insert Statements") < text.index("Executing tester: Select Statements by PK")
        assert "Result for tester: Insert Statements" in text
        assert "Num of inserts per batch: 3" in text
        assert "Result for tester: Select Statements by PK" in text
        assert text.count("Warmup Executions: 2") == 2

    @pytest.mark.asyncio
    async def test_run_stops_when_prepare_fails(self, sqlite_settings, output, mock_logger):
        manager = DbBenchmarkManager(sqlite_settings, stream=output, logger=mock_logger)

        with patch.object(manager, "prepare", new_callable=AsyncMock, return_value=PREPARE_CONNECT_FAILED):
            assert await manager.run() is None

        assert output.getvalue() == ""
        mock_logger.error.assert_called_once()


class TestMain:
    """Test the entry point exit codes."""

    @pytest.mark.asyncio
    async def test_configuration_error(self):
        with patch("dbbench.__main__.load_settings", side_effect=ConfigurationError("benchmark.dbms is not set")):
            assert await main() == 1

    @pytest.mark.asyncio
    async def test_successful_run(self, sqlite_settings, capsys):
        with patch("dbbench.__main__.load_settings", return_value=sqlite_settings):
            assert await main() == 0

        assert "Result for tester: Select Statements by PK" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_failed_preparation(self, sqlite_settings):
        with patch("dbbench.__main__.load_settings", return_value=sqlite_settings), \
                patch.object(DbBenchmarkManager, "run", new_callable=AsyncMock, return_value=None):
            assert await main() == 1
