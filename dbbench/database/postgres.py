from typing import List, Optional

import asyncpg
from asyncpg.prepared_stmt import PreparedStatement

from dbbench.config import DbmsName
from dbbench.database.backend import DbBackend
from dbbench.database.statements import (
    TABLE_NAME,
    COLUMN_PK_NAME,
    COLUMN_VARCHAR_NAME,
    COLUMN_INT_NAME,
    COLUMN_DECIMAL_NAME,
    COLUMN_DATE_NAME,
    insert_sql,
    select_by_pk_sql,
    max_pk_sql,
)

DROP_TABLE_SQL = f"DROP TABLE IF EXISTS {TABLE_NAME}"

CREATE_TABLE_SQL = f"""
CREATE TABLE {TABLE_NAME} (
    {COLUMN_PK_NAME} SERIAL PRIMARY KEY,
    {COLUMN_VARCHAR_NAME} VARCHAR(20) NOT NULL,
    {COLUMN_INT_NAME} INTEGER NOT NULL,
    {COLUMN_DECIMAL_NAME} DECIMAL(9,2) NOT NULL,
    {COLUMN_DATE_NAME} DATE NOT NULL
)
"""


class PostgresBackend(DbBackend):
    """PostgreSQL backend on a single asyncpg connection."""

    dbms = DbmsName.POSTGRESQL

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._connection: Optional[asyncpg.Connection] = None
        self._insert_statement: Optional[PreparedStatement] = None
        self._select_statement: Optional[PreparedStatement] = None

    @property
    def connected(self) -> bool:
        return self._connection is not None

    def _conn(self) -> asyncpg.Connection:
        if self._connection is None:
            raise RuntimeError("PostgreSQL backend is not connected")
        return self._connection

    async def connect(self) -> None:
        if self._connection is not None:
            return

        self._logger.debug(
            "Connecting to PostgreSQL at %s:%s/%s",
            self.settings.host, self.settings.port, self.settings.name,
        )
        self._connection = await asyncpg.connect(
            host=self.settings.host,
            port=self.settings.port,
            database=self.settings.name,
            user=self.settings.user,
            password=self.settings.password or None,
        )

    async def close(self) -> None:
        if self._connection is not None:
            connection, self._connection = self._connection, None
            self._insert_statement = None
            self._select_statement = None
            await connection.close()

    async def create_table(self) -> None:
        conn = self._conn()
        await conn.execute(DROP_TABLE_SQL)
        await conn.execute(CREATE_TABLE_SQL)

    async def prepare_insert(self) -> None:
        self._insert_statement = await self._conn().prepare(insert_sql())

    async def exec_insert_batch(self) -> None:
        if self._insert_statement is None:
            raise RuntimeError("Insert statement has not been prepared")
        # leaving the block rolls the transaction back on error
        async with self._conn().transaction():
            await self._insert_statement.executemany(self._insert_batch)

    async def close_insert(self) -> None:
        # server-side statements are released with the connection
        self._insert_statement = None

    async def max_primary_key(self) -> int:
        value = await self._conn().fetchval(max_pk_sql())
        return value or 0

    async def prepare_select(self) -> None:
        self._select_statement = await self._conn().prepare(select_by_pk_sql())

    async def exec_select(self) -> List[asyncpg.Record]:
        if self._select_statement is None:
            raise RuntimeError("Select statement has not been prepared")
        return await self._select_statement.fetch(self._select_pk)

    async def close_select(self) -> None:
        self._select_statement = None
