import sqlite3
from typing import List, Optional

from dbbench.config import DbmsName
from dbbench.database.backend import DbBackend
from dbbench.database.entry import DbEntry
from dbbench.database.statements import (
    TABLE_NAME,
    COLUMN_PK_NAME,
    COLUMN_VARCHAR_NAME,
    COLUMN_INT_NAME,
    COLUMN_DECIMAL_NAME,
    COLUMN_DATE_NAME,
    DATA_COLUMNS,
    ALL_COLUMNS,
)

DROP_TABLE_SQL = f"DROP TABLE IF EXISTS {TABLE_NAME}"

CREATE_TABLE_SQL = f"""
CREATE TABLE {TABLE_NAME} (
    {COLUMN_PK_NAME} INTEGER PRIMARY KEY AUTOINCREMENT,
    {COLUMN_VARCHAR_NAME} VARCHAR(20) NOT NULL,
    {COLUMN_INT_NAME} INTEGER NOT NULL,
    {COLUMN_DECIMAL_NAME} DECIMAL(9,2) NOT NULL,
    {COLUMN_DATE_NAME} DATE NOT NULL
)
"""

INSERT_SQL = (
    f"INSERT INTO {TABLE_NAME} ({', '.join(DATA_COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in DATA_COLUMNS)})"
)
SELECT_BY_PK_SQL = f"SELECT {', '.join(ALL_COLUMNS)} FROM {TABLE_NAME} WHERE {COLUMN_PK_NAME} = ?"
MAX_PK_SQL = f"SELECT MAX({COLUMN_PK_NAME}) FROM {TABLE_NAME}"


class SqliteBackend(DbBackend):
    """
    SQLite backend on a file database.

    The connection runs in autocommit mode; batches are wrapped in an
    explicit transaction.
    """

    dbms = DbmsName.SQLITE

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._connection: Optional[sqlite3.Connection] = None
        self._insert_cursor: Optional[sqlite3.Cursor] = None
        self._select_cursor: Optional[sqlite3.Cursor] = None

    @property
    def connected(self) -> bool:
        return self._connection is not None

    def _conn(self) -> sqlite3.Connection:
        if self._connection is None:
            raise RuntimeError("SQLite backend is not connected")
        return self._connection

    async def connect(self) -> None:
        if self._connection is not None:
            return
        self._logger.debug("Opening SQLite database %s", self.settings.path)
        self._connection = sqlite3.connect(self.settings.path, isolation_level=None)

    async def close(self) -> None:
        if self._connection is not None:
            connection, self._connection = self._connection, None
            self._insert_cursor = None
            self._select_cursor = None
            connection.close()

    async def create_table(self) -> None:
        conn = self._conn()
        conn.execute(DROP_TABLE_SQL)
        conn.execute(CREATE_TABLE_SQL)

    def _to_row(self, entry: DbEntry) -> tuple:
        # sqlite3 has no adapter for Decimal and its date adapter is deprecated
        return (
            entry.varchar_field,
            entry.int_field,
            str(entry.decimal_field),
            entry.date_field.isoformat(),
        )

    async def prepare_insert(self) -> None:
        if self._insert_cursor is not None:
            await self.close_insert()
        self._insert_cursor = self._conn().cursor()

    async def exec_insert_batch(self) -> None:
        if self._insert_cursor is None:
            raise RuntimeError("Insert statement has not been prepared")
        cursor = self._insert_cursor
        cursor.execute("BEGIN")
        try:
            cursor.executemany(INSERT_SQL, self._insert_batch)
            cursor.execute("COMMIT")
        except sqlite3.Error:
            # a failed COMMIT can leave the transaction open
            if self._conn().in_transaction:
                cursor.execute("ROLLBACK")
            raise

    async def close_insert(self) -> None:
        if self._insert_cursor is not None:
            cursor, self._insert_cursor = self._insert_cursor, None
            cursor.close()

    async def max_primary_key(self) -> int:
        row = self._conn().execute(MAX_PK_SQL).fetchone()
        return row[0] or 0

    async def prepare_select(self) -> None:
        if self._select_cursor is not None:
            await self.close_select()
        self._select_cursor = self._conn().cursor()

    async def exec_select(self) -> List[tuple]:
        if self._select_cursor is None:
            raise RuntimeError("Select statement has not been prepared")
        return self._select_cursor.execute(SELECT_BY_PK_SQL, (self._select_pk,)).fetchall()

    async def close_select(self) -> None:
        if self._select_cursor is not None:
            cursor, self._select_cursor = self._select_cursor, None
            cursor.close()
