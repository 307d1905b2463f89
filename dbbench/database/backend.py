"""
Backend capability used by the database operations.

A backend owns one connection and the two statements the benchmark needs.
Each statement follows the same lifecycle so that an operation can decide
which steps fall inside the measured interval:

    1. prepare_insert()            / prepare_select()
    2. set_insert_batch(entries)   / set_select_pk(pk)
    3. exec_insert_batch()         / exec_select()
       (steps 2 and 3 can be repeated)
    4. close_insert()              / close_select()

Methods raise on failure; the connection is not shared between backends.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from dbbench.config import DatabaseSettings, DbmsName
from dbbench.database.entry import DbEntry
from dbbench.logging_config import get_logger


class DbBackend(ABC):
    dbms: DbmsName

    def __init__(self, settings: DatabaseSettings, logger: Optional[logging.Logger] = None):
        self.settings = settings
        self._logger = logger or get_logger(__name__)
        self._insert_batch: List[tuple] = []
        self._select_pk: Optional[int] = None

    @property
    @abstractmethod
    def connected(self) -> bool:
        raise NotImplementedError()

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection; does nothing if it is already open."""
        raise NotImplementedError()

    @abstractmethod
    async def close(self) -> None:
        raise NotImplementedError()

    @abstractmethod
    async def create_table(self) -> None:
        """Drop and recreate the benchmark table."""
        raise NotImplementedError()

    @abstractmethod
    async def prepare_insert(self) -> None:
        raise NotImplementedError()

    def set_insert_batch(self, entries: Sequence[DbEntry]) -> None:
        if entries is None:
            raise ValueError("entries parameter cannot be None")
        self._insert_batch = [self._to_row(entry) for entry in entries]

    @abstractmethod
    async def exec_insert_batch(self) -> None:
        """Insert the current batch in a single transaction and commit it."""
        raise NotImplementedError()

    @abstractmethod
    async def close_insert(self) -> None:
        raise NotImplementedError()

    @abstractmethod
    async def max_primary_key(self) -> int:
        """Highest primary key in the table, 0 if the table is empty."""
        raise NotImplementedError()

    @abstractmethod
    async def prepare_select(self) -> None:
        raise NotImplementedError()

    def set_select_pk(self, primary_key: int) -> None:
        self._select_pk = primary_key

    @abstractmethod
    async def exec_select(self) -> List[Any]:
        raise NotImplementedError()

    @abstractmethod
    async def close_select(self) -> None:
        raise NotImplementedError()

    def _to_row(self, entry: DbEntry) -> tuple:
        return entry.as_row()
