from .backend import DbBackend
from .entry import DbEntry, random_decimal, random_int, random_string
from .factory import get_backend
from .postgres import PostgresBackend
from .sqlite import SqliteBackend

__all__ = [
    "DbBackend",
    "DbEntry",
    "PostgresBackend",
    "SqliteBackend",
    "get_backend",
    "random_decimal",
    "random_int",
    "random_string",
]
