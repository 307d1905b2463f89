from .base import BackendFactory, DbOperation
from .insert import DbInsertOperation
from .select import DbSelectOperation, SelectState

__all__ = [
    "BackendFactory",
    "DbInsertOperation",
    "DbOperation",
    "DbSelectOperation",
    "SelectState",
]
