from typing import Dict, Type, Union

from dbbench.config import ConfigurationError, DatabaseSettings, DbmsName
from dbbench.database.backend import DbBackend
from dbbench.database.postgres import PostgresBackend
from dbbench.database.sqlite import SqliteBackend

BACKENDS: Dict[DbmsName, Type[DbBackend]] = {
    DbmsName.POSTGRESQL: PostgresBackend,
    DbmsName.SQLITE: SqliteBackend,
}


def get_backend(dbms: Union[DbmsName, str], settings: DatabaseSettings) -> DbBackend:
    """
    Create a new, unconnected backend for the given database.

    Raises:
        ConfigurationError: if no backend exists for ``dbms``
    """
    try:
        backend_cls = BACKENDS[DbmsName(dbms)]
    except (KeyError, ValueError):
        raise ConfigurationError(
            f"Unsupported database {dbms!r}; expected one of: "
            + ", ".join(d.value for d in DbmsName)
        ) from None
    return backend_cls(settings)
