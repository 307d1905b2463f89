import logging
from typing import Callable, Optional

from dbbench.database.backend import DbBackend
from dbbench.engine.operation import Operation, StateT
from dbbench.logging_config import get_logger

BackendFactory = Callable[[], DbBackend]


class DbOperation(Operation[StateT]):
    """
    Operation owning a database backend for the duration of one run.

    ``init`` opens a fresh connection and calls ``setup``; ``finish`` calls
    ``teardown`` and closes the connection. Subclasses prepare and release
    their statements in ``setup`` and ``teardown``.
    """

    def __init__(self, backend_factory: BackendFactory, logger: Optional[logging.Logger] = None):
        self._backend_factory = backend_factory
        self._logger = logger or get_logger(__name__)
        self.backend: Optional[DbBackend] = None

    async def setup(self) -> None:
        pass

    async def teardown(self) -> None:
        pass

    async def init(self) -> int:
        self.backend = self._backend_factory()
        try:
            await self.backend.connect()
            await self.setup()
        except Exception:
            self._logger.exception("Failed to initialize '%s' on %s", self.name(), self.backend.dbms.value)
            # finish() is not called after a failed init
            await self._close_backend()
            return -1
        return 0

    async def finish(self) -> None:
        try:
            await self.teardown()
        finally:
            await self._close_backend()

    async def _close_backend(self) -> None:
        if self.backend is None:
            return
        try:
            await self.backend.close()
        except Exception:
            self._logger.exception("Failed to close the %s connection", self.backend.dbms.value)
