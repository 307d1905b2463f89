import logging
import sys
from typing import Iterable, List, Optional, TextIO

from dbbench.engine.result import Result
from dbbench.engine.tester import BaseTester
from dbbench.logging_config import get_logger

SEPARATOR = "-----------------------------------------------------"


def format_tester_result(tester: BaseTester, result: Result) -> str:
    """Format the result banner of a tester for display."""
    return (
        f"{SEPARATOR}\n"
        f"Result for tester: {tester.name()}\n"
        f"\n"
        f"{tester.describe()}\n"
        f"{result.render()}"
        f"{SEPARATOR}\n"
        f"\n\n"
    )


class BenchmarkRunner:
    """Runs testers one after the other and prints their results."""

    def __init__(
            self,
            testers: Optional[Iterable[BaseTester]] = None,
            stream: Optional[TextIO] = None,
            logger: Optional[logging.Logger] = None,
    ):
        self._testers: List[BaseTester] = list(testers or [])
        self._stream = stream
        self._logger = logger or get_logger(__name__)

    @property
    def testers(self) -> List[BaseTester]:
        return list(self._testers)

    def add_tester(self, tester: BaseTester) -> None:
        self._testers.append(tester)

    def _write(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(text)

    async def run(self) -> List[Result]:
        """
        Execute every tester in order.

        Returns:
            The result of each tester, in the order the testers were added
        """
        results = []
        for tester in self._testers:
            self._write(f"Executing tester: {tester.name()}\n")
            self._logger.info("Executing tester '%s'", tester.name())

            await tester.execute()

            result = tester.results()
            self._write(format_tester_result(tester, result))
            results.append(result)
        return results
