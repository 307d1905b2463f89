import asyncio
import sys

from dbbench.config import ConfigurationError, load_settings
from dbbench.logging_config import get_logger, setup_logging
from dbbench.manager import DbBenchmarkManager


async def main() -> int:
    logger = get_logger(__name__)
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error("%s", e)
        return 1

    results = await DbBenchmarkManager(settings).run()
    return 0 if results is not None else 1


def run() -> None:
    setup_logging()
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
