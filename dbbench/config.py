"""
Benchmark configuration.

Settings are read from a properties file (``key=value`` lines) whose path is
taken from ``DBBENCH_CONFIG`` and default to ``configuration.properties``.
Every key can be overridden through an environment variable named after it,
e.g. ``benchmark.select_executions`` -> ``DBBENCH_BENCHMARK_SELECT_EXECUTIONS``.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from dbbench.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = "DBBENCH_CONFIG"
DEFAULT_CONFIG_FILE = "configuration.properties"
ENV_PREFIX = "DBBENCH_"

DEFAULT_BATCH_INSERT_EXECUTIONS = 100
DEFAULT_INSERTS_PER_TRANSACTION = 10
DEFAULT_SELECT_EXECUTIONS = 100
DEFAULT_WARMUP_EXECUTIONS = 5


class ConfigurationError(ValueError):
    """Raised when the configuration cannot be resolved into runnable settings."""


class DbmsName(str, Enum):
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"


def _positive_or_default(cls: type[BaseModel], value: Any, info: ValidationInfo) -> int:
    """Replace absent, non-numeric or non-positive values with the field default."""
    default = cls.model_fields[info.field_name].default
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = 0

    if number <= 0:
        logger.warning(
            "Invalid input for property %s: %r is not a positive number, using default value %s",
            info.field_name, value, default,
        )
        return default
    return number


class BenchmarkSettings(BaseModel):
    """Iteration counts and the backend the testers run against."""

    model_config = ConfigDict(frozen=True)

    batch_insert_executions: int = Field(
        default=DEFAULT_BATCH_INSERT_EXECUTIONS,
        description="Number of measured batch inserts.",
    )
    inserts_per_transaction: int = Field(
        default=DEFAULT_INSERTS_PER_TRANSACTION,
        description="Number of rows inserted by a single batch.",
    )
    select_executions: int = Field(
        default=DEFAULT_SELECT_EXECUTIONS,
        description="Number of measured selects by primary key.",
    )
    warmup_executions: int = Field(
        default=DEFAULT_WARMUP_EXECUTIONS,
        description="Number of warmup iterations of every tester.",
    )
    dbms: DbmsName = Field(description="Backend the benchmark runs against.")

    @field_validator(
        "batch_insert_executions",
        "inserts_per_transaction",
        "select_executions",
        "warmup_executions",
        mode="before",
    )
    @classmethod
    def _check_counts(cls, value: Any, info: ValidationInfo) -> int:
        return _positive_or_default(cls, value, info)

    @field_validator("dbms", mode="before")
    @classmethod
    def _normalize_dbms(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class DatabaseSettings(BaseModel):
    """Connection parameters of the database backends."""

    model_config = ConfigDict(frozen=True)

    host: str = "localhost"
    port: int = 5432
    name: str = "postgres"
    user: str = "postgres"
    password: str = ""
    path: str = Field(default="dbbench.sqlite3", description="SQLite database file.")

    @field_validator("port", mode="before")
    @classmethod
    def _check_port(cls, value: Any, info: ValidationInfo) -> int:
        return _positive_or_default(cls, value, info)


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    benchmark: BenchmarkSettings
    database: DatabaseSettings = DatabaseSettings()


def read_properties(path: Union[str, Path]) -> Dict[str, str]:
    """
    Parse a properties file.

    Lines are ``key=value`` or ``key: value``; blank lines and lines starting
    with ``#`` or ``!`` are ignored.
    """
    properties = {}
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line[0] in "#!":
                continue

            separators = [i for i in (line.find("="), line.find(":")) if i >= 0]
            if not separators:
                properties[line] = ""
                continue
            index = min(separators)
            properties[line[:index].strip()] = line[index + 1:].strip()
    return properties


def env_var_name(key: str) -> str:
    return ENV_PREFIX + key.upper().replace(".", "_")


def _known_keys() -> list[str]:
    keys = [f"benchmark.{name}" for name in BenchmarkSettings.model_fields]
    keys += [f"database.{name}" for name in DatabaseSettings.model_fields]
    return keys


def load_settings(
        path: Optional[Union[str, Path]] = None,
        environ: Optional[Dict[str, str]] = None,
) -> Settings:
    """
    Resolve the benchmark settings from the properties file and the environment.

    Args:
        path: Properties file; defaults to ``$DBBENCH_CONFIG`` or ``configuration.properties``
        environ: Environment mapping, ``os.environ`` by default

    Raises:
        ConfigurationError: if the backend selector is missing or unknown
    """
    environ = os.environ if environ is None else environ
    path = Path(path or environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE))

    try:
        properties = read_properties(path)
    except OSError as e:
        logger.error("Failed to load configuration properties from %s: %s", path, e)
        properties = {}

    sections: Dict[str, Dict[str, str]] = {"benchmark": {}, "database": {}}
    for key in _known_keys():
        value = environ.get(env_var_name(key), properties.get(key))
        if value is None:
            continue
        section, name = key.split(".", 1)
        sections[section][name] = value

    # absent counts still go through the validators so the fallback gets logged
    for name in ("batch_insert_executions", "inserts_per_transaction",
                 "select_executions", "warmup_executions"):
        sections["benchmark"].setdefault(name, None)

    if "dbms" not in sections["benchmark"]:
        raise ConfigurationError("Property benchmark.dbms is not set; it must be one of: "
                                 + ", ".join(d.value for d in DbmsName))

    try:
        return Settings(
            benchmark=BenchmarkSettings(**sections["benchmark"]),
            database=DatabaseSettings(**sections["database"]),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
