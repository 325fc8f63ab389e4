"""
Dialect strategy registry.
"""

from __future__ import annotations

from typing import Callable, Dict

from ..config import DialectConfig
from ..errors import DialectConfigurationError
from ..resolution import DialectResolutionInfo, introspect
from ..utils import get_logger
from .base import (
    Dialect,
    DialectBuilder,
    DialectCapabilities,
    DialectDefaults,
    DialectSyntax,
    LimitStyle,
    QueryHintStyle,
    TrimStyle,
)
from .generic import generic_builder, get_generic_dialect
from .mysql import get_mysql_dialect, mysql_builder
from .oracle import get_oracle_dialect, oracle_builder
from .postgres import get_postgres_dialect, postgres_builder
from .sqlite import get_sqlite_dialect, sqlite_builder
from .sqlserver import get_sqlserver_dialect, sqlserver_builder

logger = get_logger("dialects.registry")

_BUILDERS: Dict[str, Callable[[], DialectBuilder]] = {
    "generic": generic_builder,
    "postgresql": postgres_builder,
    "mysql": mysql_builder,
    "sqlite": sqlite_builder,
    "oracle": oracle_builder,
    "sqlserver": sqlserver_builder,
}

_ALIASES: Dict[str, str] = {
    "ansi": "generic",
    "postgres": "postgresql",
    "pg": "postgresql",
    "psycopg": "postgresql",
    "mariadb": "mysql",
    "pymysql": "mysql",
    "sqlite3": "sqlite",
    "oracledb": "oracle",
    "mssql": "sqlserver",
    "sql_server": "sqlserver",
}


def available_dialects() -> list[str]:
    return sorted(_BUILDERS)


def canonical_name(name: str) -> str:
    normalized = name.strip().lower().split("+", 1)[0]
    normalized = _ALIASES.get(normalized, normalized)
    if normalized not in _BUILDERS:
        raise DialectConfigurationError(
            f"Unknown dialect: {name!r}. Available: {', '.join(available_dialects())}"
        )
    return normalized


def builder_for(name: str) -> DialectBuilder:
    return _BUILDERS[canonical_name(name)]()


def get_dialect(name: str, info: DialectResolutionInfo | None = None) -> Dialect:
    """
    Build the dialect registered under ``name`` (aliases accepted).
    """
    return builder_for(name).apply_resolution_info(info).build()


def resolve_dialect(config: DialectConfig, info: DialectResolutionInfo | None = None) -> Dialect:
    """
    Build a dialect from configuration, introspecting the backend first when
    the config asks for it. Explicit config overrides win over reported values.
    """
    if info is None and config.introspect:
        info = introspect(config)
    builder = builder_for(config.dialect)
    builder.apply_resolution_info(info).apply_config(config)
    logger.info("Resolving %s dialect for %s", builder.name, config.descriptive_label())
    return builder.build()


__all__ = [
    "Dialect",
    "DialectBuilder",
    "DialectCapabilities",
    "DialectDefaults",
    "DialectSyntax",
    "LimitStyle",
    "QueryHintStyle",
    "TrimStyle",
    "available_dialects",
    "builder_for",
    "canonical_name",
    "get_dialect",
    "resolve_dialect",
    "get_generic_dialect",
    "get_postgres_dialect",
    "get_mysql_dialect",
    "get_sqlite_dialect",
    "get_oracle_dialect",
    "get_sqlserver_dialect",
]
