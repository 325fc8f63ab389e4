"""
One-shot startup introspection of a live backend: reported reserved words,
server version and the bind-parameter ceiling.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .config import DialectConfig
from .errors import DialectConfigurationError
from .utils import get_logger, time_call

logger = get_logger("resolution")

_KEYWORD_QUERIES = {
    "postgresql": "select word from pg_get_keywords() where catcode = 'R'",
    "mysql": "select word from information_schema.keywords where reserved = 1",
}

_VERSION_QUERIES = {
    "postgresql": "show server_version",
    "mysql": "select version()",
    "sqlite": "select sqlite_version()",
}

# SQLITE_MAX_VARIABLE_NUMBER: 999 before 3.32.0, 32766 since.
_SQLITE_LEGACY_VARIABLE_LIMIT = 999
_SQLITE_VARIABLE_LIMIT = 32766


@dataclass(frozen=True)
class DialectResolutionInfo:
    database_name: str
    version: Optional[str] = None
    keywords: Tuple[str, ...] = ()
    in_list_ceiling: Optional[int] = None

    @property
    def version_tuple(self) -> Tuple[int, ...]:
        if not self.version:
            return ()
        parts = []
        for piece in self.version.split(" ", 1)[0].split("."):
            digits = "".join(ch for ch in piece if ch.isdigit())
            if not digits:
                break
            parts.append(int(digits))
        return tuple(parts)

    @classmethod
    def from_connection(cls, connection: Any, dialect_name: str) -> "DialectResolutionInfo":
        """
        Query a caller-owned DB-API connection; the connection is left open.
        """
        from .dialects import canonical_name

        name = canonical_name(dialect_name)
        version = None
        keywords: Tuple[str, ...] = ()
        cursor = connection.cursor()
        try:
            if name in _VERSION_QUERIES:
                cursor.execute(_VERSION_QUERIES[name])
                row = cursor.fetchone()
                version = str(row[0]) if row else None
            if name in _KEYWORD_QUERIES:
                cursor.execute(_KEYWORD_QUERIES[name])
                keywords = tuple(str(row[0]).lower() for row in cursor.fetchall())
        finally:
            cursor.close()

        info = cls(database_name=name, version=version, keywords=keywords)
        if name == "sqlite":
            ceiling = (
                _SQLITE_VARIABLE_LIMIT
                if info.version_tuple >= (3, 32)
                else _SQLITE_LEGACY_VARIABLE_LIMIT
            )
            info = cls(database_name=name, version=version, keywords=keywords, in_list_ceiling=ceiling)
        logger.info(
            "Resolved %s %s with %d reported keywords", name, version or "(unknown version)", len(keywords)
        )
        return info


def _load_psycopg():
    try:
        import psycopg

        return psycopg
    except ImportError:
        return None


def _load_pymysql():
    try:
        import pymysql

        return pymysql
    except ImportError:
        return None


def _connect(config: DialectConfig) -> Any:
    from .dialects import canonical_name

    name = canonical_name(config.dialect)
    dsn = config.dsn
    if name == "sqlite":
        import sqlite3

        path = dsn.path if dsn else ""
        if path in ("", "/", "/:memory:"):
            return sqlite3.connect(":memory:")
        # sqlite:///relative.db -> relative.db, sqlite:////abs.db -> /abs.db
        return sqlite3.connect(path[1:] if path.startswith("/") else path)
    if name == "postgresql":
        driver = _load_psycopg()
        if driver is None:
            raise DialectConfigurationError("psycopg is required to introspect PostgreSQL.")
        url = config.connection_url().replace(dsn.scheme + "://", "postgresql://", 1)
        return driver.connect(url)
    if name == "mysql":
        driver = _load_pymysql()
        if driver is None:
            raise DialectConfigurationError("pymysql is required to introspect MySQL.")
        return driver.connect(
            host=dsn.host or "localhost",
            port=dsn.port or 3306,
            user=dsn.username,
            password=dsn.password or "",
            database=dsn.database,
        )
    raise DialectConfigurationError(f"Introspection is not available for dialect '{name}'.")


def introspect(config: DialectConfig) -> DialectResolutionInfo:
    """
    Open a short-lived connection, resolve backend details and close it.
    """
    connection = _connect(config)
    try:
        with time_call("dialect.introspect", logger, dsn=config.redacted_dsn()):
            return DialectResolutionInfo.from_connection(connection, config.dialect)
    finally:
        connection.close()
