"""
DSN-driven dialect configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple
from urllib.parse import parse_qs, urlencode, urlparse

from .errors import DialectConfigurationError

DEFAULT_ENV_VAR = "PORTSQL_DSN"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

_INT_OVERRIDES = (
    "in_list_ceiling",
    "default_timestamp_precision",
    "default_decimal_precision",
    "default_lob_length",
)


def _parse_bool(value: str, *, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise DialectConfigurationError(f"Invalid boolean value for '{key}': {value!r}")


def _parse_int(value: str, *, key: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise DialectConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc


@dataclass
class DSNConfig:
    scheme: str
    username: Optional[str]
    password: Optional[str]
    host: Optional[str]
    port: Optional[int]
    database: Optional[str]
    path: str
    query: dict[str, str]

    @property
    def backend(self) -> str:
        # "postgresql+psycopg" -> "postgresql"
        return self.scheme.split("+", 1)[0].lower()

    def url(self, *, redact: bool = False) -> str:
        netloc = ""
        if self.username:
            netloc += self.username
            if self.password:
                netloc += ":***" if redact else f":{self.password}"
            netloc += "@"
        if self.host:
            netloc += self.host
        if self.port:
            netloc += f":{self.port}"

        # built by hand to keep the double slash when netloc is empty
        result = f"{self.scheme}://{netloc}{self.path or ''}"
        if self.query:
            result += f"?{urlencode(self.query)}"
        return result

    def redacted(self) -> str:
        return self.url(redact=True)


def parse_dsn(dsn: str) -> DSNConfig:
    parsed = urlparse(dsn)
    if not parsed.scheme:
        raise DialectConfigurationError(f"DSN has no scheme: {dsn!r}")
    try:
        port = parsed.port
    except ValueError as exc:
        raise DialectConfigurationError(f"Invalid port in DSN: {exc}") from exc
    return DSNConfig(
        scheme=parsed.scheme,
        username=parsed.username,
        password=parsed.password,
        host=parsed.hostname,
        port=port,
        database=parsed.path.lstrip("/") or None,
        path=parsed.path or "",
        query={k: v[0] for k, v in parse_qs(parsed.query).items()},
    )


@dataclass
class DialectConfig:
    """
    Normalized dialect selection plus numeric overrides taken from a DSN.
    """

    dialect: str
    in_list_ceiling: Optional[int] = None
    default_timestamp_precision: Optional[int] = None
    default_decimal_precision: Optional[int] = None
    default_lob_length: Optional[int] = None
    keywords: Tuple[str, ...] = ()
    introspect: bool = False
    dsn: Optional[DSNConfig] = None
    source: Optional[str] = None
    options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dsn(cls, dsn: str, **kwargs: Any) -> "DialectConfig":
        """
        Build a config from a DSN; portsql-specific query parameters are
        consumed and the remainder kept as driver options.
        """
        parsed = parse_dsn(dsn)
        query = dict(parsed.query)

        overrides: dict[str, Any] = {}
        for key in _INT_OVERRIDES:
            if key in query:
                value = _parse_int(query.pop(key), key=key)
                if key != "in_list_ceiling" and value < 0:
                    raise DialectConfigurationError(f"'{key}' must not be negative, got {value}")
                overrides[key] = value
        if "keywords" in query:
            overrides["keywords"] = tuple(
                word.strip() for word in query.pop("keywords").split(",") if word.strip()
            )
        if "introspect" in query:
            overrides["introspect"] = _parse_bool(query.pop("introspect"), key="introspect")

        parsed.query = query
        overrides.update(kwargs)
        return cls(dialect=parsed.backend, dsn=parsed, options=dict(query), **overrides)

    @classmethod
    def from_env(cls, env_var: str = DEFAULT_ENV_VAR, **kwargs: Any) -> "DialectConfig":
        value = os.getenv(env_var)
        if not value:
            raise DialectConfigurationError(f"Environment variable {env_var} is not set")
        return cls.from_dsn(value, source=env_var, **kwargs)

    def connection_url(self) -> str:
        if self.dsn is None:
            raise DialectConfigurationError(f"No DSN configured for dialect '{self.dialect}'")
        return self.dsn.url()

    def redacted_dsn(self) -> str:
        if self.dsn:
            return self.dsn.redacted()
        return f"{self.dialect}://"

    def descriptive_label(self) -> str:
        redacted = self.redacted_dsn()
        if self.source:
            return f"{self.source} ({redacted})"
        return redacted
