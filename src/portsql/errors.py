"""
Error hierarchy raised by dialect lookups and SQL fragment generators.
"""

from __future__ import annotations

from typing import Any


class DialectError(RuntimeError):
    """Base error for dialect-related failures."""


class NoMappingError(DialectError):
    """Raised when a type code, size or function has no registered mapping."""

    def __init__(self, message: str, *, code: Any = None, size: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.size = size


class UnsupportedCapabilityError(DialectError):
    """Raised when a generator is invoked for a capability the backend lacks."""

    def __init__(self, dialect: str, capability: str, message: str | None = None) -> None:
        self.dialect = dialect
        self.capability = capability
        super().__init__(message or f"Dialect '{dialect}' does not support {capability}.")


class ConfigurationConflictError(DialectError):
    """Raised when mutually exclusive DDL options are requested together."""

    def __init__(self, dialect: str, options: tuple[str, ...]) -> None:
        self.dialect = dialect
        self.options = options
        joined = " and ".join(options)
        super().__init__(f"Dialect '{dialect}' enables mutually exclusive options: {joined}.")


class DialectConfigurationError(DialectError):
    """Raised when configuration values or required drivers are invalid."""
