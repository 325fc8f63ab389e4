"""
Generic ANSI SQL dialect used when the backend is unknown.
"""

from __future__ import annotations

from typing import Final

from ..resolution import DialectResolutionInfo
from .base import Dialect, DialectBuilder, DialectCapabilities, DialectSyntax, LimitStyle

NAME: Final[str] = "generic"

CAPABILITIES: Final[DialectCapabilities] = DialectCapabilities(
    supports_sequences=True,
    supports_identity_columns=True,
    supports_boolean_type=True,
    supports_window_functions=True,
    supports_partition_by=True,
    supports_row_value_constructor_syntax=True,
    supports_current_timestamp_selection=True,
)

SYNTAX: Final[DialectSyntax] = DialectSyntax(
    limit_style=LimitStyle.OFFSET_FETCH,
    true_literal="true",
    false_literal="false",
    current_timestamp_select="values current_timestamp",
)


def generic_builder() -> DialectBuilder:
    builder = DialectBuilder(NAME)
    builder.capabilities = CAPABILITIES
    builder.syntax = SYNTAX
    return builder


def get_generic_dialect(info: DialectResolutionInfo | None = None) -> Dialect:
    return generic_builder().apply_resolution_info(info).build()
