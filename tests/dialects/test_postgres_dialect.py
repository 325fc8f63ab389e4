import pytest

from portsql.dialects import get_postgres_dialect
from portsql.errors import UnsupportedCapabilityError

dialect = get_postgres_dialect()


def test_postgres_dialect_quotes_identifiers():
    assert dialect.quote_identifier('table"name') == '"table""name"'
    assert dialect.format_table("public.users") == '"public"."users"'


def test_postgres_dialect_limit_clause():
    assert dialect.limit_clause(10, None) == "limit 10"
    assert dialect.limit_clause(None, 5) == "offset 5"
    assert dialect.limit_clause(10, 5) == "limit 10 offset 5"
    assert dialect.limit_clause(None, None) == ""


def test_postgres_dialect_placeholder():
    assert dialect.parameter_placeholder() == "%s"
    assert dialect.param_style == "pyformat"


def test_postgres_literals():
    assert dialect.to_boolean_literal(True) == "true"
    assert dialect.inline_literal(b"\x0a\xff") == "bytea '\\x0aff'"
    assert dialect.inline_literal("O'Hara") == "'O''Hara'"


def test_postgres_selects():
    assert dialect.current_timestamp_select_string() == "select now()"
    assert dialect.select_guid_string() == "select gen_random_uuid()"
    assert dialect.result_set_call_sql("find_users", 2) == "select find_users(%s,%s)"
    assert dialect.result_set_call_sql("list_users") == "select list_users()"


def test_postgres_capabilities():
    capabilities = dialect.capabilities
    assert capabilities.supports_returning
    assert capabilities.supports_sequences
    assert capabilities.supports_if_exists_before_table_name
    assert not capabilities.supports_if_exists_after_table_name
    assert capabilities.supports_comment_on
    assert dialect.defaults.max_identifier_length == 63


def test_postgres_limit_style_none_rejected():
    from portsql.dialects import LimitStyle
    from portsql.dialects.postgres import postgres_builder

    limited = postgres_builder().with_syntax(limit_style=LimitStyle.NONE).build()
    with pytest.raises(UnsupportedCapabilityError):
        limited.limit_clause(10, None)
