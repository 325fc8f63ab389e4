import pytest

from portsql.dialects import get_dialect
from portsql.errors import NoMappingError
from portsql.functions import FunctionRegistryBuilder, register_standard_functions

generic = get_dialect("generic")


def test_standard_renditions():
    assert generic.render_function("concat", ["a", "b", "c"]) == "(a || b || c)"
    assert generic.render_function("coalesce", ["a", "b"]) == "coalesce(a, b)"
    assert generic.render_function("length", ["name"]) == "character_length(name)"
    assert generic.render_function("locate", ["'x'", "name"]) == "position('x' in name)"
    assert generic.render_function("str", ["id"]) == "cast(id as varchar)"
    assert generic.render_function("current_timestamp") == "current_timestamp"


def test_alternate_keys_share_implementation():
    assert generic.render_function("ifnull", ["a", "b"]) == "coalesce(a, b)"
    assert generic.render_function("bool_and", ["flag"]) == "(sum(case when flag then 0 else 1 end)=0)"
    assert generic.render_function("local_datetime") == "current_timestamp"
    assert generic.render_function("ceil", ["x"]) == "ceiling(x)"


def test_lookup_is_case_insensitive():
    assert generic.render_function("UPPER", ["name"]) == "upper(name)"
    assert "Lower" in generic.functions


def test_unknown_function():
    with pytest.raises(NoMappingError, match="No function mapping for 'soundex'"):
        generic.render_function("soundex", ["name"])
    assert generic.functions.find("soundex") is None


def test_arity_is_checked():
    with pytest.raises(ValueError, match="expects 1 arguments"):
        generic.render_function("lower", ["a", "b"])
    with pytest.raises(ValueError, match="expects 2 to 3 arguments"):
        generic.render_function("substring", ["a", "1", "2", "3"])
    with pytest.raises(ValueError, match="at least 2"):
        generic.render_function("concat", ["a"])
    with pytest.raises(ValueError):
        generic.render_function("current_date", ["x"])


@pytest.mark.parametrize(
    "name, function, args, expected",
    [
        ("postgresql", "every", ["flag"], "bool_and(flag)"),
        ("postgresql", "bool_or", ["flag"], "bool_or(flag)"),
        ("postgresql", "str", ["id"], "cast(id as text)"),
        ("mysql", "concat", ["a", "b"], "concat(a, b)"),
        ("mysql", "length", ["name"], "char_length(name)"),
        ("sqlite", "locate", ["'x'", "name"], "instr(name, 'x')"),
        ("sqlite", "greatest", ["a", "b"], "max(a, b)"),
        ("sqlite", "left", ["name", "3"], "substr(name, 1, 3)"),
        ("oracle", "ifnull", ["a", "b"], "nvl(a, b)"),
        ("oracle", "ceil", ["x"], "ceil(x)"),
        ("oracle", "current_time", [], "current_timestamp"),
        ("sqlserver", "ifnull", ["a", "b"], "isnull(a, b)"),
        ("sqlserver", "mod", ["a", "b"], "(a % b)"),
        ("sqlserver", "length", ["name"], "len(name)"),
        ("sqlserver", "current_date", [], "convert(date, getdate())"),
    ],
)
def test_backend_overrides(name, function, args, expected):
    assert get_dialect(name).render_function(function, args) == expected


def test_alias_to_unregistered_function_fails_at_build():
    builder = FunctionRegistryBuilder()
    builder.register_alternate_key("nvl", "coalesce")
    with pytest.raises(ValueError, match="unregistered function 'coalesce'"):
        builder.build()


def test_explicit_registration_beats_alias():
    builder = FunctionRegistryBuilder()
    register_standard_functions(builder)
    builder.register_native("ifnull", "nvl", min_args=2, max_args=2)
    registry = builder.build()
    assert registry.render("ifnull", ["a", "b"]) == "nvl(a, b)"
    assert registry.render("coalesce", ["a", "b"]) == "coalesce(a, b)"
    assert "bool_or" in registry.names()
