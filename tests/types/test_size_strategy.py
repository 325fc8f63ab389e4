import datetime
import decimal
import math

import pytest

from portsql.types import DefaultSizeStrategy, LanguageType, Size, SizeDefaults, TypeCode

strategy = DefaultSizeStrategy()


def test_boolean_ignores_default_jpa_length():
    assert strategy.resolve(TypeCode.BOOLEAN, LanguageType.BOOLEAN, length=255) == Size(length=1)
    assert strategy.resolve(TypeCode.BIT) == Size(length=1)


def test_char_for_single_characters_ignores_default_length():
    assert strategy.resolve(TypeCode.CHAR, LanguageType.CHARACTER, length=255) == Size(length=1)
    assert strategy.resolve(TypeCode.CHAR, LanguageType.STRING, length=255) == Size(length=255)
    assert strategy.resolve(TypeCode.NCHAR, LanguageType.UUID, length=255) == Size(length=36)


def test_uuid_lengths_depend_on_binary_storage():
    assert strategy.resolve(TypeCode.VARCHAR, LanguageType.UUID, length=255).length == 36
    assert strategy.resolve(TypeCode.VARBINARY, LanguageType.UUID, length=255).length == 16
    assert strategy.resolve(TypeCode.VARCHAR, LanguageType.UUID, length=40).length == 40


def test_string_defaults_and_caller_length_wins():
    assert strategy.resolve(TypeCode.VARCHAR).length == 255
    assert strategy.resolve(TypeCode.VARCHAR, length=80).length == 80
    assert strategy.resolve(TypeCode.LONGVARCHAR).length == 32_600
    assert strategy.resolve(TypeCode.LONGVARCHAR, length=100).length == 100


def test_lob_default_length():
    assert strategy.resolve(TypeCode.BLOB) == Size(length=1_048_576)
    assert strategy.resolve(TypeCode.CLOB, length=500) == Size(length=500)


def test_float_decimal_digits_converted_to_binary_precision():
    size = strategy.resolve(TypeCode.FLOAT, LanguageType.DOUBLE, precision=10, scale=2)
    assert size == Size(precision=math.ceil(10 * math.log(10)))
    assert size.precision == 24


def test_float_precision_without_scale_is_kept():
    assert strategy.resolve(TypeCode.FLOAT, precision=30) == Size(precision=30)
    assert strategy.resolve(TypeCode.REAL) == Size(precision=24)
    assert strategy.resolve(TypeCode.DOUBLE) == Size(precision=53)


def test_timestamp_precision():
    assert strategy.resolve(TypeCode.TIMESTAMP) == Size(precision=6)
    assert strategy.resolve(TypeCode.TIMESTAMP_WITH_TIMEZONE, precision=3) == Size(precision=3)


def test_numeric_defaults_follow_language_type():
    assert strategy.resolve(TypeCode.NUMERIC) == Size(precision=38, scale=2)
    assert strategy.resolve(TypeCode.NUMERIC, LanguageType.INTEGER) == Size(precision=10, scale=0)
    assert strategy.resolve(TypeCode.DECIMAL, LanguageType.LONG) == Size(precision=19, scale=0)
    assert strategy.resolve(TypeCode.NUMERIC, precision=12, scale=4) == Size(precision=12, scale=4)


def test_interval_second_uses_duration_defaults():
    assert strategy.resolve(TypeCode.INTERVAL_SECOND) == Size(precision=18, scale=9)


def test_codes_without_rules_leave_size_empty():
    assert strategy.resolve(TypeCode.INTEGER).is_empty()
    assert strategy.resolve(TypeCode.DATE).is_empty()


def test_dialect_defaults_change_the_numbers():
    custom = DefaultSizeStrategy(SizeDefaults(string_length=100, timestamp_precision=3, lob_length=2048))
    assert custom.resolve(TypeCode.VARCHAR).length == 100
    assert custom.resolve(TypeCode.TIMESTAMP).precision == 3
    assert custom.resolve(TypeCode.CLOB).length == 2048


def test_size_capacity_prefers_length():
    assert Size(length=10, precision=5).capacity() == 10
    assert Size.of_precision(5).capacity() == 5
    assert Size.nil().capacity() is None


@pytest.mark.parametrize(
    "python_type, expected",
    [
        (bool, LanguageType.BOOLEAN),
        (int, LanguageType.LONG),
        (float, LanguageType.DOUBLE),
        (decimal.Decimal, LanguageType.DECIMAL),
        (str, LanguageType.STRING),
        (bytes, LanguageType.BYTES),
        (datetime.datetime, LanguageType.TIMESTAMP),
        (datetime.date, LanguageType.DATE),
        (datetime.timedelta, LanguageType.DURATION),
    ],
)
def test_language_type_of_python_types(python_type, expected):
    assert LanguageType.of(python_type) is expected


def test_language_type_of_unknown_type():
    with pytest.raises(ValueError):
        LanguageType.of(object)
