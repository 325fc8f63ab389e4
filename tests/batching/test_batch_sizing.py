import pytest

from portsql.batching import (
    BatchLoadSizingStrategy,
    ceiling_power_of_two,
    determine_batch_size,
    pad_parameters,
    render_in_list,
)
from portsql.dialects import get_dialect


def test_unbounded_sizes_pad_to_powers_of_two():
    sizes = [determine_batch_size(1, count, 0) for count in range(1, 11)]
    assert sizes == [1, 2, 4, 4, 8, 8, 8, 8, 16, 16]


def test_ceiling_caps_padding():
    assert determine_batch_size(1, 4, 8) == 4
    assert determine_batch_size(1, 5, 8) == 5
    assert determine_batch_size(1, 8, 8) == 8
    assert determine_batch_size(1, 9, 8) == 8
    assert determine_batch_size(1, 1500, 1000) == 1000


def test_tuple_keys_ignore_the_ceiling():
    assert determine_batch_size(2, 9, 8) == 16


def test_zero_keys():
    assert determine_batch_size(1, 0, 8) == 0


def test_invalid_inputs():
    with pytest.raises(ValueError):
        determine_batch_size(1, -1, 8)
    with pytest.raises(ValueError):
        determine_batch_size(0, 3, 8)
    with pytest.raises(ValueError):
        ceiling_power_of_two(0)


def test_pad_parameters_repeats_last_value():
    assert pad_parameters([1, 2, 3], 4) == [1, 2, 3, 3]
    assert pad_parameters([1, 2], 2) == [1, 2]
    assert pad_parameters([], 4) == []


def test_render_in_list_pads_placeholders():
    sql, params = render_in_list("id", [1, 2, 3, 4, 5], "?")
    assert sql == "id in(?,?,?,?,?,?,?,?)"
    assert params == [1, 2, 3, 4, 5, 5, 5, 5]

    sql, params = render_in_list("id", list(range(9)), "?")
    assert sql.count("?") == 16


def test_render_in_list_without_padding():
    sql, params = render_in_list("id", [1, 2, 3], "%s", pad=False)
    assert sql == "id in(%s,%s,%s)"
    assert params == [1, 2, 3]


def test_render_in_list_refuses_to_exceed_ceiling():
    with pytest.raises(ValueError, match="exceed the IN-list ceiling"):
        render_in_list("id", list(range(9)), "?", sizing=BatchLoadSizingStrategy(8))
    with pytest.raises(ValueError):
        render_in_list("id", [], "?")


def test_dialect_batching_uses_backend_ceiling():
    assert get_dialect("oracle").batch_size(1, 1500) == 1000
    assert get_dialect("sqlserver").batch_size(1, 3000) == 2100
    assert get_dialect("postgresql").batch_size(1, 3000) == 4096


def test_dialect_in_list_uses_backend_placeholders():
    sql, params = get_dialect("postgresql").render_in_list("id", [1, 2, 3])
    assert sql == "id in(%s,%s,%s,%s)"
    assert params == [1, 2, 3, 3]

    sql, _ = get_dialect("oracle").render_in_list("id", [7, 8, 9])
    assert sql == "id in(:1,:2,:3,:4)"
