import pytest

from portsql.locking import (
    LockMode,
    LockOptions,
    max_lock_mode,
    timeout_in_seconds,
)


def test_levels_order_modes():
    assert LockMode.PESSIMISTIC_WRITE.greater_than(LockMode.PESSIMISTIC_READ)
    assert LockMode.READ.less_than(LockMode.WRITE)
    assert LockMode.PESSIMISTIC_FORCE_INCREMENT.greater_than(LockMode.FORCE)
    assert not LockMode.UPGRADE.greater_than(LockMode.WRITE)
    assert not LockMode.NONE.greater_than(LockMode.NONE)


def test_parse_accepts_loose_spelling():
    assert LockMode.parse("pessimistic-write") is LockMode.PESSIMISTIC_WRITE
    assert LockMode.parse(" Upgrade NoWait ") is LockMode.UPGRADE_NOWAIT
    with pytest.raises(ValueError, match="Unknown lock mode"):
        LockMode.parse("exclusive")


def test_max_lock_mode_keeps_first_of_equal_levels():
    assert max_lock_mode([]) is LockMode.NONE
    assert max_lock_mode([LockMode.READ, LockMode.PESSIMISTIC_READ, LockMode.OPTIMISTIC]) is LockMode.PESSIMISTIC_READ
    assert max_lock_mode([LockMode.UPGRADE, LockMode.WRITE]) is LockMode.UPGRADE


def test_effective_lock_mode_includes_alias_modes():
    options = LockOptions(
        alias_lock_modes={"a": LockMode.PESSIMISTIC_READ, "b": LockMode.PESSIMISTIC_WRITE}
    )
    assert options.effective_lock_mode() is LockMode.PESSIMISTIC_WRITE
    assert options.with_effective_lock_mode().lock_mode is LockMode.PESSIMISTIC_WRITE
    assert LockOptions(LockMode.FORCE, alias_lock_modes={"a": LockMode.READ}).effective_lock_mode() is LockMode.FORCE


@pytest.mark.parametrize(
    "millis, seconds",
    [(1, 1), (499, 1), (1499, 1), (1500, 2), (2500, 3), (60_000, 60)],
)
def test_timeout_in_seconds_rounds_half_up(millis, seconds):
    assert timeout_in_seconds(millis) == seconds
