import pytest

from smcore.errors import ConfigError, InvalidValue, ValueOutOfRange
from smcore.types.primitives import Balance, BlockNumber, Nonce, UInt, check_instance


def test_default_widths_match_reference_runtime() -> None:
    assert Balance.max_value == 2**128 - 1
    assert BlockNumber.max_value == 2**32 - 1
    assert Nonce.max_value == 2**32 - 1
    assert Balance.zero == 0 and Balance.one == 1


def test_checked_arithmetic_rejects_out_of_range() -> None:
    u8 = UInt("U8", 8)
    assert u8.checked_add(250, 5) == 255
    assert u8.checked_add(250, 6) is None
    assert u8.checked_sub(5, 5) == 0
    assert u8.checked_sub(5, 6) is None


def test_saturating_arithmetic_clamps() -> None:
    u8 = UInt("U8", 8)
    assert u8.saturating_add(250, 100) == 255
    assert u8.saturating_sub(3, 100) == 0
    assert u8.saturating_add(1, 2) == 3


@pytest.mark.parametrize("bad", [-1, 2**128, True, "5", 1.0, None])
def test_check_rejects_values_outside_the_type(bad) -> None:
    with pytest.raises(ValueOutOfRange) as ei:
        Balance.check(bad)
    assert ei.value.data["type"] == "Balance"
    assert isinstance(ei.value, ValueError)


def test_check_returns_value_in_range() -> None:
    assert Balance.check(0) == 0
    assert Balance.check(Balance.max_value) == Balance.max_value


def test_non_positive_width_is_a_config_error() -> None:
    with pytest.raises(ConfigError):
        UInt("Broken", 0)


def test_check_instance() -> None:
    assert check_instance("AccountId", str, "alice") == "alice"
    with pytest.raises(InvalidValue) as ei:
        check_instance("AccountId", str, 42)
    assert isinstance(ei.value, TypeError)
    assert ei.value.data == {"binding": "AccountId", "expected": "str", "got": "int"}
