"""
smcore.types.primitives — bounded integer types and the default bindings.

Values stay plain Python `int`s; a `UInt` is a *type descriptor* carrying the
width and the checked/saturating arithmetic that a fixed-width unsigned type
would have. Pallets ask their config for the descriptor they need and do all
arithmetic through it, so an `Overflow` is observable exactly where a u128
would overflow.

    Balance = UInt("Balance", 128)
    Balance.checked_add(Balance.max_value, 1)   # -> None
    Balance.saturating_add(Balance.max_value, 1)  # -> Balance.max_value
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..errors import ConfigError, InvalidValue, ValueOutOfRange


@dataclass(frozen=True)
class UInt:
    """Unsigned integer type of `bits` width."""

    name: str
    bits: int

    def __post_init__(self) -> None:
        if not isinstance(self.bits, int) or isinstance(self.bits, bool) or self.bits <= 0:
            raise ConfigError(f"{self.name}: bits must be a positive int", bits=repr(self.bits))

    @property
    def zero(self) -> int:
        return 0

    @property
    def one(self) -> int:
        return 1

    @property
    def max_value(self) -> int:
        return (1 << self.bits) - 1

    def contains(self, value: Any) -> bool:
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and 0 <= value <= self.max_value
        )

    def check(self, value: Any) -> int:
        """Return `value` unchanged if it fits, else raise ValueOutOfRange."""
        if not self.contains(value):
            raise ValueOutOfRange(self.name, value, bits=self.bits)
        return value

    def checked_add(self, a: int, b: int) -> Optional[int]:
        out = a + b
        return out if out <= self.max_value else None

    def checked_sub(self, a: int, b: int) -> Optional[int]:
        out = a - b
        return out if out >= 0 else None

    def saturating_add(self, a: int, b: int) -> int:
        return min(a + b, self.max_value)

    def saturating_sub(self, a: int, b: int) -> int:
        return max(a - b, 0)

    def __str__(self) -> str:
        return f"{self.name}(u{self.bits})"


def check_instance(binding: str, expected: type, value: Any) -> Any:
    """Return `value` if it is an instance of the bound type, else raise InvalidValue."""
    if not isinstance(value, expected):
        raise InvalidValue(binding, expected, value)
    return value


# Default bindings used by the runtime unless configured otherwise.
AccountId = str
Content = str
BALANCE_BITS = 128
BLOCK_NUMBER_BITS = 32
NONCE_BITS = 32

Balance = UInt("Balance", BALANCE_BITS)
BlockNumber = UInt("BlockNumber", BLOCK_NUMBER_BITS)
Nonce = UInt("Nonce", NONCE_BITS)


__all__ = [
    "UInt",
    "check_instance",
    "AccountId",
    "Content",
    "Balance",
    "BlockNumber",
    "Nonce",
    "BALANCE_BITS",
    "BLOCK_NUMBER_BITS",
    "NONCE_BITS",
]
