"""Monetary amounts in base units and fee rates per 1000 bytes."""

from __future__ import annotations

from dataclasses import dataclass

COIN = 100_000_000
CENT = 1_000_000
MAX_MONEY = 21_000_000 * COIN


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _cmod(a: int, b: int) -> int:
    """Remainder matching truncating division."""
    return a - b * _cdiv(a, b)


def money_range(value: int) -> bool:
    """Whether ``value`` is a valid amount: between zero and the supply cap."""
    return 0 <= value <= MAX_MONEY


@dataclass(frozen=True, order=True)
class FeeRate:
    """A fee rate in base units per 1000 bytes."""

    satoshis_per_k: int = 0

    @classmethod
    def from_fee_paid(cls, fee_paid: int, size: int) -> "FeeRate":
        """Rate implied by paying ``fee_paid`` for ``size`` bytes."""
        if size > 0:
            return cls(_cdiv(fee_paid * 1000, size))
        return cls(0)

    def get_fee(self, size: int) -> int:
        """Fee for ``size`` bytes; a positive rate never yields a zero fee."""
        fee = _cdiv(self.satoshis_per_k * size, 1000)
        if fee == 0 and self.satoshis_per_k > 0:
            fee = self.satoshis_per_k
        return fee

    def get_fee_per_k(self) -> int:
        """Fee for 1000 bytes."""
        return self.get_fee(1000)

    def __str__(self) -> str:
        return "%d.%08d BTC/kB" % (
            _cdiv(self.satoshis_per_k, COIN),
            _cmod(self.satoshis_per_k, COIN),
        )