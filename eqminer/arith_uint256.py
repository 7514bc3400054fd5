"""Fixed-width 256-bit unsigned integers with wrap-around arithmetic and compact encoding."""

from __future__ import annotations

from functools import total_ordering

BITS = 256
WIDTH = BITS // 32
_MASK = (1 << BITS) - 1
_MASK32 = 0xFFFF_FFFF
_MASK64 = 0xFFFF_FFFF_FFFF_FFFF


class UintError(ArithmeticError):
    """Raised for arithmetic that has no 256-bit result, such as division by zero."""


def _parse_hex(text: str) -> int:
    text = text.strip()
    if text[:2] in ("0x", "0X"):
        text = text[2:]
    if not text:
        return 0
    return int(text, 16) & _MASK


@total_ordering
class ArithUint256:
    """An unsigned 256-bit integer; every operation wraps modulo 2**256."""

    __slots__ = ("_value",)

    def __init__(self, value: "int | str | ArithUint256" = 0) -> None:
        if isinstance(value, ArithUint256):
            self._value = value._value
        elif isinstance(value, bool):
            self._value = int(value)
        elif isinstance(value, int):
            self._value = value & _MASK
        elif isinstance(value, str):
            self._value = _parse_hex(value)
        else:
            raise TypeError(f"cannot build a 256-bit integer from {type(value).__name__}")

    @staticmethod
    def _coerce(other: object) -> "ArithUint256 | None":
        if isinstance(other, ArithUint256):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return ArithUint256(other)
        return None

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ArithUint256):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._value < rhs._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __add__(self, other: object) -> "ArithUint256":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return ArithUint256(self._value + rhs._value)

    __radd__ = __add__

    def __sub__(self, other: object) -> "ArithUint256":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return ArithUint256(self._value - rhs._value)

    def __rsub__(self, other: object) -> "ArithUint256":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other: object) -> "ArithUint256":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return ArithUint256(self._value * rhs._value)

    __rmul__ = __mul__

    def __floordiv__(self, other: object) -> "ArithUint256":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        if rhs._value == 0:
            raise UintError("Division by zero")
        return ArithUint256(self._value // rhs._value)

    def __rfloordiv__(self, other: object) -> "ArithUint256":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs // self

    def __lshift__(self, shift: int) -> "ArithUint256":
        if shift < 0:
            raise ValueError("negative shift count")
        if shift >= BITS:
            return ArithUint256(0)
        return ArithUint256(self._value << shift)

    def __rshift__(self, shift: int) -> "ArithUint256":
        if shift < 0:
            raise ValueError("negative shift count")
        return ArithUint256(self._value >> shift)

    def __and__(self, other: object) -> "ArithUint256":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return ArithUint256(self._value & rhs._value)

    __rand__ = __and__

    def __or__(self, other: object) -> "ArithUint256":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return ArithUint256(self._value | rhs._value)

    __ror__ = __or__

    def __xor__(self, other: object) -> "ArithUint256":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return ArithUint256(self._value ^ rhs._value)

    __rxor__ = __xor__

    def __invert__(self) -> "ArithUint256":
        return ArithUint256(~self._value)

    def __neg__(self) -> "ArithUint256":
        return ArithUint256(-self._value)

    def compare_to(self, other: "ArithUint256 | int") -> int:
        """Return -1, 0 or 1 as this value is below, equal to or above ``other``."""
        rhs = self._coerce(other)
        if rhs is None:
            raise TypeError("can only compare with integers")
        return (self._value > rhs._value) - (self._value < rhs._value)

    def bits(self) -> int:
        """Position of the highest set bit plus one, or zero for zero."""
        return self._value.bit_length()

    def get_low64(self) -> int:
        """The low 64 bits."""
        return self._value & _MASK64

    def getdouble(self) -> float:
        """Approximate the value as a float by summing its 32-bit limbs."""
        result = 0.0
        fact = 1.0
        for i in range(WIDTH):
            result += fact * ((self._value >> (32 * i)) & _MASK32)
            fact *= 4294967296.0
        return result

    @classmethod
    def from_compact(cls, compact: int) -> "tuple[ArithUint256, bool, bool]":
        """Decode the compact form; return ``(value, negative, overflow)``."""
        if not 0 <= compact <= _MASK32:
            raise ValueError("compact value must fit in 32 bits")
        size = compact >> 24
        word = compact & 0x007FFFFF
        if size <= 3:
            word >>= 8 * (3 - size)
            value = cls(word)
        else:
            value = cls(word) << (8 * (size - 3))
        negative = word != 0 and (compact & 0x00800000) != 0
        overflow = word != 0 and (
            size > 34 or (word > 0xFF and size > 33) or (word > 0xFFFF and size > 32)
        )
        return value, negative, overflow

    def get_compact(self, negative: bool = False) -> int:
        """Encode as a 32-bit compact number: one exponent byte and a 23-bit mantissa."""
        size = (self.bits() + 7) // 8
        if size <= 3:
            compact = (self.get_low64() << (8 * (3 - size))) & _MASK32
        else:
            compact = (self >> (8 * (size - 3))).get_low64() & _MASK32
        if compact & 0x00800000:
            compact >>= 8
            size += 1
        compact |= size << 24
        if negative and compact & 0x007FFFFF:
            compact |= 0x00800000
        return compact

    def to_uint256_bytes(self) -> bytes:
        """The 32-byte little-endian blob form."""
        return self._value.to_bytes(32, "little")

    @classmethod
    def from_uint256_bytes(cls, data: bytes) -> "ArithUint256":
        """Read a 32-byte little-endian blob."""
        if len(data) != 32:
            raise ValueError("a 256-bit blob must be exactly 32 bytes")
        return cls(int.from_bytes(data, "little"))

    def __str__(self) -> str:
        return f"{self._value:064x}"

    def __repr__(self) -> str:
        return f"ArithUint256(0x{self._value:064x})"