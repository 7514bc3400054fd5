import pytest

from eqminer.arith_uint256 import ArithUint256, UintError

MAX = (1 << 256) - 1


def test_compact_examples_from_format_description():
    assert ArithUint256(0x1234560000).get_compact() == 0x05123456
    assert ArithUint256(0xC0DE000000).get_compact() == 0x0600C0DE
    value, negative, overflow = ArithUint256.from_compact(0x05123456)
    assert value == 0x1234560000
    assert not negative
    assert not overflow


def test_compact_round_trip_with_sign():
    original = ArithUint256(0x1234560000)
    compact = original.get_compact(negative=True)
    assert compact & 0x00800000
    value, negative, overflow = ArithUint256.from_compact(compact)
    assert value == original
    assert negative
    assert not overflow


def test_compact_zero_mantissa_is_never_negative():
    value, negative, overflow = ArithUint256.from_compact(0x04800000)
    assert value == 0
    assert not negative
    assert not overflow


def test_compact_overflow_flag():
    _, _, overflow = ArithUint256.from_compact(0xFF123456)
    assert overflow


def test_compact_rejects_wide_input():
    with pytest.raises(ValueError):
        ArithUint256.from_compact(1 << 32)


def test_division_by_zero():
    with pytest.raises(UintError):
        ArithUint256(7) // ArithUint256(0)


def test_subtraction_wraps():
    assert ArithUint256(0) - 1 == ArithUint256(MAX)
    assert ArithUint256(MAX) + 1 == 0


def test_add_sub_round_trip():
    a = ArithUint256(0xDEADBEEF << 100)
    b = ArithUint256(0x123456789)
    assert (a + b) - b == a


def test_mul_div_round_trip():
    a = ArithUint256(987654321987654321)
    b = ArithUint256(123456789)
    assert (a * b) // b == a


def test_negation_and_inversion():
    a = ArithUint256(42 << 70)
    assert -a + a == 0
    assert ~a == ArithUint256(MAX) - a


def test_shifts():
    one = ArithUint256(1)
    assert (one << 200).bits() == 201
    assert (one << 256) == 0
    assert ((one << 255) >> 255) == one
    with pytest.raises(ValueError):
        one << -1


def test_bitwise_ops():
    a = ArithUint256(0b1100)
    b = ArithUint256(0b1010)
    assert a & b == 0b1000
    assert a | b == 0b1110
    assert a ^ b == 0b0110


def test_bits_of_zero():
    assert ArithUint256(0).bits() == 0
    assert not ArithUint256(0)


def test_low64():
    assert ArithUint256((1 << 64) + 5).get_low64() == 5


def test_getdouble():
    assert ArithUint256(1 << 100).getdouble() == float(1 << 100)


def test_compare_to_and_ordering():
    small, big = ArithUint256(3), ArithUint256(1 << 200)
    assert small.compare_to(big) == -1
    assert big.compare_to(small) == 1
    assert small.compare_to(3) == 0
    assert small < big
    assert big >= small
    assert sorted([big, small]) == [small, big]


def test_uint256_bytes_round_trip():
    a = ArithUint256(0x0102030405060708090A << 64)
    assert ArithUint256.from_uint256_bytes(a.to_uint256_bytes()) == a
    assert ArithUint256(1).to_uint256_bytes() == b"\x01" + bytes(31)


def test_uint256_bytes_length_checked():
    with pytest.raises(ValueError):
        ArithUint256.from_uint256_bytes(bytes(31))


def test_hex_string_construction():
    assert ArithUint256("0x1234560000") == 0x1234560000
    assert ArithUint256(str(ArithUint256(0xABCDEF))) == 0xABCDEF


def test_hashable():
    assert len({ArithUint256(5), ArithUint256(5), ArithUint256(6)}) == 2