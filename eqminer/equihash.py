"""Equihash parameters, leaf hash generation and proof verification."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Sequence

from eqminer.blake2b import Blake2b


class VerifyCode(enum.IntEnum):
    """Outcome of checking a proof."""

    OK = 0
    DUPLICATE = 1
    OUT_OF_ORDER = 2
    NONZERO_XOR = 3

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    VerifyCode.OK: "OK",
    VerifyCode.DUPLICATE: "duplicate index",
    VerifyCode.OUT_OF_ORDER: "indices out of order",
    VerifyCode.NONZERO_XOR: "nonzero xor",
}


@dataclass(frozen=True)
class EquihashParams:
    """The (n, k) parameters and the sizes derived from them."""

    n: int = 192
    k: int = 7

    def __post_init__(self) -> None:
        if self.k < 1:
            raise ValueError("k must be at least 1")
        if self.n <= 0 or self.n % 8 or self.n > 512:
            raise ValueError("n must be a positive multiple of 8 no larger than 512")
        if self.n % (self.k + 1):
            raise ValueError("n must be divisible by k + 1")

    @property
    def ndigits(self) -> int:
        return self.k + 1

    @property
    def digit_bits(self) -> int:
        return self.n // self.ndigits

    @property
    def proof_size(self) -> int:
        return 1 << self.k

    @property
    def base(self) -> int:
        return 1 << self.digit_bits

    @property
    def nhashes(self) -> int:
        return 2 * self.base

    @property
    def hashes_per_blake(self) -> int:
        return 512 // self.n

    @property
    def hash_out(self) -> int:
        return self.hashes_per_blake * self.n // 8

    @property
    def hash_bytes(self) -> int:
        return self.n // 8


def genhash(ctx: Blake2b, idx: int, params: EquihashParams = EquihashParams()) -> bytes:
    """The n-bit hash of leaf ``idx``, taken from the BLAKE2b state ``ctx`` (left untouched)."""
    state = ctx.copy()
    state.update(struct.pack("<I", idx // params.hashes_per_blake))
    out = state.final(params.hash_out)
    start = (idx % params.hashes_per_blake) * params.hash_bytes
    return out[start:start + params.hash_bytes]


def duped(indices: Sequence[int]) -> bool:
    """Whether any index occurs more than once."""
    ordered = sorted(indices)
    return any(b <= a for a, b in zip(ordered, ordered[1:]))


def _verify_rec(
    ctx: Blake2b, indices: Sequence[int], r: int, params: EquihashParams
) -> tuple[VerifyCode, bytes]:
    if r == 0:
        return VerifyCode.OK, genhash(ctx, indices[0], params)
    half = 1 << (r - 1)
    left, right = indices[:half], indices[half:]
    if left[0] >= right[0]:
        return VerifyCode.OUT_OF_ORDER, b""
    code, hash0 = _verify_rec(ctx, left, r - 1, params)
    if code is not VerifyCode.OK:
        return code, b""
    code, hash1 = _verify_rec(ctx, right, r - 1, params)
    if code is not VerifyCode.OK:
        return code, b""
    combined = bytes(a ^ b for a, b in zip(hash0, hash1))
    zero_bits = r * params.digit_bits if r < params.k else params.n
    if int.from_bytes(combined, "big") >> (params.n - zero_bits):
        return VerifyCode.NONZERO_XOR, b""
    return VerifyCode.OK, combined


def verify(
    indices: Sequence[int], ctx: Blake2b, params: EquihashParams = EquihashParams()
) -> VerifyCode:
    """Check the Wagner conditions for a proof of ``params.proof_size`` indices."""
    if len(indices) != params.proof_size:
        raise ValueError(f"a proof holds exactly {params.proof_size} indices")
    if duped(indices):
        return VerifyCode.DUPLICATE
    code, _ = _verify_rec(ctx, list(indices), params.k, params)
    return code