"""Streaming RIPEMD-160."""

from __future__ import annotations

import struct

OUTPUT_SIZE = 20
_BLOCK = 64
_MASK32 = 0xFFFF_FFFF

_INIT = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)

_RL = (
    0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15,
    7, 4, 13, 1, 10, 6, 15, 3, 12, 0, 9, 5, 2, 14, 11, 8,
    3, 10, 14, 4, 9, 15, 8, 1, 2, 7, 0, 6, 13, 11, 5, 12,
    1, 9, 11, 10, 0, 8, 12, 4, 13, 3, 7, 15, 14, 5, 6, 2,
    4, 0, 5, 9, 7, 12, 2, 10, 14, 1, 3, 8, 11, 6, 15, 13,
)
_RR = (
    5, 14, 7, 0, 9, 2, 11, 4, 13, 6, 15, 8, 1, 10, 3, 12,
    6, 11, 3, 7, 0, 13, 5, 10, 14, 15, 8, 12, 4, 9, 1, 2,
    15, 5, 1, 3, 7, 14, 6, 9, 11, 8, 12, 2, 10, 0, 4, 13,
    8, 6, 4, 1, 3, 11, 15, 0, 5, 12, 2, 13, 9, 7, 10, 14,
    12, 15, 10, 4, 1, 5, 8, 7, 6, 2, 13, 14, 0, 3, 9, 11,
)
_SL = (
    11, 14, 15, 12, 5, 8, 7, 9, 11, 13, 14, 15, 6, 7, 9, 8,
    7, 6, 8, 13, 11, 9, 7, 15, 7, 12, 15, 9, 11, 7, 13, 12,
    11, 13, 6, 7, 14, 9, 13, 15, 14, 8, 13, 6, 5, 12, 7, 5,
    11, 12, 14, 15, 14, 15, 9, 8, 9, 14, 5, 6, 8, 6, 5, 12,
    9, 15, 5, 11, 6, 8, 13, 12, 5, 12, 13, 14, 11, 8, 5, 6,
)
_SR = (
    8, 9, 9, 11, 13, 15, 15, 5, 7, 7, 8, 11, 14, 14, 12, 6,
    9, 13, 15, 7, 12, 8, 9, 11, 7, 7, 12, 7, 6, 15, 13, 11,
    9, 7, 15, 11, 8, 6, 6, 14, 12, 13, 5, 14, 13, 13, 7, 5,
    15, 5, 8, 11, 14, 14, 6, 14, 6, 9, 12, 9, 12, 5, 15, 8,
    8, 5, 12, 9, 12, 5, 14, 6, 8, 13, 6, 5, 15, 13, 11, 11,
)
_KL = (0x00000000, 0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xA953FD4E)
_KR = (0x50A28BE6, 0x5C4DD124, 0x6D703EF3, 0x7A6D76E9, 0x00000000)


def _f1(x: int, y: int, z: int) -> int:
    return x ^ y ^ z


def _f2(x: int, y: int, z: int) -> int:
    return (x & y) | (~x & z)


def _f3(x: int, y: int, z: int) -> int:
    return ((x | ~y) ^ z) & _MASK32


def _f4(x: int, y: int, z: int) -> int:
    return (x & z) | (y & ~z)


def _f5(x: int, y: int, z: int) -> int:
    return (x ^ (y | ~z)) & _MASK32


_FL = (_f1, _f2, _f3, _f4, _f5)
_FR = (_f5, _f4, _f3, _f2, _f1)


def _rol(x: int, n: int) -> int:
    return ((x << n) | (x >> (32 - n))) & _MASK32


def _line(state, words, order, shifts, funcs, consts):
    a, b, c, d, e = state
    for j in range(80):
        rnd = j // 16
        f = funcs[rnd](b, c, d) & _MASK32
        t = (_rol((a + f + words[order[j]] + consts[rnd]) & _MASK32, shifts[j]) + e) & _MASK32
        a, e, d, c, b = e, d, _rol(c, 10), b, t
    return a, b, c, d, e


def _transform(state: list[int], chunk: bytes) -> list[int]:
    words = struct.unpack("<16I", chunk)
    a1, b1, c1, d1, e1 = _line(state, words, _RL, _SL, _FL, _KL)
    a2, b2, c2, d2, e2 = _line(state, words, _RR, _SR, _FR, _KR)
    s0, s1, s2, s3, s4 = state
    return [
        (s1 + c1 + d2) & _MASK32,
        (s2 + d1 + e2) & _MASK32,
        (s3 + e1 + a2) & _MASK32,
        (s4 + a1 + b2) & _MASK32,
        (s0 + b1 + c2) & _MASK32,
    ]


class Ripemd160:
    """RIPEMD-160 hasher fed through :meth:`write`.

    Finalizing pads the running state in place; reset before reuse.
    """

    OUTPUT_SIZE = OUTPUT_SIZE

    def __init__(self) -> None:
        self.reset()

    def write(self, data: bytes) -> "Ripemd160":
        """Absorb ``data`` and return the hasher for chaining."""
        view = memoryview(bytes(data))
        pos = 0
        if self._buf and len(self._buf) + len(view) >= _BLOCK:
            take = _BLOCK - len(self._buf)
            self._buf += view[:take]
            pos = take
            self._bytes += take
            self._s = _transform(self._s, bytes(self._buf))
            self._buf.clear()
        while len(view) - pos >= _BLOCK:
            self._s = _transform(self._s, bytes(view[pos:pos + _BLOCK]))
            pos += _BLOCK
            self._bytes += _BLOCK
        if pos < len(view):
            self._buf += view[pos:]
            self._bytes += len(view) - pos
        return self

    def finalize(self) -> bytes:
        """Apply the padding and return the 20-byte digest."""
        length = struct.pack("<Q", (self._bytes << 3) & 0xFFFF_FFFF_FFFF_FFFF)
        pad_len = 1 + ((119 - (self._bytes % _BLOCK)) % _BLOCK)
        self.write(b"\x80" + bytes(pad_len - 1))
        self.write(length)
        return struct.pack("<5I", *self._s)

    def reset(self) -> "Ripemd160":
        """Return the hasher to its initial state."""
        self._s = list(_INIT)
        self._buf = bytearray()
        self._bytes = 0
        return self