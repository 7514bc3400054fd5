"""Streaming SHA-256 with access to the raw compression output."""

from __future__ import annotations

import struct

OUTPUT_SIZE = 32
_BLOCK = 64
_MASK32 = 0xFFFF_FFFF

_INIT = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

_K = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5, 0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3, 0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC, 0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7, 0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13, 0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3, 0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5, 0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208, 0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK32


def _transform(state: list[int], chunk: bytes) -> list[int]:
    w = list(struct.unpack(">16I", chunk))
    for i in range(16, 64):
        x, y = w[i - 15], w[i - 2]
        s0 = _rotr(x, 7) ^ _rotr(x, 18) ^ (x >> 3)
        s1 = _rotr(y, 17) ^ _rotr(y, 19) ^ (y >> 10)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & _MASK32)

    a, b, c, d, e, f, g, h = state
    for k, wi in zip(_K, w):
        big_s1 = _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)
        ch = g ^ (e & (f ^ g))
        t1 = (h + big_s1 + ch + k + wi) & _MASK32
        big_s0 = _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)
        maj = (a & b) | (c & (a | b))
        t2 = (big_s0 + maj) & _MASK32
        h, g, f, e = g, f, e, (d + t1) & _MASK32
        d, c, b, a = c, b, a, (t1 + t2) & _MASK32

    return [(s + v) & _MASK32 for s, v in zip(state, (a, b, c, d, e, f, g, h))]


class Sha256:
    """SHA-256 hasher fed through :meth:`write`.

    Finalizing pads the running state in place, as the hasher is meant to be
    used once per message or reset in between.
    """

    OUTPUT_SIZE = OUTPUT_SIZE

    def __init__(self) -> None:
        self.reset()

    def write(self, data: bytes) -> "Sha256":
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

    def _digest(self) -> bytes:
        return struct.pack(">8I", *self._s)

    def finalize(self) -> bytes:
        """Apply the standard padding and return the 32-byte digest."""
        length = struct.pack(">Q", (self._bytes << 3) & 0xFFFF_FFFF_FFFF_FFFF)
        pad_len = 1 + ((119 - (self._bytes % _BLOCK)) % _BLOCK)
        self.write(b"\x80" + bytes(pad_len - 1))
        self.write(length)
        return self._digest()

    def finalize_no_padding(self) -> bytes:
        """Return the state after exactly one 64-byte block, without padding."""
        if self._bytes != _BLOCK:
            raise ValueError("SHA256Compress should be invoked with a 512-bit block")
        return self._digest()

    def reset(self) -> "Sha256":
        """Return the hasher to its initial state."""
        self._s = list(_INIT)
        self._buf = bytearray()
        self._bytes = 0
        return self