"""BLAKE2b hashing with a parameter block, a copyable streaming state and a long-output variant."""

from __future__ import annotations

import struct
from dataclasses import dataclass

BLOCKBYTES = 128
OUTBYTES = 64
KEYBYTES = 64
SALTBYTES = 16
PERSONALBYTES = 16

_MASK64 = 0xFFFF_FFFF_FFFF_FFFF
# The block counter is kept in 16 bits, as in the state layout this follows.
_COUNTER_MASK = 0xFFFF

_IV = (
    0x6A09E667F3BCC908, 0xBB67AE8584CAA73B,
    0x3C6EF372FE94F82B, 0xA54FF53A5F1D36F1,
    0x510E527FADE682D1, 0x9B05688C2B3E6C1F,
    0x1F83D9ABFB41BD6B, 0x5BE0CD19137E2179,
)

_SIGMA = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
    (11, 8, 12, 0, 5, 2, 15, 13, 10, 14, 3, 6, 7, 1, 9, 4),
    (7, 9, 3, 1, 13, 12, 11, 14, 2, 6, 5, 10, 4, 0, 15, 8),
    (9, 0, 5, 7, 2, 4, 10, 15, 14, 1, 11, 12, 6, 8, 3, 13),
    (2, 12, 6, 10, 0, 11, 8, 3, 4, 13, 7, 5, 15, 14, 1, 9),
    (12, 5, 1, 15, 14, 13, 4, 10, 0, 7, 6, 3, 9, 2, 8, 11),
    (13, 11, 7, 14, 12, 1, 3, 9, 5, 0, 15, 4, 8, 6, 2, 10),
    (6, 15, 14, 9, 11, 3, 0, 8, 12, 2, 13, 7, 1, 4, 10, 5),
    (10, 2, 8, 4, 7, 6, 1, 5, 15, 11, 9, 14, 3, 12, 13, 0),
)

# Column steps followed by diagonal steps.
_LANES = (
    (0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15),
    (0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14),
)

_PARAM_FORMAT = struct.Struct("<BBBBIQBB14s16s16s")


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (64 - n))) & _MASK64


def _compress(h: list[int], block: bytes, counter: int, last: bool) -> list[int]:
    m = struct.unpack("<16Q", block)
    v = list(h) + list(_IV)
    v[12] ^= counter
    if last:
        v[14] ^= _MASK64
    for rnd in range(12):
        s = _SIGMA[rnd % 10]
        for lane, (a, b, c, d) in enumerate(_LANES):
            x = m[s[2 * lane]]
            y = m[s[2 * lane + 1]]
            v[a] = (v[a] + v[b] + x) & _MASK64
            v[d] = _rotr(v[d] ^ v[a], 32)
            v[c] = (v[c] + v[d]) & _MASK64
            v[b] = _rotr(v[b] ^ v[c], 24)
            v[a] = (v[a] + v[b] + y) & _MASK64
            v[d] = _rotr(v[d] ^ v[a], 16)
            v[c] = (v[c] + v[d]) & _MASK64
            v[b] = _rotr(v[b] ^ v[c], 63)
    return [x ^ lo ^ hi for x, lo, hi in zip(h, v[:8], v[8:])]


@dataclass(frozen=True)
class Blake2bParams:
    """The 64-byte BLAKE2b parameter block."""

    digest_length: int = OUTBYTES
    key_length: int = 0
    fanout: int = 1
    depth: int = 1
    leaf_length: int = 0
    node_offset: int = 0
    node_depth: int = 0
    inner_length: int = 0
    salt: bytes = b""
    personal: bytes = b""

    def __post_init__(self) -> None:
        if not 1 <= self.digest_length <= OUTBYTES:
            raise ValueError(f"digest length must be in 1..{OUTBYTES}")
        if not 0 <= self.key_length <= KEYBYTES:
            raise ValueError(f"key length must be in 0..{KEYBYTES}")
        if len(self.salt) > SALTBYTES:
            raise ValueError(f"salt must be at most {SALTBYTES} bytes")
        if len(self.personal) > PERSONALBYTES:
            raise ValueError(f"personalization must be at most {PERSONALBYTES} bytes")

    def to_bytes(self) -> bytes:
        """Serialize the parameter block in its little-endian wire layout."""
        return _PARAM_FORMAT.pack(
            self.digest_length,
            self.key_length,
            self.fanout,
            self.depth,
            self.leaf_length,
            self.node_offset,
            self.node_depth,
            self.inner_length,
            bytes(14),
            bytes(self.salt).ljust(SALTBYTES, b"\0"),
            bytes(self.personal).ljust(PERSONALBYTES, b"\0"),
        )


class Blake2b:
    """Streaming BLAKE2b state."""

    def __init__(self, outlen: int = OUTBYTES, key: bytes = b"") -> None:
        if not 1 <= outlen <= OUTBYTES:
            raise ValueError(f"output length must be in 1..{OUTBYTES}")
        if len(key) > KEYBYTES:
            raise ValueError(f"key must be at most {KEYBYTES} bytes")
        self._init_param(Blake2bParams(digest_length=outlen, key_length=len(key)))
        if key:
            self.update(bytes(key).ljust(BLOCKBYTES, b"\0"))

    def _init_param(self, params: Blake2bParams) -> None:
        words = struct.unpack("<8Q", params.to_bytes())
        self._h = [iv ^ w for iv, w in zip(_IV, words)]
        self._buf = bytearray()
        self._counter = 0
        self.digest_size = params.digest_length

    @classmethod
    def from_params(cls, params: Blake2bParams) -> "Blake2b":
        """Start a state from an explicit parameter block (no key block is fed)."""
        state = cls.__new__(cls)
        state._init_param(params)
        return state

    def update(self, data: bytes) -> None:
        """Absorb more input; the last full block is kept back for finalization."""
        view = memoryview(bytes(data))
        pos = 0
        while pos < len(view):
            fill = BLOCKBYTES - len(self._buf)
            remaining = len(view) - pos
            if remaining > fill:
                self._buf += view[pos:pos + fill]
                pos += fill
                self._counter = (self._counter + BLOCKBYTES) & _COUNTER_MASK
                self._h = _compress(self._h, bytes(self._buf), self._counter, False)
                self._buf.clear()
            else:
                self._buf += view[pos:]
                pos = len(view)

    def final(self, outlen: int | None = None) -> bytes:
        """Pad, compress the last block and return the first ``outlen`` digest bytes."""
        if outlen is None:
            outlen = self.digest_size
        if not 0 <= outlen <= OUTBYTES:
            raise ValueError(f"output length must be in 0..{OUTBYTES}")
        self._counter = (self._counter + len(self._buf)) & _COUNTER_MASK
        block = bytes(self._buf).ljust(BLOCKBYTES, b"\0")
        self._h = _compress(self._h, block, self._counter, True)
        return struct.pack("<8Q", *self._h)[:outlen]

    def copy(self) -> "Blake2b":
        """Return an independent copy of this state."""
        other = self.__class__.__new__(self.__class__)
        other._h = list(self._h)
        other._buf = bytearray(self._buf)
        other._counter = self._counter
        other.digest_size = self.digest_size
        return other


def blake2b(data: bytes, key: bytes = b"", outlen: int = OUTBYTES) -> bytes:
    """One-shot BLAKE2b, keyed when ``key`` is non-empty."""
    state = Blake2b(outlen, key)
    state.update(data)
    return state.final(outlen)


def blake2b_long(data: bytes, outlen: int) -> bytes:
    """Variable-length BLAKE2b output built by chaining 64-byte digests."""
    if outlen < 1:
        raise ValueError("output length must be positive")
    prefix = struct.pack("<I", outlen)
    if outlen <= OUTBYTES:
        state = Blake2b(outlen)
        state.update(prefix)
        state.update(data)
        return state.final(outlen)

    half = OUTBYTES // 2
    state = Blake2b(OUTBYTES)
    state.update(prefix)
    state.update(data)
    block = state.final(OUTBYTES)
    out = bytearray(block[:half])
    to_produce = outlen - half
    while to_produce > OUTBYTES:
        block = blake2b(block, outlen=OUTBYTES)
        out += block[:half]
        to_produce -= half
    out += blake2b(block, outlen=to_produce)
    return bytes(out)