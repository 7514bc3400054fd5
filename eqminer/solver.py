"""Bucketed Wagner-style Equihash solver and the CPU device wrapper around it."""

from __future__ import annotations

import struct
from typing import Callable, NamedTuple, Optional, Sequence, Union

from eqminer.blake2b import Blake2b
from eqminer.equihash import EquihashParams, duped

# Number of slots kept per xhash value while looking for collisions.
XFULL = 16
# More solutions than this are counted but not kept.
MAXSOLS = 8

_Tree = Union[int, tuple]


class _Slot(NamedTuple):
    tree: _Tree
    hash: int


class Equi:
    """Solver state: the layers of bucketed partial hashes and the solutions found."""

    def __init__(self, params: EquihashParams = EquihashParams(), restbits: int = 4) -> None:
        if restbits != 4 and restbits < 8:
            raise ValueError("restbits must be 4 or at least 8")
        if restbits >= params.digit_bits:
            raise ValueError("restbits must be smaller than the digit size")
        self.params = params
        self.restbits = restbits
        self.buck_bits = params.digit_bits - restbits
        self.nbuckets = 1 << self.buck_bits
        self.slot_bits = restbits + 2
        slot_range = 1 << self.slot_bits
        self.nslots = slot_range if restbits == 4 else slot_range * 9 // 14
        self.nblocks = -(-params.nhashes // params.hashes_per_blake)
        self._ctx: Optional[Blake2b] = None
        self._layers: list[list[list[_Slot]]] = []
        self.sols: list[list[int]] = []
        self.nsols = 0
        self.xfull = 0
        self.bfull = 0
        self.hfull = 0

    def set_state(self, ctx: Blake2b) -> None:
        """Use ``ctx`` (header and nonce already absorbed) as the hashing state."""
        self._ctx = ctx.copy()
        self._layers = []
        self.sols = []
        self.nsols = 0

    def reset_counters(self) -> None:
        """Clear the overflow counters."""
        self.xfull = self.bfull = self.hfull = 0

    def _hash_bits(self, r: int) -> int:
        p = self.params
        return p.n - (r + 1) * p.digit_bits + self.restbits

    def _store(self, layer: list[list[_Slot]], bucket_id: int, slot: _Slot) -> None:
        bucket = layer[bucket_id]
        if len(bucket) >= self.nslots:
            self.bfull += 1
            return
        bucket.append(slot)

    def digit0(self) -> None:
        """Generate all leaf hashes and bucket them by their first digit."""
        if self._ctx is None:
            raise RuntimeError("set_state must be called before digit0")
        p = self.params
        bits = self._hash_bits(0)
        mask = (1 << bits) - 1
        top_shift = p.n - self.buck_bits
        layer: list[list[_Slot]] = [[] for _ in range(self.nbuckets)]
        for block in range(self.nblocks):
            state = self._ctx.copy()
            state.update(struct.pack("<I", block))
            out = state.final(p.hash_out)
            for i in range(p.hashes_per_blake):
                chunk = out[i * p.hash_bytes:(i + 1) * p.hash_bytes]
                value = int.from_bytes(chunk, "big")
                index = block * p.hashes_per_blake + i
                self._store(layer, value >> top_shift, _Slot(index, value & mask))
        self._layers = [layer]

    def _check_round(self, r: int, odd: bool) -> None:
        if not 1 <= r < self.params.k:
            raise ValueError(f"round must be in 1..{self.params.k - 1}")
        if (r % 2 == 1) != odd:
            raise ValueError(f"round {r} has the wrong parity for this step")
        if len(self._layers) != r:
            raise RuntimeError(f"digit {r - 1} has not been computed")

    def _collisions(self, bucket: Sequence[_Slot], prev_bits: int, count_xfull: bool):
        """Yield ``(s0, s1)`` pairs of slots that share their xhash bits."""
        xshift = prev_bits - self.restbits
        rest_mask = (1 << self.restbits) - 1
        groups: dict[int, list[int]] = {}
        for s1, slot1 in enumerate(bucket):
            group = groups.setdefault((slot1.hash >> xshift) & rest_mask, [])
            if len(group) >= XFULL:
                if count_xfull:
                    self.xfull += 1
                continue
            group.append(s1)
            for s0 in group[:-1]:
                yield s0, s1

    def _digit(self, r: int) -> None:
        prev_bits = self._hash_bits(r - 1)
        next_bits = self._hash_bits(r)
        next_mask = (1 << next_bits) - 1
        bucket_mask = self.nbuckets - 1
        low_mask = (1 << min(32, prev_bits)) - 1
        layer: list[list[_Slot]] = [[] for _ in range(self.nbuckets)]
        for bucket_id, bucket in enumerate(self._layers[r - 1]):
            for s0, s1 in self._collisions(bucket, prev_bits, True):
                h0, h1 = bucket[s0].hash, bucket[s1].hash
                if (h0 & low_mask) == (h1 & low_mask):
                    self.hfull += 1
                    continue
                x = h0 ^ h1
                xor_bucket = (x >> next_bits) & bucket_mask
                self._store(layer, xor_bucket, _Slot((bucket_id, s0, s1), x & next_mask))
        self._layers.append(layer)

    def digit_odd(self, r: int) -> None:
        """Collide the layer of round ``r - 1`` on the next digit, for odd ``r``."""
        self._check_round(r, odd=True)
        self._digit(r)

    def digit_even(self, r: int) -> None:
        """Collide the layer of round ``r - 1`` on the next digit, for even ``r``."""
        self._check_round(r, odd=False)
        self._digit(r)

    def _indices(self, r: int, tree: _Tree) -> list[int]:
        if r == 0:
            return [tree]
        bucket_id, s0, s1 = tree
        bucket = self._layers[r - 1][bucket_id]
        left = self._indices(r - 1, bucket[s0].tree)
        right = self._indices(r - 1, bucket[s1].tree)
        if left[0] > right[0]:
            left, right = right, left
        return left + right

    def _candidate(self, tree: tuple) -> None:
        indices = self._indices(self.params.k, tree)
        if duped(indices):
            return
        soli = self.nsols
        self.nsols += 1
        if soli < MAXSOLS:
            self.sols.append(indices)

    def digit_k(self) -> None:
        """Find full collisions on the last digit and record distinct-index proofs."""
        k = self.params.k
        if len(self._layers) != k:
            raise RuntimeError(f"digit {k - 1} has not been computed")
        prev_bits = self._hash_bits(k - 1)
        low_mask = (1 << min(32, prev_bits)) - 1
        for bucket_id, bucket in enumerate(self._layers[k - 1]):
            for s0, s1 in self._collisions(bucket, prev_bits, False):
                if (bucket[s0].hash & low_mask) == (bucket[s1].hash & low_mask):
                    self._candidate((bucket_id, s0, s1))


class CpuTromp:
    """CPU solver device: runs all rounds and reports solutions through callbacks."""

    def __init__(self, params: EquihashParams = EquihashParams(), restbits: int = 4) -> None:
        if restbits != 4 and restbits < 8:
            raise ValueError("restbits must be 4 or at least 8")
        if restbits >= params.digit_bits:
            raise ValueError("restbits must be smaller than the digit size")
        self.params = params
        self.restbits = restbits
        self.use_opt = 0

    def start(self) -> None:
        """Prepare the device; nothing is needed on the CPU."""

    def stop(self) -> None:
        """Release the device; nothing is held on the CPU."""

    def solve(
        self,
        ctx: Blake2b,
        cancel: Callable[[], bool],
        on_solution: Callable[[list[int], int, Optional[bytes]], None],
        on_done: Callable[[], None],
    ) -> None:
        """Solve for ``ctx``; stop early when ``cancel()`` is true."""
        eq = Equi(self.params, self.restbits)
        eq.set_state(ctx)
        eq.digit0()
        eq.reset_counters()
        for r in range(1, self.params.k):
            if cancel():
                return
            if r % 2:
                eq.digit_odd(r)
            else:
                eq.digit_even(r)
            eq.reset_counters()
        if cancel():
            return
        eq.digit_k()
        for solution in eq.sols:
            on_solution(list(solution), self.params.digit_bits, None)
            if cancel():
                return
        on_done()

    def name(self) -> str:
        return "CPU-TROMP"

    def devinfo(self) -> str:
        return ""