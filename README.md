# eqminer

A self-contained, pure-Python toolkit for the Equihash proof-of-work:
a bucket-sorting collision solver in the style of Wagner's algorithm, a
solution verifier, and the hashing and arithmetic building blocks around
them. It has no third-party dependencies.

## What is inside

| Module                   | Provides                                                                 |
|--------------------------|--------------------------------------------------------------------------|
| `eqminer.blake2b`        | `Blake2b`, `Blake2bParams`, `blake2b()`, `blake2b_long()`                |
| `eqminer.sha256`         | `Sha256`, an incremental SHA-256 hasher                                  |
| `eqminer.ripemd160`      | `Ripemd160`, an incremental RIPEMD-160 hasher                            |
| `eqminer.arith_uint256`  | `ArithUint256`, wrapping 256-bit unsigned arithmetic; `UintError`        |
| `eqminer.amount`         | `FeeRate`, `money_range()`, and the `COIN`, `CENT`, `MAX_MONEY` constants |
| `eqminer.equihash`       | `EquihashParams`, `VerifyCode`, `genhash()`, `duped()`, `verify()`       |
| `eqminer.solver`         | `Equi`, the layered collision solver, and `CpuTromp`, a solver front end |

## Hashing

```python
from eqminer.blake2b import Blake2b, Blake2bParams, blake2b, blake2b_long

digest = blake2b(b"abc")                  # one-shot BLAKE2b, 64-byte output
keyed = blake2b(b"abc", b"k" * 32, 32)    # keyed, 32-byte output

state = Blake2b(32)                       # streaming, 32-byte output
state.update(b"hello ")
state.update(b"world")
snapshot = state.copy()                   # states can be forked
print(state.final().hex())

long_digest = blake2b_long(b"seed", 200)  # output longer than 64 bytes
```

A state can also be started from a full parameter block, for example with a
personalisation string: `Blake2b.from_params(Blake2bParams(digest_length=50,
personal=b"..."))`. `Blake2bParams.to_bytes()` gives the 64-byte block.

Note that the block counter is kept in 16 bits, so digests of inputs of
64 KiB or more differ from standard BLAKE2b.

```python
from eqminer.sha256 import Sha256
from eqminer.ripemd160 import Ripemd160

print(Sha256().write(b"abc").finalize().hex())
print(Ripemd160().write(b"abc").finalize().hex())
```

`Sha256.finalize_no_padding()` returns the raw state after exactly one
64-byte block and raises `ValueError` otherwise. Both hashers pad their
state in place when finalized; call `reset()` before reusing one.

## 256-bit arithmetic and compact targets

`ArithUint256` behaves like a fixed-width unsigned integer: it is built from
an int or a hex string, results wrap modulo 2**256, and dividing by zero
(`//`) raises `UintError`.

```python
from eqminer.arith_uint256 import ArithUint256

target, negative, overflow = ArithUint256.from_compact(0x1D00FFFF)
print(hex(int(target)))
print(hex(target.get_compact()))          # back to 0x1d00ffff
print(target.bits())

raw = target.to_uint256_bytes()           # 32 little-endian bytes
assert ArithUint256.from_uint256_bytes(raw) == target
```

## Amounts and fee rates

```python
from eqminer.amount import FeeRate, money_range, MAX_MONEY

rate = FeeRate(1000)                      # base units per 1000 bytes
print(rate.get_fee(250))                  # 250
print(rate.get_fee_per_k())               # 1000
print(str(rate))                          # "0.00001000 BTC/kB"

paid = FeeRate.from_fee_paid(500, 250)    # FeeRate(satoshis_per_k=2000)
print(money_range(MAX_MONEY))             # True
```

## Solving and verifying Equihash

A solve starts from a `Blake2b` state that has already absorbed the block
header and nonce; its digest length must be `params.hash_out`.
`CpuTromp.solve` runs every collision round, checks the cancel callback
between rounds and after each reported solution, passes each distinct
solution (at most eight) to `on_solution` as a list of indices together
with the digit width in bits and `None`, and calls `on_done` once it
finishes without being cancelled.

The default parameters are n=192, k=7. Pure Python is slow, so small
parameters are much quicker to experiment with:

```python
from eqminer.blake2b import Blake2b
from eqminer.equihash import EquihashParams, VerifyCode, verify
from eqminer.solver import CpuTromp

params = EquihashParams(n=96, k=5)
ctx = Blake2b(params.hash_out)
ctx.update(b"example header and nonce")

solver = CpuTromp(params, 4)
solver.start()
print(solver.name(), repr(solver.devinfo()))   # CPU-TROMP ''

found = []

def on_solution(indices, digit_bits, _raw):
    found.append(indices)

solver.solve(ctx, lambda: False, on_solution, lambda: print("done"))
solver.stop()

for indices in found:
    assert verify(indices, ctx, params) == VerifyCode.OK
```

`verify` returns a `VerifyCode` (`OK`, `DUPLICATE`, `OUT_OF_ORDER`,
`NONZERO_XOR`, each with a `.message`) and raises `ValueError` if the proof
does not hold `params.proof_size` indices. `duped()` checks for repeated
indices on its own, and `genhash()` produces the hash of a single index.

For finer control, `Equi` exposes each stage: `set_state`, `digit0`,
`digit_odd`, `digit_even`, `digit_k` and `reset_counters`; solutions are
left in `sols`, their total count in `nsols`, and overflow counts in
`xfull`, `bfull` and `hfull`. `restbits` must be 4 or at least 8, and
smaller than the digit width.

## What it does not do

This is a library only. It has no command-line program, no connection to a
mining pool, no status or API server, and no GPU or hand-optimised solver
back ends. It is meant for study, testing and verification, and is far
slower than native solvers.