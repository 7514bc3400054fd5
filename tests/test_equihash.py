import struct

import pytest

from eqminer.blake2b import Blake2b, Blake2bParams
from eqminer.equihash import EquihashParams, VerifyCode, duped, genhash, verify

SMALL = EquihashParams(n=16, k=1)


def _ctx(params):
    return Blake2b.from_params(
        Blake2bParams(digest_length=params.hash_out, personal=b"test-personal")
    )


def _find_collision(ctx, params, limit=4000):
    seen = {}
    for idx in range(limit):
        h = genhash(ctx, idx, params)
        if h in seen:
            return seen[h], idx
        seen[h] = idx
    raise AssertionError("no collision found")


def test_default_params():
    params = EquihashParams()
    assert params.proof_size == 128
    assert params.digit_bits == 24
    assert params.hash_out == 48
    assert params.n == 192 and params.k == 7


def test_invalid_params():
    with pytest.raises(ValueError):
        EquihashParams(n=100, k=7)
    with pytest.raises(ValueError):
        EquihashParams(n=16, k=0)


def test_verify_result_messages():
    ctx = _ctx(SMALL)
    i, j = _find_collision(ctx, SMALL)
    assert verify([i, j], ctx, SMALL).message == "OK"
    assert verify([i, i], ctx, SMALL).message == "duplicate index"
    assert verify([j, i], ctx, SMALL).message == "indices out of order"
    a = 0
    b = next(idx for idx in range(1, 100) if genhash(ctx, idx, SMALL) != genhash(ctx, a, SMALL))
    assert verify([a, b], ctx, SMALL).message == "nonzero xor"


def test_genhash_length_and_determinism():
    ctx = _ctx(SMALL)
    first = genhash(ctx, 5, SMALL)
    assert len(first) == SMALL.n // 8
    assert genhash(ctx, 5, SMALL) == first


def test_genhash_slices_one_blake_output():
    params = EquihashParams()
    ctx = _ctx(params)
    state = ctx.copy()
    state.update(struct.pack("<I", 0))
    block = state.final(params.hash_out)
    assert genhash(ctx, 0, params) + genhash(ctx, 1, params) == block


def test_duped():
    assert duped([1, 2, 2, 5])
    assert not duped([4, 1, 3, 2])


def test_verify_valid_proof():
    ctx = _ctx(SMALL)
    i, j = _find_collision(ctx, SMALL)
    assert verify([i, j], ctx, SMALL) is VerifyCode.OK


def test_verify_out_of_order_and_duplicate():
    ctx = _ctx(SMALL)
    i, j = _find_collision(ctx, SMALL)
    assert verify([j, i], ctx, SMALL) is VerifyCode.OUT_OF_ORDER
    assert verify([i, i], ctx, SMALL) is VerifyCode.DUPLICATE


def test_verify_nonzero_xor():
    ctx = _ctx(SMALL)
    a = 0
    b = next(idx for idx in range(1, 100) if genhash(ctx, idx, SMALL) != genhash(ctx, a, SMALL))
    assert verify([a, b], ctx, SMALL) is VerifyCode.NONZERO_XOR


def test_verify_deeper_tree_checks_order_first():
    params = EquihashParams(n=24, k=2)
    ctx = _ctx(params)
    assert verify([2, 3, 0, 1], ctx, params) is VerifyCode.OUT_OF_ORDER
    assert verify([0, 1, 2, 2], ctx, params) is VerifyCode.DUPLICATE


def test_verify_wrong_length():
    ctx = _ctx(SMALL)
    with pytest.raises(ValueError):
        verify([1, 2, 3], ctx, SMALL)