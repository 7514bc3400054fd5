import functools

import pytest

from eqminer.blake2b import Blake2b
from eqminer.equihash import EquihashParams, VerifyCode, verify
from eqminer.solver import MAXSOLS, CpuTromp, Equi

PARAMS = EquihashParams(n=48, k=5)


def make_ctx(nonce: int) -> Blake2b:
    ctx = Blake2b(PARAMS.hash_out)
    ctx.update(b"eqminer test header" + nonce.to_bytes(4, "little"))
    return ctx


def run(nonce: int) -> Equi:
    eq = Equi(PARAMS, 4)
    eq.set_state(make_ctx(nonce))
    eq.digit0()
    eq.reset_counters()
    for r in range(1, PARAMS.k):
        if r % 2:
            eq.digit_odd(r)
        else:
            eq.digit_even(r)
        eq.reset_counters()
    eq.digit_k()
    return eq


@functools.lru_cache(maxsize=None)
def solved_nonce() -> int:
    for nonce in range(60):
        if run(nonce).sols:
            return nonce
    raise AssertionError("no solutions found in 60 nonces")


def test_solutions_are_found_and_verify():
    nonce = solved_nonce()
    eq = run(nonce)
    assert eq.sols
    for sol in eq.sols:
        assert len(sol) == PARAMS.proof_size
        assert len(set(sol)) == PARAMS.proof_size
        assert verify(sol, make_ctx(nonce), PARAMS) is VerifyCode.OK


def test_solution_count_is_capped():
    eq = run(solved_nonce())
    assert len(eq.sols) == min(eq.nsols, MAXSOLS)


def test_solver_is_deterministic():
    nonce = solved_nonce()
    first = run(nonce)
    second = run(nonce)
    assert len(first.sols) >= 1
    assert second.nsols == first.nsols
    assert [list(s) for s in second.sols] == [list(s) for s in first.sols]


def test_device_reports_solutions_and_done():
    nonce = solved_nonce()
    found = []
    done = []
    device = CpuTromp(PARAMS, 4)
    device.start()
    device.solve(make_ctx(nonce), lambda: False,
                 lambda idx, bits, raw: found.append((idx, bits, raw)),
                 lambda: done.append(True))
    device.stop()
    assert done == [True]
    assert [f[0] for f in found] == run(nonce).sols
    assert all(bits == PARAMS.digit_bits and raw is None for _, bits, raw in found)


def test_device_cancel_stops_early():
    calls = []
    found = []
    done = []

    def cancel():
        calls.append(1)
        return len(calls) >= 3

    CpuTromp(PARAMS, 4).solve(make_ctx(0), cancel,
                              lambda *a: found.append(a), lambda: done.append(True))
    assert len(calls) == 3
    assert found == []
    assert done == []


def test_device_names():
    device = CpuTromp(PARAMS, 4)
    assert device.name() == "CPU-TROMP"
    assert device.devinfo() == ""


@pytest.mark.parametrize("restbits", [3, 5, 7])
def test_unsupported_restbits(restbits):
    with pytest.raises(ValueError):
        Equi(PARAMS, restbits)
    with pytest.raises(ValueError):
        CpuTromp(PARAMS, restbits)


def test_restbits_must_fit_digit():
    with pytest.raises(ValueError):
        Equi(EquihashParams(n=32, k=7), 4)


def test_digit0_requires_state():
    with pytest.raises(RuntimeError):
        Equi(PARAMS, 4).digit0()


def test_round_parity_and_order_checked():
    eq = Equi(PARAMS, 4)
    eq.set_state(make_ctx(1))
    eq.digit0()
    with pytest.raises(ValueError):
        eq.digit_even(1)
    with pytest.raises(RuntimeError):
        eq.digit_even(2)
    with pytest.raises(RuntimeError):
        eq.digit_k()


def test_reset_counters():
    eq = Equi(PARAMS, 4)
    eq.xfull, eq.bfull, eq.hfull = 3, 4, 5
    eq.reset_counters()
    assert (eq.xfull, eq.bfull, eq.hfull) == (0, 0, 0)


def test_layout_sizes():
    eq = Equi(PARAMS, 4)
    assert eq.nbuckets == 1 << (PARAMS.digit_bits - 4)
    assert eq.nslots == 1 << 6
    assert eq.nblocks * PARAMS.hashes_per_blake >= PARAMS.nhashes
    big = Equi(EquihashParams(n=200, k=9), 8)
    assert big.nslots == (1 << 10) * 9 // 14