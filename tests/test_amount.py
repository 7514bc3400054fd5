from eqminer.amount import CENT, COIN, MAX_MONEY, FeeRate, money_range


def test_money_range_bounds():
    assert money_range(0)
    assert money_range(MAX_MONEY)
    assert not money_range(MAX_MONEY + 1)
    assert not money_range(-1)


def test_cent_rate_string_form():
    assert str(FeeRate(CENT)) == "0.01000000 BTC/kB"
    assert FeeRate(CENT).get_fee(100 * 1000) == COIN


def test_from_fee_paid_zero_size():
    assert FeeRate.from_fee_paid(5000, 0).satoshis_per_k == 0


def test_from_fee_paid_per_kilobyte():
    assert FeeRate.from_fee_paid(12345, 1000).satoshis_per_k == 12345


def test_from_fee_paid_truncates_toward_zero():
    assert FeeRate.from_fee_paid(-1, 3).satoshis_per_k == -333


def test_fee_scales_with_size():
    rate = FeeRate(1234)
    assert rate.get_fee(2000) == 2 * rate.get_fee(1000)
    assert rate.get_fee_per_k() == 1234


def test_positive_rate_never_gives_zero_fee():
    rate = FeeRate(7)
    assert rate.get_fee(0) == 7
    assert rate.get_fee(1) == 7


def test_zero_rate_gives_zero_fee():
    assert FeeRate().get_fee(100000) == 0


def test_ordering():
    assert FeeRate(1) < FeeRate(2)
    assert FeeRate(2) >= FeeRate(2)
    assert FeeRate(3) == FeeRate(3)
    assert max(FeeRate(5), FeeRate(9)) == FeeRate(9)


def test_string_form():
    assert str(FeeRate(COIN)) == "1.00000000 BTC/kB"
    assert str(FeeRate(0)) == "0.00000000 BTC/kB"