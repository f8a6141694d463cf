import pytest

from handcalc.errors import NoFuError, NoHanError
from handcalc.payment import (
    LimitHand,
    calculate,
    calculate_yakuman,
    limit_hand,
    payments_from_base,
    point_label,
    yakuman_label,
)
from handcalc.schemas import RuleSet


def amounts(payments) -> list[int]:
    return [
        payments.dealer_ron,
        payments.dealer_tsumo,
        payments.non_dealer_ron,
        payments.non_dealer_tsumo_to_non_dealer,
        payments.non_dealer_tsumo_to_dealer,
    ]


def test_four_han_thirty_fu_with_honba():
    payments = calculate(4, 30, honba=3)
    assert payments.base_points == 1920
    assert amounts(payments) == [12500, 4200, 8600, 2300, 4200]


@pytest.mark.parametrize(
    "han, fu, honba, expected",
    [
        (1, 30, 0, [1500, 500, 1000, 300, 500]),
        (2, 80, 0, [7700, 2600, 5200, 1300, 2600]),
        (3, 70, 3, [12900, 4300, 8900, 2300, 4300]),
        (6, 70, 3, [18900, 6300, 12900, 3300, 6300]),
        (8, 70, 3, [24900, 8300, 16900, 4300, 8300]),
        (11, 70, 3, [36900, 12300, 24900, 6300, 12300]),
        (13, 70, 3, [48900, 16300, 32900, 8300, 16300]),
    ],
)
def test_payment_table(han, fu, honba, expected):
    assert amounts(calculate(han, fu, honba=honba)) == expected


def test_limit_tiers():
    assert limit_hand(4, 30) is None
    assert limit_hand(4, 40) == LimitHand.mangan
    assert limit_hand(3, 60) is None
    assert limit_hand(3, 70) == LimitHand.mangan
    assert limit_hand(5, 20) == LimitHand.mangan
    assert limit_hand(7, 30) == LimitHand.haneman
    assert limit_hand(10, 30) == LimitHand.baiman
    assert limit_hand(12, 30) == LimitHand.sanbaiman
    assert limit_hand(13, 30) == LimitHand.kazoe_yakuman
    assert limit_hand(13, 30, kazoe_yakuman_ari=False) == LimitHand.sanbaiman


def test_kazoe_yakuman_can_be_disabled():
    payments = calculate(13, 30, rules=RuleSet(kazoe_yakuman_ari=False))
    assert payments.base_points == 6000
    assert payments.dealer_ron == 36000


def test_missing_han_or_fu():
    with pytest.raises(NoHanError, match="No han provided!"):
        calculate(0, 30)
    with pytest.raises(NoFuError, match="No fu provided!"):
        calculate(2, 0)


def test_yakuman_payments_ignore_honba_by_default():
    payments = calculate_yakuman(1, honba=2)
    assert amounts(payments) == [48000, 16000, 32000, 8000, 16000]
    assert payments.honba == 2

    with_honba = calculate_yakuman(1, honba=2, rules=RuleSet(yakuman_honba=True))
    assert amounts(with_honba) == [48600, 16200, 32600, 8200, 16200]


def test_double_yakuman_payments():
    assert amounts(calculate_yakuman(2)) == [96000, 32000, 64000, 16000, 32000]


def test_payments_round_each_share_up():
    payments = payments_from_base(320)
    assert amounts(payments) == [2000, 700, 1300, 400, 700]


def test_labels():
    assert point_label(2, 30) == "Normal"
    assert point_label(4, 40) == "Mangan"
    assert point_label(6, 30) == "Haneman"
    assert point_label(13, 30) == "Kazoe Yakuman"
    assert yakuman_label(1) == "Yakuman"
    assert yakuman_label(2) == "Double Yakuman"
    assert yakuman_label(3) == "3x Yakuman"
