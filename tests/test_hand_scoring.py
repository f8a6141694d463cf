import pytest

from handcalc.errors import NoYakuError, RinshanWithoutKanError
from handcalc.hand_scoring import score_hand_shape, score_manual
from handcalc.schemas import ContextInput, HandInput, RuleSet


def base_hand(**kwargs) -> HandInput:
    payload = {
        "groups": ["123m", "456p", "789s", "EEEw", "22p"],
        "win_tile": "2p",
        "seat_wind": "Sw",
        "round_wind": "Ew",
    }
    payload.update(kwargs)
    return HandInput.model_validate(payload)


def base_context(**kwargs) -> ContextInput:
    payload = {
        "win_type": "ron",
        "riichi": True,
        "double_riichi": False,
        "ippatsu": False,
        "haitei": False,
        "houtei": False,
        "rinshan": False,
        "chankan": False,
        "tenhou": False,
        "dora": 2,
        "honba": 0,
    }
    payload.update(kwargs)
    return ContextInput.model_validate(payload)


def test_score_hand_shape_ron_non_dealer():
    result = score_hand_shape(base_hand(), base_context(), RuleSet())
    assert result.han == 4
    assert result.fu == 40
    assert [item.model_dump() for item in result.fu_breakdown] == [
        {"name": "BasePoints", "fu": 20},
        {"name": "ClosedRon", "fu": 10},
        {"name": "NonSimpleClosedTriplet", "fu": 8},
        {"name": "SingleWait", "fu": 2},
    ]
    assert result.point_label == "Mangan"
    assert result.payments.non_dealer_ron == 8000
    assert result.is_open is False
    assert result.yakuman is False
    assert any(y.name == "Yakuhai (Round Wind East)" for y in result.yaku)
    assert result.yaku[-1].name == "Dora"
    assert result.dora.dora == 2


def test_score_hand_shape_tsumo_dealer():
    context = base_context(win_type="tsumo", riichi=False, dora=0)
    result = score_hand_shape(base_hand(seat_wind="Ew", round_wind="Ww"), context, RuleSet())
    assert any(y.name == "Menzen Tsumo" for y in result.yaku)
    assert any(y.name == "Yakuhai (Seat Wind East)" for y in result.yaku)
    assert result.han == 2
    assert result.fu == 40
    assert result.payments.dealer_tsumo == 1300


def test_score_hand_shape_uses_seat_wind_for_dealer_ron():
    result = score_hand_shape(base_hand(seat_wind="Ew", round_wind="Sw"), base_context(), RuleSet())
    assert result.han == 4
    assert result.payments.dealer_ron == 12000


def test_honba_is_added_and_reported():
    result = score_hand_shape(base_hand(), base_context(honba=2), RuleSet())
    assert result.honba == 2
    assert result.payments.non_dealer_ron == 8600


def test_red_fives_only_count_with_aka_ari():
    hand = base_hand(groups=["123m", "406p", "789s", "EEEw", "22p"])
    without = score_hand_shape(hand, base_context(dora=0), RuleSet())
    assert without.dora.aka_dora == 0
    assert without.han == 2

    with_aka = score_hand_shape(hand, base_context(dora=0), RuleSet(aka_ari=True))
    assert with_aka.dora.aka_dora == 1
    assert with_aka.yaku[-1].name == "Aka Dora"
    assert with_aka.han == 3


def test_open_hand_result():
    hand = base_hand(
        groups=["rrrdo", "5555mo", "11s", "8888s", "789m"],
        win_tile="7m",
        seat_wind="Ew",
    )
    result = score_hand_shape(hand, base_context(win_type="tsumo", riichi=False, dora=0), RuleSet())
    assert result.is_open is True
    assert result.han == 1
    assert result.fu == 60
    assert result.payments.dealer_tsumo == 1000


def test_yakuman_skips_fu_and_dora():
    hand = base_hand(groups=["rrrd", "gggd", "wwwd", "123m", "55p"], win_tile="5p")
    result = score_hand_shape(hand, base_context(honba=3), RuleSet())
    assert result.yakuman is True
    assert result.han == 1
    assert result.fu == 0
    assert result.fu_breakdown == []
    assert result.point_label == "Yakuman"
    assert [y.name for y in result.yaku] == ["Daisangen"]
    assert result.payments.non_dealer_ron == 32000
    assert result.payments.dealer_ron == 48000


def test_double_yakuman_result():
    hand = base_hand(groups=["111m", "222p", "333s", "444m", "55s"], win_tile="5s")
    result = score_hand_shape(hand, base_context(riichi=False, dora=0), RuleSet())
    assert result.point_label == "Double Yakuman"
    assert result.han == 2
    assert result.han == sum(item.han for item in result.yaku)
    assert result.payments.non_dealer_ron == 64000


def test_no_yaku_raises():
    hand = base_hand(groups=["123m", "456p", "789s", "234s", "22p"])
    with pytest.raises(NoYakuError):
        score_hand_shape(hand, base_context(riichi=False), RuleSet())


def test_condition_errors_propagate():
    with pytest.raises(RinshanWithoutKanError):
        score_hand_shape(base_hand(), base_context(win_type="tsumo", rinshan=True), RuleSet())


def test_score_manual():
    payments = score_manual(4, 30, honba=3)
    assert payments.dealer_ron == 12500
    assert payments.non_dealer_tsumo_to_non_dealer == 2300
