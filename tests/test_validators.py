import pytest

from handcalc.errors import (
    ChankanTsumoError,
    ConditionError,
    DoubleRiichiHaiteiChankanError,
    DoubleRiichiHaiteiIppatsuError,
    DuplicateRiichiError,
    FirstTurnRonError,
    HaiteiRonError,
    HouteiTsumoError,
    IppatsuWithoutRiichiError,
    OpenRiichiError,
    RinshanIppatsuError,
    RinshanWithoutKanError,
    RinshanWithoutTsumoError,
)
from handcalc.hand import build_hand
from handcalc.schemas import ContextInput, HandInput
from handcalc.validators import validate_conditions


def closed_hand():
    return build_hand(HandInput(groups=["123m", "456p", "789s", "234s", "22p"], win_tile="2p"))


def kan_hand():
    return build_hand(HandInput(groups=["123m", "456p", "789s", "1111s", "22p"], win_tile="2p"))


def base_context(**kwargs) -> ContextInput:
    payload = {"win_type": "ron"}
    payload.update(kwargs)
    return ContextInput.model_validate(payload)


@pytest.mark.parametrize(
    "flags, error",
    [
        ({"riichi": True, "double_riichi": True}, DuplicateRiichiError),
        ({"ippatsu": True}, IppatsuWithoutRiichiError),
        (
            {"win_type": "tsumo", "double_riichi": True, "haitei": True, "ippatsu": True},
            DoubleRiichiHaiteiIppatsuError,
        ),
        ({"double_riichi": True, "haitei": True, "chankan": True}, DoubleRiichiHaiteiChankanError),
        ({"win_type": "tsumo", "chankan": True}, ChankanTsumoError),
        ({"win_type": "tsumo", "rinshan": True}, RinshanWithoutKanError),
        ({"win_type": "ron", "haitei": True}, HaiteiRonError),
        ({"win_type": "tsumo", "houtei": True}, HouteiTsumoError),
        ({"win_type": "ron", "tenhou": True}, FirstTurnRonError),
    ],
)
def test_conflicting_flags(flags, error):
    with pytest.raises(error):
        validate_conditions(closed_hand(), base_context(**flags))


def test_rinshan_rules_with_kan():
    validate_conditions(kan_hand(), base_context(win_type="tsumo", rinshan=True))
    with pytest.raises(RinshanWithoutTsumoError):
        validate_conditions(kan_hand(), base_context(rinshan=True))
    with pytest.raises(RinshanIppatsuError):
        validate_conditions(kan_hand(), base_context(win_type="tsumo", rinshan=True, riichi=True, ippatsu=True))


def test_riichi_needs_closed_hand():
    hand = build_hand(HandInput(groups=["123mo", "456p", "789s", "234s", "22p"], win_tile="2p"))
    with pytest.raises(OpenRiichiError):
        validate_conditions(hand, base_context(riichi=True))


def test_valid_flags_pass():
    validate_conditions(closed_hand(), base_context(riichi=True, ippatsu=True))
    validate_conditions(closed_hand(), base_context(win_type="tsumo", double_riichi=True, haitei=True))
    validate_conditions(closed_hand(), base_context(win_type="tsumo", tenhou=True))


def test_condition_errors_share_a_base():
    assert issubclass(HaiteiRonError, ConditionError)
    assert issubclass(ConditionError, ValueError)
