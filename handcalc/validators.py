from __future__ import annotations

from handcalc.errors import (
    ChankanTsumoError,
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
from handcalc.hand import Hand
from handcalc.schemas import ContextInput


def validate_conditions(hand: Hand, context: ContextInput) -> None:
    """Reject situational flags that contradict each other or the hand."""
    if context.riichi and context.double_riichi:
        raise DuplicateRiichiError()
    if (context.riichi or context.double_riichi) and hand.is_open:
        raise OpenRiichiError()
    if context.ippatsu and not (context.riichi or context.double_riichi):
        raise IppatsuWithoutRiichiError()
    if context.double_riichi and context.haitei and context.ippatsu:
        raise DoubleRiichiHaiteiIppatsuError()
    if context.double_riichi and context.haitei and context.chankan:
        raise DoubleRiichiHaiteiChankanError()
    if context.chankan and context.is_tsumo:
        raise ChankanTsumoError()
    if context.rinshan and not hand.kans:
        raise RinshanWithoutKanError()
    if context.rinshan and not context.is_tsumo:
        raise RinshanWithoutTsumoError()
    if context.rinshan and context.ippatsu:
        raise RinshanIppatsuError()
    if context.haitei and not context.is_tsumo:
        raise HaiteiRonError()
    if context.houtei and context.is_tsumo:
        raise HouteiTsumoError()
    if context.tenhou and not context.is_tsumo:
        raise FirstTurnRonError()
