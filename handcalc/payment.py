from __future__ import annotations

from enum import Enum

from handcalc.errors import NoFuError, NoHanError
from handcalc.logging import get_logger
from handcalc.schemas import Payments, RuleSet

logger = get_logger()

DEALER_RON_MULTIPLIER = 6
DEALER_TSUMO_MULTIPLIER = 2
NON_DEALER_RON_MULTIPLIER = 4
NON_DEALER_TSUMO_TO_NON_DEALER_MULTIPLIER = 1
NON_DEALER_TSUMO_TO_DEALER_MULTIPLIER = 2

RON_HONBA_POINTS = 300
TSUMO_HONBA_POINTS = 100
YAKUMAN_BASE_POINTS = 8000


class LimitHand(str, Enum):
    mangan = "Mangan"
    haneman = "Haneman"
    baiman = "Baiman"
    sanbaiman = "Sanbaiman"
    kazoe_yakuman = "Kazoe Yakuman"

    @property
    def base_points(self) -> int:
        return LIMIT_BASE_POINTS[self]


LIMIT_BASE_POINTS = {
    LimitHand.mangan: 2000,
    LimitHand.haneman: 3000,
    LimitHand.baiman: 4000,
    LimitHand.sanbaiman: 6000,
    LimitHand.kazoe_yakuman: 8000,
}


def _round_up_100(points: int) -> int:
    return ((points + 99) // 100) * 100


def _is_limit(han: int, fu: int) -> bool:
    return han >= 5 or (han == 4 and fu >= 40) or (han == 3 and fu >= 70)


def limit_hand(han: int, fu: int, kazoe_yakuman_ari: bool = True) -> LimitHand | None:
    """Limit tier for the han/fu, or None when the hand is scored by formula."""
    if not _is_limit(han, fu):
        return None
    if han <= 5:
        return LimitHand.mangan
    if han <= 7:
        return LimitHand.haneman
    if han <= 10:
        return LimitHand.baiman
    if han <= 12 or not kazoe_yakuman_ari:
        return LimitHand.sanbaiman
    return LimitHand.kazoe_yakuman


def base_points(han: int, fu: int, kazoe_yakuman_ari: bool = True) -> int:
    limit = limit_hand(han, fu, kazoe_yakuman_ari)
    if limit is not None:
        return limit.base_points
    return fu * (2 ** (han + 2))


def payments_from_base(base: int, honba: int = 0, *, round_up: bool = True, honba_bonus: bool = True) -> Payments:
    """Five-way payment table for a base point value.

    Each share is the base times its multiplier, rounded up to the next 100
    unless ``round_up`` is off. Honba adds 300 per counter to ron payments
    and 100 per counter to each tsumo share.
    """

    def share(multiplier: int) -> int:
        points = base * multiplier
        return _round_up_100(points) if round_up else points

    ron_bonus = RON_HONBA_POINTS * honba if honba_bonus else 0
    tsumo_bonus = TSUMO_HONBA_POINTS * honba if honba_bonus else 0
    return Payments(
        base_points=base,
        honba=honba,
        dealer_ron=share(DEALER_RON_MULTIPLIER) + ron_bonus,
        dealer_tsumo=share(DEALER_TSUMO_MULTIPLIER) + tsumo_bonus,
        non_dealer_ron=share(NON_DEALER_RON_MULTIPLIER) + ron_bonus,
        non_dealer_tsumo_to_non_dealer=share(NON_DEALER_TSUMO_TO_NON_DEALER_MULTIPLIER) + tsumo_bonus,
        non_dealer_tsumo_to_dealer=share(NON_DEALER_TSUMO_TO_DEALER_MULTIPLIER) + tsumo_bonus,
    )


def calculate(han: int, fu: int, honba: int = 0, rules: RuleSet | None = None) -> Payments:
    if han <= 0:
        raise NoHanError()
    if fu <= 0:
        raise NoFuError()
    rules = rules or RuleSet()
    base = base_points(han, fu, rules.kazoe_yakuman_ari)
    logger.debug("payments calculated", han=han, fu=fu, base=base, limit=point_label(han, fu, rules))
    return payments_from_base(base, honba)


def calculate_yakuman(units: int, honba: int = 0, rules: RuleSet | None = None) -> Payments:
    """Yakuman payments: 8000 base per unit, no rounding, honba only if the rules say so."""
    rules = rules or RuleSet()
    return payments_from_base(
        YAKUMAN_BASE_POINTS * units,
        honba,
        round_up=False,
        honba_bonus=rules.yakuman_honba,
    )


def point_label(han: int, fu: int, rules: RuleSet | None = None) -> str:
    rules = rules or RuleSet()
    limit = limit_hand(han, fu, rules.kazoe_yakuman_ari)
    if limit is None:
        return "Normal"
    return limit.value


def yakuman_label(units: int) -> str:
    if units <= 1:
        return "Yakuman"
    if units == 2:
        return "Double Yakuman"
    return f"{units}x Yakuman"
