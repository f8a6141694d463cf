from __future__ import annotations

from enum import Enum

from handcalc.hand import Hand
from handcalc.logging import get_logger
from handcalc.schemas import FuBreakdownItem, GroupType, RuleSet, Suit
from handcalc.tiles import TileGroup

logger = get_logger()


class Fu(str, Enum):
    base_points = "BasePoints"
    base_points_chiitoitsu = "BasePointsChiitoitsu"
    closed_ron = "ClosedRon"
    tsumo = "Tsumo"
    non_simple_closed_triplet = "NonSimpleClosedTriplet"
    simple_closed_triplet = "SimpleClosedTriplet"
    non_simple_open_triplet = "NonSimpleOpenTriplet"
    simple_open_triplet = "SimpleOpenTriplet"
    non_simple_closed_kan = "NonSimpleClosedKan"
    simple_closed_kan = "SimpleClosedKan"
    non_simple_open_kan = "NonSimpleOpenKan"
    simple_open_kan = "SimpleOpenKan"
    toitsu = "Toitsu"
    single_wait = "SingleWait"

    @property
    def points(self) -> int:
        return FU_POINTS[self]


FU_POINTS = {
    Fu.base_points: 20,
    Fu.base_points_chiitoitsu: 25,
    Fu.closed_ron: 10,
    Fu.tsumo: 2,
    Fu.non_simple_closed_triplet: 8,
    Fu.simple_closed_triplet: 4,
    Fu.non_simple_open_triplet: 4,
    Fu.simple_open_triplet: 2,
    Fu.non_simple_closed_kan: 32,
    Fu.simple_closed_kan: 16,
    Fu.non_simple_open_kan: 16,
    Fu.simple_open_kan: 8,
    Fu.toitsu: 2,
    Fu.single_wait: 2,
}

# (terminal_or_honor, is_open) -> fu
TRIPLET_FU = {
    (True, False): Fu.non_simple_closed_triplet,
    (False, False): Fu.simple_closed_triplet,
    (True, True): Fu.non_simple_open_triplet,
    (False, True): Fu.simple_open_triplet,
}
KAN_FU = {
    (True, False): Fu.non_simple_closed_kan,
    (False, False): Fu.simple_closed_kan,
    (True, True): Fu.non_simple_open_kan,
    (False, True): Fu.simple_open_kan,
}


def _is_yaochu(group: TileGroup) -> bool:
    return group.is_honor or group.is_terminal


def _pair_fu(pair: TileGroup, hand: Hand, rules: RuleSet) -> list[Fu]:
    matches = [
        pair.matches(hand.round_wind),
        pair.matches(hand.seat_wind),
        pair.suit == Suit.dragon,
    ]
    count = sum(matches)
    if rules.renpu_fu == 2:
        count = min(count, 1)
    return [Fu.toitsu] * count


def _wait_fu(hand: Hand) -> list[Fu]:
    last = hand.last_group
    if last.group_type == GroupType.pair:
        return [Fu.single_wait]
    if last.group_type != GroupType.sequence:
        return []
    win_rank = hand.win_tile.rank
    kanchan = win_rank == last.rank + 1
    penchan = last.is_terminal and not hand.win_tile.is_terminal
    if kanchan or penchan:
        return [Fu.single_wait]
    return []


def _accumulate_fu(hand: Hand, tsumo: bool, rules: RuleSet) -> list[Fu]:
    fu_types = [Fu.base_points]
    if tsumo:
        fu_types.append(Fu.tsumo)
    if not hand.is_open and not tsumo:
        fu_types.append(Fu.closed_ron)

    last_index = len(hand.groups) - 1
    for index, group in enumerate(hand.groups):
        if group.group_type != GroupType.triplet:
            continue
        is_open = group.is_open
        if index == last_index:
            # the winning tile closes the triplet on tsumo, a discard opens it on ron
            is_open = not tsumo
        fu_types.append(TRIPLET_FU[(_is_yaochu(group), is_open)])

    for kan in hand.kans:
        fu_types.append(KAN_FU[(_is_yaochu(kan), kan.is_open)])

    for pair in hand.pairs:
        fu_types.extend(_pair_fu(pair, hand, rules))

    fu_types.extend(_wait_fu(hand))
    return fu_types


def is_pinfu_shape(hand: Hand) -> bool:
    """Closed hand whose ron fu would be nothing but the base and closed-ron fu."""
    if hand.is_open or hand.is_orphan_shape:
        return False
    return all(fu in (Fu.base_points, Fu.closed_ron) for fu in _accumulate_fu(hand, False, RuleSet()))


def calculate_fu(hand: Hand, tsumo: bool, rules: RuleSet | None = None) -> list[Fu]:
    """Minipoint contributors for the hand, in display order."""
    rules = rules or RuleSet()
    if len(hand.pairs) == 7:
        return [Fu.base_points_chiitoitsu]
    if is_pinfu_shape(hand):
        return [Fu.base_points] if tsumo else [Fu.base_points, Fu.closed_ron]
    return _accumulate_fu(hand, tsumo, rules)


def total_fu(fu_types: list[Fu]) -> int:
    """Sum the fu and round up to the next 10; seven pairs stays at 25."""
    total = sum(fu.points for fu in fu_types)
    if fu_types == [Fu.base_points_chiitoitsu]:
        return total
    rounded = ((total + 9) // 10) * 10
    logger.debug("fu totalled", raw=total, rounded=rounded)
    return rounded


def fu_breakdown(fu_types: list[Fu]) -> list[FuBreakdownItem]:
    return [FuBreakdownItem(name=fu.value, fu=fu.points) for fu in fu_types]
