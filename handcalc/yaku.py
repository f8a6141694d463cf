from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Callable

from handcalc.errors import NoYakuError
from handcalc.fu import is_pinfu_shape
from handcalc.hand import Hand
from handcalc.logging import get_logger
from handcalc.schemas import NUMBER_SUITS, ContextInput, GroupType, RuleSet, Suit, YakuItem
from handcalc.tiles import TileGroup

logger = get_logger()


class Yaku(str, Enum):
    # situational
    riichi = "Riichi"
    double_riichi = "Double Riichi"
    ippatsu = "Ippatsu"
    menzen_tsumo = "Menzen Tsumo"
    haitei = "Haitei"
    houtei = "Houtei"
    rinshan_kaihou = "Rinshan Kaihou"
    chankan = "Chankan"

    # hand shape
    yakuhai = "Yakuhai"
    tanyao = "Tanyao"
    pinfu = "Pinfu"
    iipeikou = "Iipeikou"
    ryanpeikou = "Ryanpeikou"
    sanshoku_doujun = "Sanshoku Doujun"
    ittsuu = "Ittsuu"
    chantaiyao = "Chantaiyao"
    junchan_taiyao = "Junchan Taiyao"
    toitoi = "Toitoi"
    sanankou = "Sanankou"
    sanshoku_doukou = "Sanshoku Doukou"
    sankantsu = "Sankantsu"
    honroutou = "Honroutou"
    shousangen = "Shousangen"
    chiitoitsu = "Chiitoitsu"
    honitsu = "Honitsu"
    chinitsu = "Chinitsu"

    # yakuman
    kokushi_musou = "Kokushi Musou"
    kokushi_musou_13_sided = "Kokushi Musou 13-sided Wait"
    suuankou = "Suuankou"
    suuankou_tanki = "Suuankou Tanki Wait"
    daisangen = "Daisangen"
    shousuushii = "Shousuushii"
    daisuushii = "Daisuushii"
    tsuuiisou = "Tsuuiisou"
    daichiishin = "Daichiishin"
    chinroutou = "Chinroutou"
    ryuuiisou = "Ryuuiisou"
    chuuren_poutou = "Chuuren Poutou"
    chuuren_poutou_9_sided = "Chuuren Poutou 9-sided Wait"
    suukantsu = "Suukantsu"
    tenhou = "Tenhou"
    chiihou = "Chiihou"

    @property
    def is_yakuman(self) -> bool:
        return self in YAKUMAN

    def han(self, is_open: bool) -> int:
        """Han for the pattern; 0 when it is not allowed on an open hand."""
        if self.is_yakuman:
            return 1
        closed, opened = HAN[self]
        if not is_open:
            return closed
        return opened or 0


# yaku -> (closed han, open han or None when closed-only)
HAN: dict[Yaku, tuple[int, int | None]] = {
    Yaku.riichi: (1, None),
    Yaku.double_riichi: (2, None),
    Yaku.ippatsu: (1, None),
    Yaku.menzen_tsumo: (1, None),
    Yaku.haitei: (1, 1),
    Yaku.houtei: (1, 1),
    Yaku.rinshan_kaihou: (1, 1),
    Yaku.chankan: (1, 1),
    Yaku.yakuhai: (1, 1),
    Yaku.tanyao: (1, 1),
    Yaku.pinfu: (1, None),
    Yaku.iipeikou: (1, None),
    Yaku.ryanpeikou: (3, None),
    Yaku.sanshoku_doujun: (2, 1),
    Yaku.ittsuu: (2, 1),
    Yaku.chantaiyao: (2, 1),
    Yaku.junchan_taiyao: (3, 2),
    Yaku.toitoi: (2, 2),
    Yaku.sanankou: (2, 2),
    Yaku.sanshoku_doukou: (2, 2),
    Yaku.sankantsu: (2, 2),
    Yaku.honroutou: (2, 2),
    Yaku.shousangen: (2, 2),
    Yaku.chiitoitsu: (2, None),
    Yaku.honitsu: (3, 2),
    Yaku.chinitsu: (6, 5),
}

YAKUMAN = {
    Yaku.kokushi_musou,
    Yaku.kokushi_musou_13_sided,
    Yaku.suuankou,
    Yaku.suuankou_tanki,
    Yaku.daisangen,
    Yaku.shousuushii,
    Yaku.daisuushii,
    Yaku.tsuuiisou,
    Yaku.daichiishin,
    Yaku.chinroutou,
    Yaku.ryuuiisou,
    Yaku.chuuren_poutou,
    Yaku.chuuren_poutou_9_sided,
    Yaku.suukantsu,
    Yaku.tenhou,
    Yaku.chiihou,
}

# pattern -> the base yakuman it always satisfies as well; the base is dropped
# when double yakuman is off
DOUBLE_YAKUMAN_OVERLAPS = {
    Yaku.kokushi_musou_13_sided: Yaku.kokushi_musou,
    Yaku.suuankou_tanki: Yaku.suuankou,
    Yaku.chuuren_poutou_9_sided: Yaku.chuuren_poutou,
    Yaku.daichiishin: Yaku.tsuuiisou,
    Yaku.daisuushii: Yaku.shousuushii,
}

GREEN_TILES = {
    (Suit.souzu, "2"),
    (Suit.souzu, "3"),
    (Suit.souzu, "4"),
    (Suit.souzu, "6"),
    (Suit.souzu, "8"),
    (Suit.dragon, "g"),
}
CHUUREN_BASE = {1: 3, 2: 1, 3: 1, 4: 1, 5: 1, 6: 1, 7: 1, 8: 1, 9: 3}
WIND_NAMES = {"E": "East", "S": "South", "W": "West", "N": "North"}
DRAGON_NAMES = {"r": "Red Dragon", "g": "Green Dragon", "w": "White Dragon"}

Predicate = Callable[[Hand, ContextInput, RuleSet], bool]


def _is_yaochu(group: TileGroup) -> bool:
    return group.is_honor or group.is_terminal


def _values_by_suit(groups: list[TileGroup]) -> dict[Suit, set[str]]:
    values: dict[Suit, set[str]] = {suit: set() for suit in NUMBER_SUITS}
    for group in groups:
        if group.suit in values:
            values[group.suit].add(group.value)
    return values


def _sequence_counts(hand: Hand) -> Counter:
    return Counter(group.key for group in hand.sequences)


def _won_by_ron_on_triplet(hand: Hand, context: ContextInput) -> bool:
    return not context.is_tsumo and hand.last_group.group_type == GroupType.triplet


# situational yaku


def _has_riichi(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return context.riichi and not context.double_riichi


def _has_double_riichi(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return context.double_riichi


def _has_ippatsu(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return context.ippatsu


def _has_menzen_tsumo(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return not hand.is_open and context.is_tsumo


def _has_haitei(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return context.haitei


def _has_houtei(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return context.houtei


def _has_rinshan_kaihou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return context.rinshan


def _has_chankan(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return context.chankan


# hand shape yaku


def _has_tanyao(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    if hand.is_orphan_shape:
        return False
    if hand.is_open and not rules.kuitan_ari:
        return False
    return not any(_is_yaochu(group) for group in hand.groups)


def _has_pinfu(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return is_pinfu_shape(hand)


def _has_ryanpeikou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    if hand.is_open or len(hand.sequences) != 4:
        return False
    return sorted(_sequence_counts(hand).values()) in ([2, 2], [4])


def _has_iipeikou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    if hand.is_open:
        return False
    if not any(count >= 2 for count in _sequence_counts(hand).values()):
        return False
    return not _has_ryanpeikou(hand, context, rules)


def _has_sanshoku_doujun(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    values = _values_by_suit(hand.sequences)
    return bool(values[Suit.manzu] & values[Suit.pinzu] & values[Suit.souzu])


def _has_ittsuu(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    values = _values_by_suit(hand.sequences)
    return any({"1", "4", "7"} <= suit_values for suit_values in values.values())


def _has_chantaiyao(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    if hand.is_orphan_shape or not hand.sequences:
        return False
    if not all(_is_yaochu(group) for group in hand.groups):
        return False
    has_terminal = any(group.is_terminal for group in hand.groups)
    has_honor = any(group.is_honor for group in hand.groups)
    return has_terminal and has_honor


def _has_junchan_taiyao(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    if hand.is_orphan_shape or not hand.sequences:
        return False
    return all(group.is_terminal and not group.is_honor for group in hand.groups)


def _has_toitoi(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return len(hand.triplets_and_kans) == 4


def _has_sanankou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    concealed = sum(1 for group in hand.triplets_and_kans if not group.is_open)
    # a triplet finished on a discard is not concealed
    if _won_by_ron_on_triplet(hand, context) and not hand.last_group.is_open:
        concealed -= 1
    return concealed == 3


def _has_sanshoku_doukou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    values = _values_by_suit(hand.triplets_and_kans)
    return bool(values[Suit.manzu] & values[Suit.pinzu] & values[Suit.souzu])


def _has_sankantsu(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return len(hand.kans) == 3


def _has_honroutou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    if hand.is_orphan_shape or hand.sequences:
        return False
    if not all(_is_yaochu(group) for group in hand.groups):
        return False
    has_terminal = any(group.is_terminal for group in hand.groups)
    has_honor = any(group.is_honor for group in hand.groups)
    return has_terminal and has_honor


def _has_shousangen(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    dragons = sum(1 for group in hand.triplets_and_kans if group.suit == Suit.dragon)
    pairs = hand.pairs
    return dragons == 2 and len(pairs) == 1 and pairs[0].suit == Suit.dragon


def _has_chiitoitsu(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return len(hand.pairs) == 7


def _has_honitsu(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    if hand.is_orphan_shape:
        return False
    has_honor = any(group.is_honor for group in hand.groups)
    suits = {group.suit for group in hand.groups if not group.is_honor}
    return has_honor and len(suits) == 1


def _has_chinitsu(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    if hand.is_orphan_shape:
        return False
    suits = {group.suit for group in hand.groups}
    return len(suits) == 1 and next(iter(suits)) in NUMBER_SUITS


# yakuman


def _has_kokushi_musou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    if not hand.is_orphan_shape:
        return False
    if not all(_is_yaochu(group) for group in hand.groups):
        return False
    return len({group.key for group in hand.groups}) == 13


def _has_kokushi_musou_13_sided(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return _has_kokushi_musou(hand, context, rules) and hand.last_group.group_type == GroupType.pair


def _has_four_concealed_triplets(hand: Hand) -> bool:
    if hand.is_orphan_shape or hand.is_open:
        return False
    return len(hand.triplets_and_kans) == 4


def _has_suuankou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return _has_four_concealed_triplets(hand) and not _won_by_ron_on_triplet(hand, context)


def _has_suuankou_tanki(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return _has_four_concealed_triplets(hand) and hand.last_group.group_type == GroupType.pair


def _has_daisangen(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    dragons = {group.value for group in hand.triplets_and_kans if group.suit == Suit.dragon}
    return dragons == {"r", "g", "w"}


def _has_shousuushii(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    if len(hand.pairs) != 1:
        return False
    winds = [group for group in hand.groups if group.suit == Suit.wind and group.group_type != GroupType.single]
    return len(winds) == 4


def _has_daisuushii(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return sum(1 for group in hand.triplets_and_kans if group.suit == Suit.wind) == 4


def _has_tsuuiisou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    if hand.is_orphan_shape:
        return False
    return all(group.is_honor for group in hand.groups)


def _has_daichiishin(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return _has_tsuuiisou(hand, context, rules) and len(hand.pairs) == 7


def _has_chinroutou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    if len(hand.triplets_and_kans) != 4:
        return False
    return all(group.is_terminal for group in hand.groups)


def _has_ryuuiisou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    if hand.is_orphan_shape:
        return False
    for group in hand.groups:
        if group.group_type == GroupType.sequence:
            if group.key != (Suit.souzu, "2"):
                return False
        elif group.key not in GREEN_TILES:
            return False
    return True


def _chuuren_extra_rank(hand: Hand) -> int | None:
    """Rank of the tile added to 1112345678999, or None if the hand is not one."""
    if hand.is_open or hand.kans or hand.is_orphan_shape:
        return None
    suits = {group.suit for group in hand.groups}
    if len(suits) != 1 or next(iter(suits)) not in NUMBER_SUITS:
        return None
    counts = Counter(int(tile) for group in hand.groups for tile in group.tiles)
    if sum(counts.values()) != 14:
        return None
    if any(counts[rank] < base for rank, base in CHUUREN_BASE.items()):
        return None
    return next(rank for rank, base in CHUUREN_BASE.items() if counts[rank] > base)


def _has_chuuren_poutou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return _chuuren_extra_rank(hand) is not None


def _has_chuuren_poutou_9_sided(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    extra = _chuuren_extra_rank(hand)
    return extra is not None and extra == hand.win_tile.rank


def _has_suukantsu(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return len(hand.kans) == 4


def _has_tenhou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return context.tenhou and hand.is_dealer


def _has_chiihou(hand: Hand, context: ContextInput, rules: RuleSet) -> bool:
    return context.tenhou and not hand.is_dealer


YAKUMAN_TABLE: list[tuple[Yaku, Predicate]] = [
    (Yaku.kokushi_musou, _has_kokushi_musou),
    (Yaku.kokushi_musou_13_sided, _has_kokushi_musou_13_sided),
    (Yaku.suuankou, _has_suuankou),
    (Yaku.suuankou_tanki, _has_suuankou_tanki),
    (Yaku.daisangen, _has_daisangen),
    (Yaku.shousuushii, _has_shousuushii),
    (Yaku.daisuushii, _has_daisuushii),
    (Yaku.tsuuiisou, _has_tsuuiisou),
    (Yaku.daichiishin, _has_daichiishin),
    (Yaku.chinroutou, _has_chinroutou),
    (Yaku.ryuuiisou, _has_ryuuiisou),
    (Yaku.chuuren_poutou, _has_chuuren_poutou),
    (Yaku.chuuren_poutou_9_sided, _has_chuuren_poutou_9_sided),
    (Yaku.suukantsu, _has_suukantsu),
    (Yaku.tenhou, _has_tenhou),
    (Yaku.chiihou, _has_chiihou),
]

SITUATIONAL_TABLE: list[tuple[Yaku, Predicate]] = [
    (Yaku.riichi, _has_riichi),
    (Yaku.double_riichi, _has_double_riichi),
    (Yaku.ippatsu, _has_ippatsu),
    (Yaku.menzen_tsumo, _has_menzen_tsumo),
    (Yaku.haitei, _has_haitei),
    (Yaku.houtei, _has_houtei),
    (Yaku.rinshan_kaihou, _has_rinshan_kaihou),
    (Yaku.chankan, _has_chankan),
]

YAKU_TABLE: list[tuple[Yaku, Predicate]] = [
    (Yaku.tanyao, _has_tanyao),
    (Yaku.pinfu, _has_pinfu),
    (Yaku.iipeikou, _has_iipeikou),
    (Yaku.ryanpeikou, _has_ryanpeikou),
    (Yaku.sanshoku_doujun, _has_sanshoku_doujun),
    (Yaku.ittsuu, _has_ittsuu),
    (Yaku.chantaiyao, _has_chantaiyao),
    (Yaku.junchan_taiyao, _has_junchan_taiyao),
    (Yaku.toitoi, _has_toitoi),
    (Yaku.sanankou, _has_sanankou),
    (Yaku.sanshoku_doukou, _has_sanshoku_doukou),
    (Yaku.sankantsu, _has_sankantsu),
    (Yaku.honroutou, _has_honroutou),
    (Yaku.shousangen, _has_shousangen),
    (Yaku.chiitoitsu, _has_chiitoitsu),
    (Yaku.honitsu, _has_honitsu),
    (Yaku.chinitsu, _has_chinitsu),
]


def yakuhai_items(hand: Hand) -> list[YakuItem]:
    """One item per value-honor unit; a double-wind triplet counts twice."""
    items: list[YakuItem] = []
    han = Yaku.yakuhai.han(hand.is_open)
    for group in hand.triplets_and_kans:
        if group.matches(hand.round_wind):
            items.append(YakuItem(name=f"Yakuhai (Round Wind {WIND_NAMES[group.value]})", han=han))
        if group.matches(hand.seat_wind):
            items.append(YakuItem(name=f"Yakuhai (Seat Wind {WIND_NAMES[group.value]})", han=han))
        if group.suit == Suit.dragon:
            items.append(YakuItem(name=f"Yakuhai ({DRAGON_NAMES[group.value]})", han=han))
    return items


def find_yakuman(hand: Hand, context: ContextInput, rules: RuleSet | None = None) -> list[Yaku]:
    rules = rules or RuleSet()
    hits = [yaku for yaku, predicate in YAKUMAN_TABLE if predicate(hand, context, rules)]
    if not rules.double_yakuman_ari:
        overlapped = {DOUBLE_YAKUMAN_OVERLAPS[yaku] for yaku in hits if yaku in DOUBLE_YAKUMAN_OVERLAPS}
        hits = [yaku for yaku in hits if yaku not in overlapped]
    return hits


def _items(yaku_list: list[Yaku], hand: Hand) -> list[YakuItem]:
    items = []
    for yaku in yaku_list:
        han = yaku.han(hand.is_open)
        if han:
            items.append(YakuItem(name=yaku.value, han=han, yakuman=yaku.is_yakuman))
    return items


def find_yaku(hand: Hand, context: ContextInput, rules: RuleSet | None = None) -> list[YakuItem]:
    """Ordinary yaku in display order, value honors right after the situational ones."""
    rules = rules or RuleSet()
    situational = [yaku for yaku, predicate in SITUATIONAL_TABLE if predicate(hand, context, rules)]
    shaped = [yaku for yaku, predicate in YAKU_TABLE if predicate(hand, context, rules)]
    return _items(situational, hand) + yakuhai_items(hand) + _items(shaped, hand)


def evaluate_yaku(
    hand: Hand, context: ContextInput, rules: RuleSet | None = None
) -> tuple[list[YakuItem], int]:
    """Awarded patterns and their han. Yakuman, when present, replace everything else."""
    rules = rules or RuleSet()
    yakuman = find_yakuman(hand, context, rules)
    if yakuman:
        items = _items(yakuman, hand)
        logger.debug("yakuman awarded", yakuman=[yaku.value for yaku in yakuman])
        return items, sum(item.han for item in items)

    items = find_yaku(hand, context, rules)
    han = sum(item.han for item in items)
    if han == 0:
        raise NoYakuError()
    return items, han
