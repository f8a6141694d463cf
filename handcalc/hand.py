from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, ConfigDict

from handcalc.errors import (
    InvalidShapeError,
    InvalidSuitError,
    NoHandTilesError,
    NoWinTileError,
)
from handcalc.logging import get_logger
from handcalc.schemas import GroupType, HandInput, Suit
from handcalc.tiles import TileGroup, parse_group, parse_tile

logger = get_logger()

FULL_SHAPES = (GroupType.sequence, GroupType.triplet, GroupType.kan)


class Hand(BaseModel):
    """A complete hand as an ordered list of groups.

    The last group is the one the winning tile completed; it drives the wait
    fu and several yaku edge cases.
    """

    model_config = ConfigDict(frozen=True)

    groups: tuple[TileGroup, ...]
    win_tile: TileGroup
    seat_wind: TileGroup
    round_wind: TileGroup

    def _of_type(self, group_type: GroupType) -> list[TileGroup]:
        return [group for group in self.groups if group.group_type == group_type]

    @property
    def is_open(self) -> bool:
        return any(group.is_open for group in self.groups)

    @property
    def sequences(self) -> list[TileGroup]:
        return self._of_type(GroupType.sequence)

    @property
    def triplets(self) -> list[TileGroup]:
        return self._of_type(GroupType.triplet)

    @property
    def kans(self) -> list[TileGroup]:
        return self._of_type(GroupType.kan)

    @property
    def pairs(self) -> list[TileGroup]:
        return self._of_type(GroupType.pair)

    @property
    def singles(self) -> list[TileGroup]:
        """Groups with no shape; only the thirteen orphans hand has them."""
        return self._of_type(GroupType.single)

    @property
    def triplets_and_kans(self) -> list[TileGroup]:
        return [group for group in self.groups if group.group_type in (GroupType.triplet, GroupType.kan)]

    @property
    def last_group(self) -> TileGroup:
        return self.groups[-1]

    @property
    def is_orphan_shape(self) -> bool:
        return len(self.singles) == 12 and len(self.pairs) == 1

    @property
    def is_dealer(self) -> bool:
        return self.seat_wind.value == "E"

    @property
    def red_five_count(self) -> int:
        return sum(1 for group in self.groups if group.is_red_five)


def _is_valid_shape(groups: list[TileGroup]) -> bool:
    counts = Counter(group.group_type for group in groups)
    full_shapes = sum(counts[group_type] for group_type in FULL_SHAPES)
    pairs = counts[GroupType.pair]
    singles = counts[GroupType.single]
    if full_shapes == 4 and pairs == 1 and singles == 0:
        return True
    if pairs == 7 and full_shapes == 0 and singles == 0:
        return True
    return singles == 12 and pairs == 1 and full_shapes == 0


def _last_group_holds_win_tile(last: TileGroup, win_tile: TileGroup, orphan_shape: bool) -> bool:
    if orphan_shape:
        return last.matches(win_tile)
    if last.group_type == GroupType.sequence:
        if last.suit != win_tile.suit:
            return False
        return win_tile.rank in (last.rank, last.rank + 1, last.rank + 2)
    if last.group_type in (GroupType.triplet, GroupType.pair):
        return last.matches(win_tile)
    # a hand cannot be completed on a kan or a lone single
    return False


def _parse_wind(token: str) -> TileGroup:
    tile = parse_tile(token)
    if tile.suit != Suit.wind:
        raise InvalidSuitError(f"Expected a wind tile, got {token!r}")
    return tile


def build_hand(hand: HandInput) -> Hand:
    """Tokens -> validated Hand. Raises on the first malformed token or shape."""
    if not hand.groups:
        raise NoHandTilesError()
    if not hand.win_tile.strip():
        raise NoWinTileError()

    groups = [parse_group(token) for token in hand.groups]
    win_tile = parse_tile(hand.win_tile)
    seat_wind = _parse_wind(hand.seat_wind)
    round_wind = _parse_wind(hand.round_wind)

    if not _is_valid_shape(groups):
        raise InvalidShapeError()

    orphan_shape = any(group.group_type == GroupType.single for group in groups)
    if not _last_group_holds_win_tile(groups[-1], win_tile, orphan_shape):
        raise InvalidShapeError(f"Winning tile {hand.win_tile} does not complete group {hand.groups[-1]}")

    built = Hand(groups=tuple(groups), win_tile=win_tile, seat_wind=seat_wind, round_wind=round_wind)
    logger.debug("hand assembled", groups=len(groups), is_open=built.is_open, win_tile=hand.win_tile)
    return built
