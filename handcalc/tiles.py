from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from handcalc.errors import InvalidGroupError, InvalidSuitError
from handcalc.schemas import NUMBER_SUITS, GroupType, Suit

OPEN_MARKER = "o"
RED_FIVE = "0"
SEQUENCES = {"123", "234", "345", "456", "567", "678", "789"}
WIND_VALUES = ("E", "S", "W", "N")
DRAGON_VALUES = ("r", "g", "w")
TILE_CHARS = {
    Suit.manzu: set("0123456789"),
    Suit.pinzu: set("0123456789"),
    Suit.souzu: set("0123456789"),
    Suit.wind: set(WIND_VALUES),
    Suit.dragon: set(DRAGON_VALUES),
}
SUIT_CHARS = {suit.value: suit for suit in Suit}
TILE_COUNTS = {
    GroupType.single: 1,
    GroupType.pair: 2,
    GroupType.sequence: 3,
    GroupType.triplet: 3,
    GroupType.kan: 4,
}


class TileGroup(BaseModel):
    """One meld, pair or single tile parsed from a notation token."""

    model_config = ConfigDict(frozen=True)

    value: str
    suit: Suit
    group_type: GroupType
    is_open: bool = False
    is_terminal: bool = False
    is_red_five: bool = False

    @property
    def is_honor(self) -> bool:
        return self.suit in (Suit.wind, Suit.dragon)

    @property
    def rank(self) -> int | None:
        if self.is_honor:
            return None
        return int(self.value)

    @property
    def key(self) -> tuple[Suit, str]:
        return self.suit, self.value

    @property
    def tile_count(self) -> int:
        return TILE_COUNTS[self.group_type]

    @property
    def tiles(self) -> list[str]:
        """Tile values covered by the group, e.g. ``["7", "8", "9"]``."""
        if self.group_type == GroupType.sequence:
            start = int(self.value)
            return [str(start + i) for i in range(3)]
        return [self.value] * self.tile_count

    def matches(self, other: TileGroup) -> bool:
        return self.key == other.key


def _suit_from_char(char: str) -> Suit:
    try:
        return SUIT_CHARS[char]
    except KeyError:
        raise InvalidSuitError(f"Invalid Suit found: {char!r}") from None


def _group_type(tiles: str) -> GroupType:
    identical = len(set(tiles)) == 1
    count = len(tiles)
    if count == 1:
        return GroupType.single
    if count == 2 and identical:
        return GroupType.pair
    if count == 3:
        if identical:
            return GroupType.triplet
        if tiles in SEQUENCES:
            return GroupType.sequence
    if count == 4 and identical:
        return GroupType.kan
    raise InvalidGroupError(f"Invalid Group found: {tiles!r}")


def parse_group(token: str) -> TileGroup:
    """Parse a token such as ``"789p"``, ``"rrrdo"`` or ``"406m"``.

    A trailing ``o`` marks a called (open) group. The character before it is
    the suit, everything in front of the suit is the tiles. ``0`` stands for
    a red five in the number suits.
    """
    body = token.strip()
    is_open = body.endswith(OPEN_MARKER)
    if is_open:
        body = body[:-1]
    if len(body) < 2:
        raise InvalidGroupError(f"Invalid Group found: {token!r}")

    suit = _suit_from_char(body[-1])
    raw_tiles = body[:-1]
    if any(char not in TILE_CHARS[suit] for char in raw_tiles):
        raise InvalidGroupError(f"Invalid Group found: {token!r}")

    tiles = raw_tiles.replace(RED_FIVE, "5")
    group_type = _group_type(tiles)
    value = tiles[0]

    is_terminal = False
    if suit in NUMBER_SUITS:
        terminal_values = {"1", "7"} if group_type == GroupType.sequence else {"1", "9"}
        is_terminal = value in terminal_values

    return TileGroup(
        value=value,
        suit=suit,
        group_type=group_type,
        is_open=is_open,
        is_terminal=is_terminal,
        is_red_five=RED_FIVE in raw_tiles,
    )


def parse_tile(token: str) -> TileGroup:
    """Parse a single reference tile (winning tile, seat or round wind)."""
    tile = parse_group(token)
    if tile.group_type != GroupType.single or tile.is_open:
        raise InvalidGroupError(f"Expected a single tile, got {token!r}")
    return tile
