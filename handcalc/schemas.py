from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, conint


class Suit(str, Enum):
    manzu = "m"
    pinzu = "p"
    souzu = "s"
    wind = "w"
    dragon = "d"


NUMBER_SUITS = (Suit.manzu, Suit.pinzu, Suit.souzu)


class GroupType(str, Enum):
    sequence = "sequence"
    triplet = "triplet"
    kan = "kan"
    pair = "pair"
    single = "single"


class WinType(str, Enum):
    ron = "ron"
    tsumo = "tsumo"


TileToken = str


class ErrorBody(BaseModel):
    code: str
    message: str
    details: dict | None = None


class ErrorResponse(BaseModel):
    error: ErrorBody


class HandInput(BaseModel):
    groups: list[TileToken]
    win_tile: TileToken
    seat_wind: TileToken = "Ew"
    round_wind: TileToken = "Ew"


class ContextInput(BaseModel):
    win_type: WinType = WinType.ron
    riichi: bool = False
    double_riichi: bool = False
    ippatsu: bool = False
    haitei: bool = False
    houtei: bool = False
    rinshan: bool = False
    chankan: bool = False
    tenhou: bool = False
    dora: conint(ge=0) = 0
    honba: conint(ge=0) = 0

    @property
    def is_tsumo(self) -> bool:
        return self.win_type == WinType.tsumo


class RuleSet(BaseModel):
    aka_ari: bool = False
    kuitan_ari: bool = True
    double_yakuman_ari: bool = True
    kazoe_yakuman_ari: bool = True
    renpu_fu: Literal[2, 4] = 4
    yakuman_honba: bool = False


class ScoreRequest(BaseModel):
    hand: HandInput
    context: ContextInput = Field(default_factory=ContextInput)
    rules: RuleSet = Field(default_factory=RuleSet)


class YakuItem(BaseModel):
    name: str
    han: int
    yakuman: bool = False


class FuBreakdownItem(BaseModel):
    name: str
    fu: int


class DoraBreakdown(BaseModel):
    dora: int = 0
    aka_dora: int = 0


class Payments(BaseModel):
    """Five-way breakdown of what the losers pay the winner."""

    model_config = ConfigDict(frozen=True)

    base_points: int
    honba: int = 0
    dealer_ron: int
    dealer_tsumo: int
    non_dealer_ron: int
    non_dealer_tsumo_to_non_dealer: int
    non_dealer_tsumo_to_dealer: int


class ScoreResult(BaseModel):
    han: int
    fu: int
    yaku: list[YakuItem] = Field(default_factory=list)
    fu_breakdown: list[FuBreakdownItem] = Field(default_factory=list)
    dora: DoraBreakdown = Field(default_factory=DoraBreakdown)
    point_label: str
    payments: Payments
    honba: int = 0
    is_open: bool = False
    yakuman: bool = False
