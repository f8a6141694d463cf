"""Typed exceptions for hand scoring failures.

Every failure kind has its own subclass and message so callers can report
them distinctly. All of them are ``ValueError`` subclasses: a bad hand is bad
input, never a transient condition.
"""

from __future__ import annotations


class HandError(ValueError):
    """Base exception for hands that cannot be built or scored."""

    message = "Invalid hand"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidGroupError(HandError):
    message = "Invalid Group found"


class InvalidSuitError(HandError):
    message = "Invalid Suit found"


class InvalidShapeError(HandError):
    message = "Invalid Hand Shape found"


class NoYakuError(HandError):
    message = "No Yaku"


class NoHandTilesError(HandError):
    message = "No Hand Tiles given"


class NoWinTileError(HandError):
    message = "No Win Tile given"


class ConditionError(HandError):
    """Situational flags contradict each other or the hand."""

    message = "Invalid win conditions"


class DuplicateRiichiError(ConditionError):
    message = "Cant Riichi and Double Riichi Simultaneously"


class IppatsuWithoutRiichiError(ConditionError):
    message = "Cant Ippatsu without Riichi"


class OpenRiichiError(ConditionError):
    message = "Cant Riichi with an open hand"


class DoubleRiichiHaiteiIppatsuError(ConditionError):
    message = "Cant Double Riichi, Ippatsu and Haitei"


class DoubleRiichiHaiteiChankanError(ConditionError):
    message = "Cant Double Riichi, Haitei and Chankan"


class ChankanTsumoError(ConditionError):
    message = "Cant Tsumo and Chankan"


class RinshanWithoutKanError(ConditionError):
    message = "Cant Rinshan without Kan"


class RinshanWithoutTsumoError(ConditionError):
    message = "Cant Rinshan without Tsumo"


class RinshanIppatsuError(ConditionError):
    message = "Cant Rinshan and Ippatsu"


class HaiteiRonError(ConditionError):
    message = "Cant Haitei on Ron"


class HouteiTsumoError(ConditionError):
    message = "Cant Houtei on Tsumo"


class FirstTurnRonError(ConditionError):
    message = "Cant Tenhou or Chiihou without Tsumo"


class CalculatorError(ValueError):
    """Manual han/fu input that cannot be scored."""

    message = "Invalid calculator input"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class NoHanError(CalculatorError):
    message = "No han provided!"


class NoFuError(CalculatorError):
    message = "No fu provided!"
