import pytest

from handcalc.errors import InvalidGroupError, InvalidSuitError
from handcalc.schemas import GroupType, Suit
from handcalc.tiles import parse_group, parse_tile


def test_parse_sequence():
    group = parse_group("789p")
    assert group.group_type == GroupType.sequence
    assert group.suit == Suit.pinzu
    assert group.value == "7"
    assert group.is_terminal is True
    assert group.is_open is False
    assert group.tiles == ["7", "8", "9"]


def test_parse_open_dragon_triplet():
    group = parse_group("rrrdo")
    assert group.group_type == GroupType.triplet
    assert group.suit == Suit.dragon
    assert group.value == "r"
    assert group.is_open is True
    assert group.is_honor is True
    assert group.is_terminal is False
    assert group.rank is None


def test_parse_kan_and_pair():
    kan = parse_group("5555mo")
    assert kan.group_type == GroupType.kan
    assert kan.tile_count == 4
    assert kan.is_open is True
    assert kan.is_terminal is False

    pair = parse_group("11s")
    assert pair.group_type == GroupType.pair
    assert pair.is_terminal is True


def test_parse_red_five_sequence():
    group = parse_group("406m")
    assert group.group_type == GroupType.sequence
    assert group.value == "4"
    assert group.is_red_five is True


def test_parse_wind_single():
    tile = parse_tile("Ew")
    assert tile.suit == Suit.wind
    assert tile.value == "E"
    assert tile.group_type == GroupType.single


def test_sequence_terminal_flag_uses_run_start():
    assert parse_group("123m").is_terminal is True
    assert parse_group("234m").is_terminal is False
    assert parse_group("999m").is_terminal is True
    assert parse_group("7m").is_terminal is False


def test_parse_is_pure():
    assert parse_group("234s") == parse_group("234s")


@pytest.mark.parametrize("token", ["135m", "12m", "EEEm", "11111m", "rrgd", "", "o", "m", "0w", "00d", "E0Ew"])
def test_invalid_group(token):
    with pytest.raises(InvalidGroupError):
        parse_group(token)


@pytest.mark.parametrize("token", ["123x", "EEEz", "123"])
def test_invalid_suit(token):
    with pytest.raises(InvalidSuitError):
        parse_group(token)


def test_parse_tile_requires_closed_single():
    with pytest.raises(InvalidGroupError):
        parse_tile("11m")
    with pytest.raises(InvalidGroupError):
        parse_tile("1mo")
