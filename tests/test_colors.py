import pytest

from cubecaster.colors import named_color, text_to_rgb


def test_named_colour_from_table():
    assert named_color("red") == 0xFF0000
    assert named_color("snow") == 0xFFFAFA


def test_named_colour_ignores_case():
    assert named_color("RoyalBlue") == named_color("royalblue")


def test_none_is_transparent():
    assert named_color("none") == -1
    assert text_to_rgb("None", None) == -1


def test_unknown_name_raises():
    with pytest.raises(KeyError):
        named_color("not-a-colour")


def test_unknown_name_gives_zero():
    assert text_to_rgb("not-a-colour", None) == 0


def test_hex_specification():
    assert text_to_rgb("#ff8000", None) == 0xFF8000
    assert text_to_rgb("#FF8000", "ignored") == 0xFF8000


def test_hex_stops_at_invalid_character():
    assert text_to_rgb("#12zz", None) == 0x12


def test_empty_hex_is_zero():
    assert text_to_rgb("#", None) == 0


def test_two_word_name():
    assert text_to_rgb("light", "gray") == named_color("lightgray")
    assert text_to_rgb("dark", "slate") == 0x2F4F4F


def test_first_duplicate_wins():
    assert named_color("light slate") == 0x778899
    assert named_color("light goldenrod") == 0xFAFAD2


@pytest.mark.parametrize("level", [0, 1, 25, 50, 99, 100])
def test_gray_and_grey_agree(level):
    assert named_color(f"gray{level}") == named_color(f"grey{level}")


def test_gray_extremes():
    assert named_color("gray0") == named_color("black")
    assert named_color("gray100") == named_color("white")


def test_bare_name_matches_lookup():
    assert text_to_rgb("Magenta", None) == named_color("magenta")