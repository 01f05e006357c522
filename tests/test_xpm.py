import pytest

from cubecaster.colors import named_color
from cubecaster.xpm import (
    TRANSPARENT,
    XpmError,
    XpmImage,
    load_xpm,
    parse_xpm_lines,
    parse_xpm_text,
    quoted_strings,
    split_words,
    strip_comments,
)

SAMPLE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"3 2 3 1 ",
"a c #FF0000",
"b c blue",
". c None",
/* pixels */
"ab.",
"..a"
};
"""


def test_split_words_on_spaces_and_tabs():
    assert split_words("  a\tbb  c ") == ["a", "bb", "c"]


def test_split_words_empty():
    assert split_words(" \t ") == []


def test_strip_block_comment_keeps_length():
    text = "x /* note */ y"
    result = strip_comments(text)
    assert len(result) == len(text)
    assert result.split() == ["x", "y"]


def test_strip_comments_ignores_quoted_markers():
    text = '"a/*b" /* c */'
    assert strip_comments(text) == '"a/*b" ' + " " * 7


def test_strip_line_comment_with_newline():
    assert strip_comments("x // c\ny") == "x " + " " * 5 + "y"


def test_strip_unterminated_block_runs_to_end():
    assert strip_comments('"keep" /* open') == '"keep"' + " " * 8


def test_quoted_strings_skips_unterminated():
    assert quoted_strings('"ab" junk "c d" "unterminated') == ["ab", "c d"]


def test_parse_sample_text():
    image = parse_xpm_text(SAMPLE)
    assert (image.width, image.height) == (3, 2)
    assert image.pixel(0, 0) == 0xFF0000
    assert image.pixel(1, 0) == named_color("blue")
    assert image.pixel(2, 0) == TRANSPARENT
    assert image.pixel(0, 1) == TRANSPARENT
    assert image.pixel(2, 1) == 0xFF0000


def test_transparent_value_fixed():
    image = parse_xpm_lines(["1 1 1 1", "x c None", "x"])
    assert image.pixel(0, 0) == 0xFF000000


def test_rows_have_declared_width():
    image = parse_xpm_text(SAMPLE)
    assert len(image.pixels) == image.height
    assert all(len(row) == image.width for row in image.pixels)


def test_two_word_colour_name():
    image = parse_xpm_lines(["1 1 1 1", "a c light blue", "a"])
    assert image.pixel(0, 0) == named_color("light blue")


def test_wide_keys_keep_first_definition():
    image = parse_xpm_lines(["1 1 2 3", "abc c #000001", "abc c #000002", "abc"])
    assert image.pixel(0, 0) == 0x000001


def test_narrow_keys_keep_last_definition():
    image = parse_xpm_lines(["1 1 2 1", "a c #000001", "a c #000002", "a"])
    assert image.pixel(0, 0) == 0x000002


def test_multi_char_pixels():
    image = parse_xpm_lines(["2 1 2 2", "aa c #000011", "bb c #002200", "bbaa"])
    assert image.pixels == ((0x002200, 0x000011),)


def test_unknown_pixel_key_is_black():
    image = parse_xpm_lines(["1 1 1 1", "a c #123456", "z"])
    assert image.pixel(0, 0) == 0


@pytest.mark.parametrize("header", ["0 1 1 1", "1 1 1", "w 1 1 1", "1 1 1 0"])
def test_bad_header(header):
    with pytest.raises(XpmError):
        parse_xpm_lines([header, "a c #000000", "a"])


def test_colour_without_c_key():
    with pytest.raises(XpmError):
        parse_xpm_lines(["1 1 1 1", "a m black", "a"])


def test_colour_without_value():
    with pytest.raises(XpmError):
        parse_xpm_lines(["1 1 1 1", "a c", "a"])


def test_missing_rows():
    with pytest.raises(XpmError):
        parse_xpm_lines(["1 2 1 1", "a c #000000", "a"])


def test_short_row():
    with pytest.raises(XpmError):
        parse_xpm_lines(["3 1 1 1", "a c #000000", "aa"])


def test_empty_input():
    with pytest.raises(XpmError):
        parse_xpm_lines([])


def test_pixel_out_of_range():
    image = parse_xpm_text(SAMPLE)
    with pytest.raises(IndexError):
        image.pixel(3, 0)
    with pytest.raises(IndexError):
        image.pixel(-1, 0)


def test_load_xpm_matches_text_parse(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(SAMPLE)
    assert load_xpm(path) == parse_xpm_text(SAMPLE)


def test_load_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "absent.xpm")


def test_image_equality_round_trip():
    image = parse_xpm_lines(["2 1 1 1", "a c #0000FF", "aa"])
    assert image == XpmImage(2, 1, ((0x0000FF, 0x0000FF),))