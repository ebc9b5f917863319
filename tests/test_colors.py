import pytest

from cubcaster.colors import lookup_color, text_to_rgb


@pytest.mark.parametrize(
    "name, expected",
    [
        ("red", 0xFF0000),
        ("snow", 0xFFFAFA),
        ("navy", 0x80),
        ("gray100", 0xFFFFFF),
        ("black", 0x0),
    ],
)
def test_lookup_known_names(name, expected):
    assert lookup_color(name) == expected


def test_lookup_is_case_insensitive():
    assert lookup_color("RED") == lookup_color("red")
    assert lookup_color("GhostWhite") == lookup_color("ghostwhite")


def test_lookup_none_is_transparent():
    assert lookup_color("none") == -1


def test_lookup_unknown_raises():
    with pytest.raises(KeyError):
        lookup_color("not a colour")


def test_first_duplicate_wins():
    # "dark slate" appears several times; the first entry is used.
    assert lookup_color("dark slate") == 0x2F4F4F


@pytest.mark.parametrize("number", [0, 17, 50, 99, 100])
def test_gray_and_grey_agree(number):
    assert lookup_color(f"gray{number}") == lookup_color(f"grey{number}")


def test_spaced_and_joined_names_agree():
    assert lookup_color("ghost white") == lookup_color("ghostwhite")
    assert lookup_color("light gray") == lookup_color("lightgray")


def test_hex_specification():
    assert text_to_rgb("#ff0000") == 0xFF0000
    assert text_to_rgb("#FFFAFA", None) == lookup_color("snow")


def test_hex_ignores_end_word():
    assert text_to_rgb("#ff0000", "ignored") == 0xFF0000


def test_hex_stops_at_non_hex_characters():
    assert text_to_rgb("#ffzz") == text_to_rgb("#ff")


def test_hex_without_digits_is_zero():
    assert text_to_rgb("#") == 0
    assert text_to_rgb("#zz") == 0


def test_two_word_name_is_joined():
    assert text_to_rgb("ghost", "white") == lookup_color("ghost white")
    assert text_to_rgb("Navy", "Blue") == lookup_color("navy blue")


def test_named_lookup_through_text():
    assert text_to_rgb("red") == 0xFF0000
    assert text_to_rgb("None") == -1


def test_unknown_name_resolves_to_zero():
    assert text_to_rgb("nosuchcolour") == 0
    assert text_to_rgb("nosuch", "colour") == 0


def test_joined_name_is_truncated():
    long_tail = "x" * 100
    assert text_to_rgb("red", long_tail) == 0
    assert text_to_rgb("a" * 70, "b") == 0