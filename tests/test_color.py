import pytest

from mandalagen.color import BLACK, WHITE, Color, hex_to_rgba
from mandalagen.errors import InvalidArgumentError


def test_hex_forms():
    assert hex_to_rgba("#fff") == (255, 255, 255, 255)
    assert hex_to_rgba("ff0000") == (255, 0, 0, 255)
    assert hex_to_rgba("#00ff0080") == (0, 255, 0, 128)


@pytest.mark.parametrize("bad", ["#12", "#zzzzzz", "", "#1234567"])
def test_invalid_hex(bad):
    with pytest.raises(InvalidArgumentError):
        Color.from_hex(bad)


def test_from_hex_and_back():
    c = Color.from_hex("#ff8000")
    assert c.red == 1.0 and c.blue == 0.0 and c.alpha == 1.0
    assert c.to_rgba8() == (255, 128, 0, 255)
    assert c.to_hex() == "#ff8000"


def test_channel_range_is_enforced():
    with pytest.raises(InvalidArgumentError):
        Color(1.2, 0.0, 0.0)
    with pytest.raises(InvalidArgumentError):
        Color(0.0, 0.0, 0.0, -0.1)


def test_value_semantics():
    assert Color(0.2, 0.4, 0.6) == Color(0.2, 0.4, 0.6)
    assert Color(0.2, 0.4, 0.6) != Color(0.2, 0.4, 0.6, 0.5)
    assert len({WHITE, Color(1.0, 1.0, 1.0), BLACK}) == 2


def test_with_alpha_keeps_rgb():
    c = Color(0.1, 0.2, 0.3).with_alpha(0.7)
    assert (c.red, c.green, c.blue, c.alpha) == (0.1, 0.2, 0.3, 0.7)


def test_dict_round_trip():
    c = Color(0.25, 0.5, 0.75, 0.5)
    assert Color.from_dict(c.to_dict()) == c
