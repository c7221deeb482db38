import pytest

from dynamic_materials.color import BLACK, Color, darken, lerp, lighten, parse_hex, with_alpha


def test_parse_hex_with_hash():
    assert parse_hex("#FF5500") == Color(255, 85, 0, 255)


def test_parse_hex_without_hash_matches_with_hash():
    assert parse_hex("3498db") == parse_hex("#3498db")


@pytest.mark.parametrize("text", ["", "#abc", "#1234567", "abcd"])
def test_parse_hex_wrong_length_is_black(text):
    assert parse_hex(text) == BLACK


def test_parse_hex_bad_component_becomes_zero():
    parsed = parse_hex("#zz8080")
    assert parsed.r == 0
    assert parsed.g == parse_hex("#808080").g
    assert parsed.a == 255


def test_lighten_saturates():
    white = Color(255, 255, 255, 255)
    assert lighten(white, 40) == white


def test_darken_saturates():
    black = Color(0, 0, 0, 10)
    assert darken(black, 40) == black


def test_lighten_undoes_darken_without_clipping():
    c = Color(100, 150, 200, 90)
    assert lighten(darken(c, 30), 30) == c


def test_lighten_keeps_alpha():
    c = Color(10, 20, 30, 77)
    assert lighten(c, 5).a == 77
    assert darken(c, 5).a == 77


def test_with_alpha():
    c = Color(1, 2, 3, 4)
    assert with_alpha(c, 200) == Color(1, 2, 3, 200)


def test_lerp_endpoints():
    a = Color(0, 50, 100, 255)
    b = Color(200, 150, 0, 0)
    assert lerp(a, b, 0.0) == a
    assert lerp(a, b, 1.0) == b


def test_lerp_clamps_t():
    a = Color(0, 50, 100, 255)
    b = Color(200, 150, 0, 0)
    assert lerp(a, b, 5.0) == b
    assert lerp(a, b, -3.0) == a


def test_lerp_same_color_is_constant():
    c = Color(12, 34, 56, 78)
    assert lerp(c, c, 0.37) == c