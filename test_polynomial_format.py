"""
Tests for polynomial text, hex mask and parsing.
"""

import pytest

from polynomial_format import OutputForm, parse_polynomial, render_polynomial, to_hex_mask, to_text
from primpoly_errors import PolynomialSyntaxError, PrimpolyInputError


def test_to_text():
    assert to_text([1, 1, 0, 0, 1]) == "x^4 + x + 1"
    assert to_text([3, 2, 1] + [0] * 17 + [1]) == "x^20 + x^2 + 2x + 3"
    assert to_text([0, 1]) == "x"
    assert to_text([1]) == "1"
    assert to_text([0, 0, 0]) == "0"
    assert to_text([0, 0, 4, 1]) == "x^3 + 4x^2"


def test_to_hex_mask():
    assert to_hex_mask([1, 1, 0, 0, 1], 2) == "0x13"
    assert to_hex_mask([1, 0, 0, 1, 1], 2) == "0x19"
    # Three bits per coefficient modulo 5: 2 + (1 << 3) + (1 << 6)
    assert to_hex_mask([2, 1, 1], 5) == "0x04a"


def test_render_polynomial():
    f = [1, 1, 0, 0, 1]
    assert render_polynomial(f, 2) == "x^4 + x + 1"
    assert render_polynomial(f, 2, OutputForm.TEXT) == "x^4 + x + 1"
    assert render_polynomial(f, 2, OutputForm.HEX) == "0x13"


def test_parse_polynomial():
    assert parse_polynomial("x^4 + x + 1, 2") == ([1, 1, 0, 0, 1], 2)
    assert parse_polynomial("x^20 + x^2 + 2x + 3, 5") == ([3, 2, 1] + [0] * 17 + [1], 5)
    assert parse_polynomial("x ^ 3 + 2 * x + 1 , 3") == ([1, 2, 0, 1], 3)
    assert parse_polynomial("1 + x + x^4") == ([1, 1, 0, 0, 1], 2)


def test_parse_defaults_to_modulus_2():
    f, p = parse_polynomial("x^4+x^3+1")
    assert p == 2
    assert f == [1, 0, 0, 1, 1]


def test_parse_then_render_is_identity():
    for text in ("x^4 + x + 1", "x^20 + x^2 + 2x + 3", "x^3 + 4x^2"):
        f, _ = parse_polynomial(text + ", 7")
        assert to_text(f) == text


@pytest.mark.parametrize("text", [
    "x^4 + x^4 + 1, 2",
    "x^4 + y, 2",
    "x^4 + , 2",
    "x^4 + x + 1, two",
    "",
    "x^ + 1",
])
def test_parse_syntax_errors(text):
    with pytest.raises(PolynomialSyntaxError):
        parse_polynomial(text)


@pytest.mark.parametrize("text", [
    "x^2 + 5, 3",
    "2x^2 + 1, 3",
    "1, 2",
])
def test_parse_out_of_range(text):
    with pytest.raises(PrimpolyInputError):
        parse_polynomial(text)
