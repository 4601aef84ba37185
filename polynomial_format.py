"""
Rendering polynomials as text or as a hexadecimal bit mask, and parsing the
text form back.

Text form:  x^4 + x + 1          (coefficient 1 suppressed except for the constant)
Hex mask:   0x13                 (coefficient k stored at bit offset k * b,
                                  b = bits needed for p - 1)
"""

import re
from enum import Enum
from typing import List, Sequence, Tuple

from primpoly_errors import PolynomialSyntaxError, PrimpolyInputError

_TERM = re.compile(r"^(?P<coeff>\d+)?\*?(?P<x>x(?:\^(?P<exp>\d+))?)?$")


class OutputForm(Enum):
    TEXT = "text"
    HEX = "hex"


def to_text(f: Sequence[int]) -> str:
    """x^20 + x^2 + 2x + 3 style text, highest power first, zero terms omitted."""
    terms = []
    for k in range(len(f) - 1, -1, -1):
        coeff = f[k]
        if coeff == 0:
            continue
        term = str(coeff) if (coeff != 1 or k == 0) else ""
        if k > 1:
            term += f"x^{k}"
        elif k == 1:
            term += "x"
        terms.append(term)
    return " + ".join(terms) if terms else "0"


def to_hex_mask(f: Sequence[int], p: int) -> str:
    """
    Pack the coefficients into an integer, b = bit_length(p - 1) bits each,
    and print it with a fixed number of hex digits for the degree.
    """
    bits_per_coeff = max(1, (p - 1).bit_length())
    mask = 0
    for k, coeff in enumerate(f):
        mask |= coeff << (k * bits_per_coeff)
    width = -(-(len(f) * bits_per_coeff) // 4)
    return f"0x{mask:0{width}x}"


def render_polynomial(f: Sequence[int], p: int, form: OutputForm = OutputForm.TEXT) -> str:
    """Render f modulo p in the requested output form."""
    if form is OutputForm.HEX:
        return to_hex_mask(f, p)
    return to_text(f)


def parse_polynomial(text: str, default_modulus: int = 2) -> Tuple[List[int], int]:
    """
    Parse "x^4 + x + 1, 2" into ([1, 1, 0, 0, 1], 2).

    The ", p" suffix is optional.  Blanks are ignored, terms may repeat a
    power only once, coefficients must lie in [0, p) and the polynomial must
    be monic of degree at least 1.
    """
    body, sep, modulus = text.partition(",")
    body = "".join(body.split())
    modulus = "".join(modulus.split())

    if sep:
        if not modulus.isdigit():
            raise PolynomialSyntaxError(f"bad modulus {modulus!r} in {text!r}")
        p = int(modulus)
    else:
        p = default_modulus

    if not body:
        raise PolynomialSyntaxError(f"empty polynomial in {text!r}")

    coeffs = {}
    for term in body.split("+"):
        match = _TERM.match(term)
        if not term or match is None or (match.group("coeff") is None and match.group("x") is None):
            raise PolynomialSyntaxError(f"cannot parse the term {term!r} in {text!r}")

        coeff = int(match.group("coeff")) if match.group("coeff") is not None else 1
        if match.group("x") is None:
            degree = 0
        elif match.group("exp") is None:
            degree = 1
        else:
            degree = int(match.group("exp"))

        if degree in coeffs:
            raise PolynomialSyntaxError(f"the power x^{degree} appears twice in {text!r}")
        if coeff >= p:
            raise PrimpolyInputError(f"coefficient {coeff} is out of range for modulus {p}")
        coeffs[degree] = coeff

    n = max(coeffs)
    f = [coeffs.get(k, 0) for k in range(n + 1)]
    if n < 1 or f[n] != 1:
        raise PrimpolyInputError(f"{text!r} is not a monic polynomial of degree 1 or more")

    return f, p
