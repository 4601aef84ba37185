"""
Polynomial arithmetic modulo f(x) and p.

Polynomials are lists of coefficients, index 0 holding the constant term.
A trial polynomial f(x) of degree n has n + 1 coefficients with f[n] = 1.
Residues modulo f(x) have degree <= n - 1 and are stored as n coefficients.

Multiplication modulo f(x) uses a power table holding the reductions of
x^n, ..., x^(2n-2) modulo (f(x), p): a product of two residues has degree at
most 2n - 2, and each high-degree coefficient is folded back into the low
coefficients with one row of the table.  The table and the folding use numpy
object arrays so the coefficients stay exact Python ints for any p.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from modular_arithmetic import OperationCount, mod

logger = logging.getLogger(__name__)


def eval_poly(f: Sequence[int], x: int, n: int, p: int) -> int:
    """Evaluate the monic polynomial f at x modulo p by Horner's rule."""
    val = 1  # leading coefficient f[n]
    for k in range(n - 1, -1, -1):
        val = mod(val * x + f[k], p)
    return val


def is_linear_factor_free(f: Sequence[int], n: int, p: int) -> bool:
    """
    True if f(a) != 0 (mod p) for a = 1, ..., p - 1.

    a = 0 is not tried: a root at 0 means a zero constant term, which fails
    the primitive root test before this one is reached.
    """
    for a in range(1, p):
        if eval_poly(f, a, n, p) == 0:
            return False
    return True


def is_integer_poly(t: Sequence[int], n: int) -> bool:
    """True if t[1], ..., t[n] are all zero, i.e. t(x) is a constant."""
    return all(t[k] == 0 for k in range(1, n + 1))


def construct_power_table(f: Sequence[int], n: int, p: int) -> np.ndarray:
    """
    Build the (n-1) x n table whose row i is x^(n+i) mod (f(x), p).

    Starting from t(x) = x^(n-1), each step multiplies by x and replaces the
    resulting x^n term using x^n = -(f[n-1] x^(n-1) + ... + f[0]).
    """
    table = np.zeros((n - 1, n), dtype=object)
    low = np.array([mod(-f[j], p) for j in range(n)], dtype=object)

    t = [0] * n
    t[n - 1] = 1
    for i in range(n - 1):
        coeff = t[n - 1]
        t = [0] + t[:n - 1]
        if coeff != 0:
            t = ((np.array(t, dtype=object) + coeff * low) % p).tolist()
        table[i, :] = t

    return table


def _convolve(s: Sequence[int], t: Sequence[int], k: int, lower: int, upper: int, p: int) -> int:
    total = 0
    for i in range(lower, upper + 1):
        total += s[i] * t[k - i]
    return total % p


def coeff_of_square(t: Sequence[int], k: int, n: int, p: int) -> int:
    """
    Coefficient of x^k in t(x)^2 for a residue t of degree <= n - 1.

    Only the cross products with i < k - i are summed, doubled, plus the
    middle square term for even k.
    """
    if 0 <= k <= n - 1:
        lower, upper = 0, (k - 1) // 2
    elif n <= k <= 2 * n - 2:
        lower, upper = k - n + 1, (k - 1) // 2
    else:
        return 0

    total = 2 * _convolve(t, t, k, lower, upper, p)
    if k % 2 == 0:
        total += t[k // 2] * t[k // 2]
    return total % p


def coeff_of_product(s: Sequence[int], t: Sequence[int], k: int, n: int, p: int) -> int:
    """Coefficient of x^k in s(x) t(x) for residues s, t of degree <= n - 1."""
    if 0 <= k <= n - 1:
        return _convolve(s, t, k, 0, k, p)
    if n <= k <= 2 * n - 2:
        return _convolve(s, t, k, k - n + 1, n - 1, p)
    return 0


def _fold(coeffs: List[int], power_table: np.ndarray, n: int, p: int) -> List[int]:
    """Reduce coefficients of x^0 .. x^(2n-2) modulo (f(x), p)."""
    low = np.array(coeffs[:n], dtype=object)
    high = np.array(coeffs[n:], dtype=object)
    return ((low + high.dot(power_table)) % p).tolist()


def square(t: List[int], power_table: np.ndarray, n: int, p: int,
           counts: Optional[OperationCount] = None) -> None:
    """Replace t(x) with t(x)^2 mod (f(x), p)."""
    if counts is not None:
        counts.num_squarings += 1
    coeffs = [coeff_of_square(t, k, n, p) for k in range(2 * n - 1)]
    t[:] = _fold(coeffs, power_table, n, p)


def product(s: List[int], t: Sequence[int], power_table: np.ndarray, n: int, p: int) -> None:
    """Replace s(x) with s(x) t(x) mod (f(x), p)."""
    coeffs = [coeff_of_product(s, t, k, n, p) for k in range(2 * n - 1)]
    s[:] = _fold(coeffs, power_table, n, p)


def times_x(t: List[int], power_table: np.ndarray, n: int, p: int) -> None:
    """Replace t(x) with x t(x) mod (f(x), p)."""
    coeff = t[n - 1]
    shifted = [0] + list(t[:n - 1])
    if coeff != 0:
        shifted = ((np.array(shifted, dtype=object) + coeff * power_table[0]) % p).tolist()
    t[:] = shifted


def x_to_power(m: int, power_table: np.ndarray, n: int, p: int,
               counts: Optional[OperationCount] = None) -> List[int]:
    """
    Compute g(x) = x^m mod (f(x), p) by repeated squaring.

    Starting from g(x) = x, the leading 1 bit of m is discarded; afterwards
    g is squared for every bit and multiplied by x for every 1 bit.
    x^1 is returned as is, x^0 as the constant 1.
    """
    if m < 0:
        raise ValueError(f"negative exponent {m}")

    g = [0] * n
    if m == 0:
        g[0] = 1
        return g

    g[1] = 1
    if m == 1:
        return g

    for bit in range(m.bit_length() - 2, -1, -1):
        square(g, power_table, n, p, counts)
        if (m >> bit) & 1:
            times_x(g, power_table, n, p)

    return g
