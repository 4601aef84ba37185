"""
Berlekamp's Q matrix test for two or more distinct irreducible factors.

Row k of Q holds x^(kp) mod (f(x), p).  The nullity of Q - I over GF(p)
equals the number of distinct irreducible factors of f(x).  Nullity >= 2
proves f(x) reducible.  Nullity 1 only says that f(x) is a power of a single
irreducible polynomial; the order tests downstream settle that case.
"""

import logging
from typing import Optional

import numpy as np

from modular_arithmetic import OperationCount, inverse_mod_p, mod
from polynomial_arithmetic import product, x_to_power
from primpoly_errors import PrimpolyInternalError

logger = logging.getLogger(__name__)


def generate_q_matrix(power_table: np.ndarray, n: int, p: int,
                      counts: Optional[OperationCount] = None) -> np.ndarray:
    """
    Return the n x n matrix Q - I over GF(p).

    Row 0 is the constant 1, row 1 is x^p, and each following row is the
    previous one multiplied by x^p modulo (f(x), p).
    """
    if n < 2 or p < 2:
        raise ValueError(f"Q matrix needs n >= 2 and p >= 2, got n={n}, p={p}")

    Q = np.zeros((n, n), dtype=object)
    Q[0, 0] = 1

    xp = x_to_power(p, power_table, n, p, counts)
    q = list(xp)
    Q[1, :] = q

    for row in range(2, n):
        product(q, xp, power_table, n, p)
        Q[row, :] = q

    for row in range(n):
        Q[row, row] = mod(Q[row, row] - 1, p)

    return Q


def find_nullity(Q: np.ndarray, n: int, p: int, counts: Optional[OperationCount] = None) -> int:
    """
    Nullity of the n x n matrix Q over GF(p) by column reduction.

    Each row looks for a pivot: a nonzero entry in a column which holds no
    earlier pivot.  A row without a pivot adds one to the nullity.  Otherwise
    the pivot column is scaled by -1/pivot, and multiples of it are added to
    the other columns to clear the rest of the row.

    Q is modified in place.  Counting stops at 2, the only threshold callers
    care about.
    """
    has_pivot = [False] * n
    nullity = 0

    for row in range(n):
        pivot_col = next((col for col in range(n) if Q[row, col] != 0 and not has_pivot[col]), None)

        if pivot_col is None:
            nullity += 1
            if nullity >= 2:
                return nullity
            continue

        inverse = inverse_mod_p(Q[row, pivot_col], p, counts)
        if inverse == 0:
            raise PrimpolyInternalError(
                f"no inverse of {Q[row, pivot_col]} modulo {p} while computing the nullity of Q - I")

        # Normalize the pivotal column to -1 at the pivot.
        t = mod(-inverse, p)
        Q[:, pivot_col] = (t * Q[:, pivot_col]) % p

        # Column reduction clears the rest of this row.
        for col in range(n):
            if col != pivot_col and Q[row, col] != 0:
                Q[:, col] = (Q[:, col] + Q[row, col] * Q[:, pivot_col]) % p

        has_pivot[pivot_col] = True

    return nullity


def has_multiple_irreducible_factors(power_table: np.ndarray, n: int, p: int,
                                     counts: Optional[OperationCount] = None) -> bool:
    """
    True if f(x) has two or more distinct irreducible factors, i.e.
    nullity(Q - I) >= 2.
    """
    Q = generate_q_matrix(power_table, n, p, counts)
    nullity = find_nullity(Q, n, p, counts)
    logger.debug("nullity of Q - I is %s", "2 or more" if nullity >= 2 else nullity)
    return nullity >= 2
