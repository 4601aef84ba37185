"""
Enumeration of monic degree n trial polynomials modulo p.

The coefficients f[0], ..., f[n-1] are read as base p digits, f[0] being the
least significant, and the represented number is incremented by one for each
new trial.  f[n] = 1 is never touched.
"""

from typing import Iterator, List


def initial_trial_poly(n: int) -> List[int]:
    """
    Return x^n - 1, so that the first call of next_trial_poly gives x^n.
    """
    f = [0] * (n + 1)
    f[0] = -1
    f[n] = 1
    return f


def next_trial_poly(f: List[int], n: int, p: int) -> None:
    """
    Advance f to the next trial polynomial in place.

    Carries propagate through digits 0 .. n-2 only.  Digit n-1 never carries
    out, so after the last of the p^n candidates it is left equal to p; the
    search stops on its candidate count before that matters.
    """
    f[0] += 1
    for digit_num in range(n - 1):
        if f[digit_num] == p:
            f[digit_num] = 0
            f[digit_num + 1] += 1


def trial_polynomials(n: int, p: int) -> Iterator[List[int]]:
    """
    Yield copies of the trial polynomials x^n, x^n + 1, ..., x^n + (p-1), x^n + x, ...
    without end; the caller bounds the count.
    """
    f = initial_trial_poly(n)
    while True:
        next_trial_poly(f, n, p)
        yield list(f)
