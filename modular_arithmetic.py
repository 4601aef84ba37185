"""
Integer arithmetic modulo p.

The functions here follow the convention of returning a sentinel value
(-1, or 0 for the inverse) when called outside their domain. Callers are
expected to validate their inputs first; the sentinels only catch mistakes.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Primitive roots of the smallest primes, answered without factoring p - 1.
SMALL_PRIMITIVE_ROOTS = {
    2: (1,),
    3: (2,),
    5: (2, 3),
    7: (3, 5),
    11: (2, 6, 7, 8),
    13: (2, 6, 7, 11),
}


@dataclass
class OperationCount:
    """
    Counts of the expensive integer operations behind one search.

    Functions take an optional OperationCount and add to it; pass None to
    skip counting.
    """
    num_trial_divides: int = 0
    num_gcds: int = 0
    num_primality_tests: int = 0
    num_squarings: int = 0


def mod(n: int, p: int) -> int:
    """Return n mod p in the range [0, p), also for negative n."""
    raw_mod = n % p
    if raw_mod < 0:
        raw_mod += p
    return raw_mod


def power(x: int, y: int) -> int:
    """
    Exact x^y for y >= 0, no modular reduction.

    Returns -1 if y < 0.
    """
    if y < 0:
        return -1
    result = 1
    for _ in range(y):
        result *= x
    return result


def power_mod(a: int, n: int, p: int) -> int:
    """
    Compute a^n mod p by repeated squaring.

    The exponent bits are scanned from the most significant set bit down:
    the leading 1 is discarded, then every bit squares, and a 1 bit also
    multiplies by a.

    Returns -1 for a < 0, n < 0, p <= 1 or 0^0.
    """
    if a < 0 or n < 0 or p <= 1 or (a == 0 and n == 0):
        return -1

    # Quick return for 0^n, a^0 and a^1.
    if a == 0:
        return 0
    if n == 0:
        return 1
    if n == 1:
        return a % p

    product = a
    for bit in range(n.bit_length() - 2, -1, -1):
        product = (product * product) % p
        if (n >> bit) & 1:
            product = (a * product) % p

    return product


@lru_cache(maxsize=256)
def _distinct_prime_factors(n: int) -> Tuple[int, ...]:
    # Local import: factorization depends on power_mod from this module.
    from factorization import factor
    return tuple(factor(n))


def is_primitive_root(a: int, p: int) -> bool:
    """
    Return True if a is a primitive root of the prime p.

    a generates GF(p)* iff a^((p-1)/q) != 1 (mod p) for every distinct prime
    q dividing p - 1; a^(p-1) = 1 always holds by Fermat's little theorem so
    it is not checked. p is assumed prime.
    """
    # Out of range inputs, including even p > 2.
    if p < 2 or a < 1 or (p > 2 and p % 2 == 0):
        return False

    if a in SMALL_PRIMITIVE_ROOTS.get(p, ()):
        return True

    a = a % p
    if a == 0:
        return False

    for q in _distinct_prime_factors(p - 1):
        if power_mod(a, (p - 1) // q, p) == 1:
            return False

    return True


def inverse_mod_p(u: int, p: int, counts: Optional[OperationCount] = None) -> int:
    """
    Multiplicative inverse of u modulo p by the extended Euclidean algorithm.

    The result is verified; 0 is returned if u * inverse != 1 (mod p), which
    only happens when u shares a factor with p.
    """
    if counts is not None:
        counts.num_gcds += 1

    u1, u3 = 1, u
    v1, v3 = 0, p

    while v3 != 0:
        q = u3 // v3
        u1, v1 = v1, u1 - v1 * q
        u3, v3 = v3, u3 - v3 * q

    inv_v = mod(u1, p)

    # Self check.
    if mod(u * inv_v, p) != 1:
        logger.debug("inverse of %d mod %d failed its self check", u, p)
        return 0

    return inv_v
