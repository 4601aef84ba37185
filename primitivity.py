"""
Primitivity testing of polynomials modulo p and the search for primitive
polynomials.

A monic f(x) of degree n is primitive iff x has order p^n - 1 modulo
(f(x), p).  Rather than computing that order directly, the test runs a
cascade of cheaper necessary conditions which together are sufficient,
with r = (p^n - 1)/(p - 1):

  1. (-1)^n f(0) is a primitive root of p.
  2. f(x) has no linear factor.
  3. f(x) does not have two or more distinct irreducible factors.
  4. x^r = a (mod f(x), p) for some integer a.
  5. a = (-1)^n f(0) (mod p).
  6. x^(r/q) is not an integer for every prime q | r, except the primes
     which also divide p - 1 where the test is redundant.

The first failing stage rejects the candidate.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np
from mpmath import mp, mpf

from factorization import euler_phi, factor, is_almost_surely_prime
from irreducibility import has_multiple_irreducible_factors
from modular_arithmetic import OperationCount, is_primitive_root, mod, power
from polynomial_arithmetic import (
    construct_power_table,
    is_integer_poly,
    is_linear_factor_free,
    times_x,
    x_to_power,
)
from primpoly_config import integer_limits, resolve_config
from primpoly_errors import PrimpolyInputError, PrimpolyInternalError
from trial_polynomials import trial_polynomials

logger = logging.getLogger(__name__)


@dataclass
class SearchStatistics:
    """Counters of how many candidates passed each stage of the cascade."""
    p: int
    n: int
    max_num_poly: int
    r: int
    factors_of_r: Dict[int, int]
    num_prim_poly: Optional[int] = None
    num_poly: int = 0
    num_const_coeff_prim_root: int = 0
    num_free_of_linear_factors: int = 0
    num_irred_to_power: int = 0
    num_order_r: int = 0
    num_passing_const_coeff_test: int = 0
    num_order_m: int = 0
    operations: OperationCount = field(default_factory=OperationCount)

    def primitive_fraction(self, dps: int = 30) -> mpf:
        """Fraction of all monic degree n polynomials which are primitive."""
        if self.num_prim_poly is None:
            self.num_prim_poly = num_primitive_polynomials(self.p, self.n)
        with mp.workdps(dps):
            return mpf(self.num_prim_poly) / mpf(self.max_num_poly)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total": self.max_num_poly,
            "tested": self.num_poly,
            "const_coeff_primitive_root": self.num_const_coeff_prim_root,
            "free_of_linear_factors": self.num_free_of_linear_factors,
            "irreducible_to_power": self.num_irred_to_power,
            "order_r": self.num_order_r,
            "const_coeff_test": self.num_passing_const_coeff_test,
            "order_m": self.num_order_m,
        }


def validate_inputs(p: int, n: int, config: Optional[Dict[str, Any]] = None,
                    counts: Optional[OperationCount] = None) -> None:
    """
    Reject p and n the search cannot handle.  Raises PrimpolyInputError.
    """
    cfg = resolve_config(config)
    max_p_to_n, max_deg_poly, _ = integer_limits(cfg["integer_bits"])

    if p < 2:
        raise PrimpolyInputError("p must be 2 or more.")
    if n < 2 or n > max_deg_poly:
        raise PrimpolyInputError(f"n must be between 2 and {max_deg_poly}")
    if not is_almost_surely_prime(p, cfg["num_prime_test_trials"], cfg["prime_test_seed"], counts):
        raise PrimpolyInputError("p must be a prime number.")
    if power(p, n) > max_p_to_n:
        raise PrimpolyInputError(f"p to the nth power must be smaller than {max_p_to_n}")


def num_primitive_polynomials(p: int, n: int) -> int:
    """Number of primitive polynomials of degree n modulo p, phi(p^n - 1) / n."""
    return euler_phi(power(p, n) - 1) // n


def const_coeff_is_primitive_root(f: Sequence[int], n: int, p: int) -> bool:
    """True if (-1)^n f[0] is a primitive root of p."""
    constant_coeff = f[0] if n % 2 == 0 else -f[0]
    return is_primitive_root(mod(constant_coeff, p), p)


def const_coeff_test(f: Sequence[int], n: int, p: int, a: int) -> bool:
    """True if a = (-1)^n f[0] (mod p)."""
    constant_coeff = f[0] if n % 2 == 0 else -f[0]
    return mod(a - constant_coeff, p) == 0


def skip_test(q: int, p: int) -> bool:
    """
    True if the order m test for the prime q | r is redundant, which is the
    case when q also divides p - 1.
    """
    if p - 1 < q:
        return False
    return (p - 1) % q == 0


def order_r(power_table: np.ndarray, n: int, p: int, r: int,
            counts: Optional[OperationCount] = None) -> Tuple[bool, int]:
    """
    Compute x^r mod (f(x), p).

    Returns (passed, a) where passed is True if the result is an integer and
    a is its constant coefficient.
    """
    g = x_to_power(r, power_table, n, p, counts)
    return is_integer_poly(g, n - 1), g[0]


def order_m(power_table: np.ndarray, n: int, p: int, r: int, primes: Sequence[int],
            counts: Optional[OperationCount] = None) -> bool:
    """True if x^(r/q) mod (f(x), p) is not an integer for each prime q | r."""
    for q in primes:
        if skip_test(q, p):
            continue
        g = x_to_power(r // q, power_table, n, p, counts)
        logger.debug("order m test for prime %d: x^%d = %s", q, r // q, g)
        if is_integer_poly(g, n - 1):
            return False
    return True


def maximal_order(f: Sequence[int], n: int, p: int) -> bool:
    """
    Confirm primitivity by brute force: x^k != 1 (mod f(x), p) for
    1 <= k < p^n - 1 and x^(p^n - 1) = 1.

    Takes time proportional to p^n.  Independent of the fast cascade except
    for the shared multiplication by x.
    """
    power_table = construct_power_table(f, n, p)
    max_order = power(p, n) - 1

    g = [0] * n
    g[0] = 1
    for k in range(1, max_order + 1):
        times_x(g, power_table, n, p)
        if g[0] == 1 and is_integer_poly(g, n - 1):
            return k == max_order

    return False


class PolyOrder:
    """
    Primitivity test for monic polynomials of one degree n modulo one prime p.

    The factorization of r = (p^n - 1)/(p - 1) is computed once; each call of
    is_primitive builds the power table of the new candidate and runs the
    test cascade.  Statistics accumulate over all candidates tested.
    """

    def __init__(self, p: int, n: int, config: Optional[Dict[str, Any]] = None):
        self.config = resolve_config(config)
        self.operations = OperationCount()
        validate_inputs(p, n, self.config, self.operations)

        self.p = p
        self.n = n
        self.max_num_poly = power(p, n)
        self.r = (self.max_num_poly - 1) // (p - 1)
        self.factors_of_r = factor(self.r, self.operations)

        _, _, max_num_prime_factors = integer_limits(self.config["integer_bits"])
        if len(self.factors_of_r) > max_num_prime_factors:
            raise PrimpolyInternalError(
                f"r = {self.r} has {len(self.factors_of_r)} distinct prime factors, "
                f"more than the limit of {max_num_prime_factors}")

        self.statistics = SearchStatistics(p=p, n=n, max_num_poly=self.max_num_poly,
                                           r=self.r, factors_of_r=self.factors_of_r,
                                           operations=self.operations)
        self.f: Optional[List[int]] = None
        self.power_table: Optional[np.ndarray] = None

        logger.debug("p=%d n=%d r=%d factors of r: %s", p, n, self.r, self.factors_of_r)

    def num_primitive_polynomials(self) -> int:
        if self.statistics.num_prim_poly is None:
            self.statistics.num_prim_poly = num_primitive_polynomials(self.p, self.n)
        return self.statistics.num_prim_poly

    def new_polynomial(self, f: Sequence[int]) -> None:
        """Make f the current candidate and precompute its power table."""
        if len(f) != self.n + 1 or f[self.n] != 1:
            raise PrimpolyInputError(f"expected a monic polynomial of degree {self.n}, got {list(f)}")
        self.f = list(f)
        self.power_table = construct_power_table(self.f, self.n, self.p)

    def is_primitive(self, f: Optional[Sequence[int]] = None) -> bool:
        """
        Run the test cascade on f (or on the current candidate).
        """
        if f is not None:
            self.new_polynomial(f)
        if self.f is None:
            raise PrimpolyInputError("no polynomial to test")

        f, n, p, table = self.f, self.n, self.p, self.power_table
        stats = self.statistics
        stats.num_poly += 1

        if not const_coeff_is_primitive_root(f, n, p):
            return False
        stats.num_const_coeff_prim_root += 1
        logger.debug("%s: constant coefficient is a primitive root", f)

        if not is_linear_factor_free(f, n, p):
            return False
        stats.num_free_of_linear_factors += 1
        logger.debug("%s: free of linear factors", f)

        if has_multiple_irreducible_factors(table, n, p, self.operations):
            return False
        stats.num_irred_to_power += 1
        logger.debug("%s: one distinct irreducible factor", f)

        passed, a = order_r(table, n, p, self.r, self.operations)
        if not passed:
            return False
        stats.num_order_r += 1
        logger.debug("%s: x^r = %d", f, a)

        if not const_coeff_test(f, n, p, a):
            return False
        stats.num_passing_const_coeff_test += 1

        if not order_m(table, n, p, self.r, list(self.factors_of_r), self.operations):
            return False
        stats.num_order_m += 1
        logger.debug("%s: primitive", f)

        return True

    def maximal_order(self) -> bool:
        if self.f is None:
            raise PrimpolyInputError("no polynomial to test")
        return maximal_order(self.f, self.n, self.p)


def find_primitive_polynomials(p: int, n: int, list_all: bool = False,
                               config: Optional[Dict[str, Any]] = None,
                               order: Optional[PolyOrder] = None) -> Iterator[List[int]]:
    """
    Generate primitive polynomials of degree n modulo p in trial order.

    Stops after the first one unless list_all is set.  The search ends once
    more than p^n candidates were tested.  Not finding any primitive
    polynomial in single mode is an internal error, since one always exists.

    Pass an existing PolyOrder to read its statistics afterwards.
    """
    if order is None:
        order = PolyOrder(p, n, config)

    found = False
    for f in trial_polynomials(n, p):
        if order.is_primitive(f):
            found = True
            yield f

        if order.statistics.num_poly > order.max_num_poly or (not list_all and found):
            break

    if not found and not list_all:
        raise PrimpolyInternalError(
            f"tested all {order.max_num_poly} possible polynomials, "
            f"but failed to find a primitive polynomial")


def find_primitive_polynomial(p: int, n: int,
                              config: Optional[Dict[str, Any]] = None) -> Tuple[List[int], SearchStatistics]:
    """Return the first primitive polynomial of degree n modulo p and the search statistics."""
    order = PolyOrder(p, n, config)
    f = next(find_primitive_polynomials(p, n, config=config, order=order))
    return f, order.statistics
