"""
Integer factorization, Euler's totient and probabilistic primality testing.

Factoring is table lookup, then trial division by small divisors, then
Pollard's rho method (Brent's variant) on whatever composite cofactor is left.
"""

import logging
import random
from math import gcd
from typing import Dict, List, Optional

from modular_arithmetic import OperationCount, power_mod
from primpoly_config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

# Factorizations of r = (2^n - 1)/(2 - 1) which are slow to find by trial
# division because they have very large prime factors.
KNOWN_FACTORIZATIONS: Dict[int, Dict[int, int]] = {
    4611686018427387903: {3: 1, 715827883: 1, 2147483647: 1},   # 2^62 - 1
    2305843009213693951: {2305843009213693951: 1},               # 2^61 - 1
}

# Trial division stops at this divisor; larger cofactors go to Pollard rho.
TRIAL_DIVISION_LIMIT = 2 ** 16

# Iterations of rho between gcd computations.
RHO_BATCH = 128


def factor(n: int, counts: Optional[OperationCount] = None) -> Dict[int, int]:
    """
    Return the prime factorization of n as a dictionary {prime: exponent}
    with the primes in increasing order.

    Factors of 2 and 3 are removed first, then trial divisors 5, 7, 11, 13, ...
    skipping the other multiples of 2 and 3. The search stops as soon as the
    remaining cofactor is known to be prime: if d does not divide n and the
    quotient n // d is already smaller than d, every candidate divisor up to
    sqrt(n) has been tried, so n is prime.  Once d passes
    TRIAL_DIVISION_LIMIT the cofactor is tested for primality and, if
    composite, split with Pollard rho.

    factor(1) is the empty factorization.
    """
    if n <= 0:
        raise ValueError(f"cannot factor {n}")
    if n == 1:
        return {}
    if n in KNOWN_FACTORIZATIONS:
        return dict(KNOWN_FACTORIZATIONS[n])

    if counts is None:
        counts = OperationCount()
    factors: Dict[int, int] = {}

    # Handle 2 and 3 separately for efficiency
    for small in (2, 3):
        count = 0
        while n % small == 0:
            counts.num_trial_divides += 1
            n //= small
            count += 1
        counts.num_trial_divides += 1
        if count:
            factors[small] = count

    d = 5
    step = 2
    while n != 1:
        if d > TRIAL_DIVISION_LIMIT:
            for prime in _split(n, counts):
                factors[prime] = factors.get(prime, 0) + 1
            break

        q, r = divmod(n, d)
        counts.num_trial_divides += 1
        if r == 0:
            # Same divisor again increments its count.
            factors[d] = factors.get(d, 0) + 1
            n = q
        elif q < d:
            # The current value of n is prime.  It is the last prime factor.
            factors[n] = 1
            break
        else:
            d += step
            step = 6 - step

    return dict(sorted(factors.items()))


def _split(n: int, counts: OperationCount) -> List[int]:
    """Prime factors of n with repetition, n free of factors below the trial division limit."""
    if is_almost_surely_prime(n, counts=counts):
        return [n]

    # c = 0 and c = -2 give degenerate sequences.
    c = 1
    while True:
        divisor = pollard_rho(n, c, counts)
        if divisor is not None:
            break
        logger.debug("Pollard rho failed on %d with c = %d", n, c)
        c += 1

    return _split(divisor, counts) + _split(n // divisor, counts)


def pollard_rho(n: int, c: int = 1, counts: Optional[OperationCount] = None) -> Optional[int]:
    """
    Find a nontrivial divisor of the composite n with Brent's variant of
    Pollard's rho method, iterating x -> x^2 + c (mod n).

    The differences are multiplied together and one gcd is taken per
    RHO_BATCH steps; when a batch overshoots to gcd = n, the last batch is
    replayed one step at a time.  Returns None if the sequence cycles without
    separating a factor, in which case another c should be tried.
    """
    if counts is None:
        counts = OperationCount()
    if n % 2 == 0:
        return 2

    y, r, q, g = 2, 1, 1, 1
    x = ys = y
    while g == 1:
        x = y
        for _ in range(r):
            y = (y * y + c) % n
        counts.num_squarings += r

        k = 0
        while k < r and g == 1:
            ys = y
            for _ in range(min(RHO_BATCH, r - k)):
                y = (y * y + c) % n
                q = q * abs(x - y) % n
            counts.num_squarings += min(RHO_BATCH, r - k)
            g = gcd(q, n)
            counts.num_gcds += 1
            k += RHO_BATCH
        r *= 2

    if g == n:
        while True:
            ys = (ys * ys + c) % n
            counts.num_squarings += 1
            g = gcd(abs(x - ys), n)
            counts.num_gcds += 1
            if g > 1:
                break

    return None if g == n else g


def euler_phi(n: int) -> int:
    """
    Euler's totient  phi(n) = n * prod (1 - 1/p)  over the distinct primes p | n.

    Returns 0 for n <= 0 and 1 for n = 1.  Can take a long time for large n
    since it factors n.
    """
    if n <= 0:
        return 0
    if n == 1:
        return 1

    phi = n
    for prime in factor(n):
        phi //= prime
        phi *= prime - 1
    return phi


def is_probably_prime(n: int, x: int, counts: Optional[OperationCount] = None) -> bool:
    """
    One round of the strong pseudoprime (Miller-Rabin) test of n to base x.

    Write n - 1 = 2^k q with q odd and y = x^q mod n.  n passes if y = 1
    initially, or if y = n - 1 somewhere in the sequence y, y^2, ..., y^(2^(k-1)).
    A 1 reached by squaring anything other than n - 1 proves n composite.
    """
    if counts is not None:
        counts.num_primality_tests += 1

    if n < 0:
        return False

    # Handle base cases
    if n in (0, 1, 4):
        return False
    if n in (2, 3, 5):
        return True
    if n % 2 == 0:
        return False

    # Witness out of range.
    if x <= 1 or x >= n:
        return False

    # Write n as 2^k * q + 1
    k, q = 0, n - 1
    while q % 2 == 0:
        k += 1
        q //= 2

    y = power_mod(x, q, n)
    for j in range(k):
        if (j == 0 and y == 1) or y == n - 1:
            return True
        if j > 0 and y == 1:
            return False
        y = power_mod(y, 2, n)

    return False


def is_almost_surely_prime(n: int, trials: Optional[int] = None, seed: Optional[int] = None,
                           counts: Optional[OperationCount] = None) -> bool:
    """
    Repeat is_probably_prime with independent pseudo-random witnesses.

    A composite n survives one round with probability at most 1/4, so a
    True result is wrong with probability at most 4^-trials.  A False result
    is always correct.

    Parameters:
    n -- integer to test
    trials -- number of witnesses (default: num_prime_test_trials from config)
    seed -- witness generator seed (default: prime_test_seed from config)
    counts -- OperationCount which receives one primality test per round
    """
    if trials is None:
        trials = DEFAULT_CONFIG["num_prime_test_trials"]
    if seed is None:
        seed = DEFAULT_CONFIG["prime_test_seed"]

    if n < 2:
        return False

    rng = random.Random(seed)
    for _ in range(trials):
        x = rng.randrange(n)
        if x <= 1:
            x = 3
        # Definitely not prime.
        if not is_probably_prime(n, x, counts):
            logger.debug("%d is composite, witness %d", n, x)
            return False

    return True
