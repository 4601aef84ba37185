"""
Independent checks of the primitivity search against brute force and sympy.
"""

from typing import List, Tuple

from sympy import factorint, isprime, primerange, totient

from factorization import factor, is_almost_surely_prime
from primitivity import PolyOrder, maximal_order
from trial_polynomials import trial_polynomials


def verify_implementation(max_p=7, max_n=4, max_p_to_n=2500):
    """
    Verify the fast test against the slow maximal order test on every trial
    polynomial for small p and n, and the number found against the closed
    form phi(p^n - 1) / n.

    Returns a list of (p, n, found, expected, disagreements, match).
    """
    results = []

    for p in primerange(2, max_p + 1):
        for n in range(2, max_n + 1):
            if p ** n > max_p_to_n:
                continue

            order = PolyOrder(p, n)
            found = 0
            disagreements = []

            for num_poly, f in enumerate(trial_polynomials(n, p), start=1):
                if num_poly > order.max_num_poly:
                    break
                fast = order.is_primitive(f)
                slow = maximal_order(f, n, p)
                found += fast
                if fast != slow:
                    disagreements.append(f)

            expected = int(totient(p ** n - 1)) // n
            match = (found == expected) and not disagreements
            results.append((p, n, found, expected, disagreements, match))

    return results


def verify_factorizations(numbers) -> List[Tuple[int, dict, dict]]:
    """
    Compare factor() with sympy.factorint.

    Returns the list of (n, ours, sympy's) for every disagreement.
    """
    disagreements = []
    for n in numbers:
        ours = factor(n)
        theirs = {int(q): int(e) for q, e in sorted(factorint(n).items())}
        if ours != theirs or list(ours) != sorted(ours):
            disagreements.append((n, ours, theirs))
    return disagreements


def verify_primality(max_n=10000) -> List[int]:
    """Numbers up to max_n where is_almost_surely_prime and sympy.isprime disagree."""
    return [n for n in range(max_n + 1) if is_almost_surely_prime(n) != isprime(n)]


if __name__ == "__main__":
    print("Verifying primitivity test against maximal order...")
    verification = verify_implementation()
    for p, n, found, expected, disagreements, match in verification:
        print(f"p = {p:<3} n = {n:<3} found {found:<4} expected {expected:<4} {'ok' if match else 'MISMATCH'}")
        for f in disagreements:
            print(f"    disagreement on {f}")

    correct = sum(1 for *_, match in verification if match)
    print(f"Verification: {correct}/{len(verification)} correct")

    bad_primes = verify_primality()
    print(f"Primality test disagreements up to 10000: {len(bad_primes)}")
