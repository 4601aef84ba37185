"""
Tests for the trial polynomial enumeration.
"""

import itertools

from trial_polynomials import initial_trial_poly, next_trial_poly, trial_polynomials


def test_initial_trial_poly():
    assert initial_trial_poly(3) == [-1, 0, 0, 1]


def test_first_trial_is_x_to_the_n():
    f = initial_trial_poly(4)
    next_trial_poly(f, 4, 2)
    assert f == [0, 0, 0, 0, 1]


def test_counts_in_base_p():
    assert list(itertools.islice(trial_polynomials(2, 3), 5)) == [
        [0, 0, 1],
        [1, 0, 1],
        [2, 0, 1],
        [0, 1, 1],
        [1, 1, 1],
    ]


def test_enumerates_every_monic_polynomial_once():
    p, n = 3, 3
    trials = list(itertools.islice(trial_polynomials(n, p), p ** n))
    assert all(f[n] == 1 for f in trials)
    lows = [tuple(f[:n]) for f in trials]
    assert len(set(lows)) == p ** n
    # f[0] is the least significant digit.
    assert lows == [tuple(reversed(digits)) for digits in itertools.product(range(p), repeat=n)]


def test_last_digit_does_not_carry():
    trials = list(itertools.islice(trial_polynomials(2, 2), 5))
    assert trials[3] == [1, 1, 1]
    assert trials[4] == [0, 2, 1]


def test_yields_copies():
    gen = trial_polynomials(2, 2)
    first = next(gen)
    second = next(gen)
    assert first == [0, 0, 1]
    assert second == [1, 0, 1]
