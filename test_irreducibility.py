"""
Tests for the Berlekamp Q - I nullity.
"""

import itertools

import numpy as np
import pytest
from sympy import Poly, symbols

import irreducibility
from irreducibility import find_nullity, generate_q_matrix, has_multiple_irreducible_factors
from modular_arithmetic import OperationCount
from polynomial_arithmetic import construct_power_table
from primpoly_errors import PrimpolyInternalError

x = symbols("x")


def nullity_of(f, p):
    n = len(f) - 1
    table = construct_power_table(f, n, p)
    return find_nullity(generate_q_matrix(table, n, p), n, p)


def multiple_factors(f, p):
    n = len(f) - 1
    return has_multiple_irreducible_factors(construct_power_table(f, n, p), n, p)


def sympy_distinct_factors(f, p):
    _, factors = Poly(list(reversed(f)), x, modulus=p).factor_list()
    return len(factors)


def test_q_matrix_of_x4_x_1():
    table = construct_power_table([1, 1, 0, 0, 1], 4, 2)
    Q = generate_q_matrix(table, 4, 2)
    # Rows x^0, x^2, x^4 = x + 1, x^6 = x^3 + x^2, minus the identity.
    assert Q.tolist() == [
        [0, 0, 0, 0],
        [0, 1, 1, 0],
        [1, 1, 1, 0],
        [0, 0, 1, 0],
    ]


def test_q_matrix_needs_degree_two():
    with pytest.raises(ValueError):
        generate_q_matrix(np.zeros((0, 1), dtype=object), 1, 2)


def test_irreducible_has_nullity_one():
    assert nullity_of([1, 1, 0, 0, 1], 2) == 1             # x^4 + x + 1
    assert nullity_of([2, 1, 1], 3) == 1                   # x^2 + x + 2
    assert nullity_of([3, 2, 1] + [0] * 17 + [1], 5) == 1  # x^20 + x^2 + 2x + 3


def test_power_of_irreducible_has_nullity_one():
    # (x^2 + x + 1)^2 = x^4 + x^2 + 1 modulo 2
    assert nullity_of([1, 0, 1, 0, 1], 2) == 1
    assert not multiple_factors([1, 0, 1, 0, 1], 2)


def test_reducible_without_roots():
    # (x^2 + x + 1)(x^3 + x + 1) = x^5 + x^4 + 1 modulo 2 has no linear factor.
    assert nullity_of([1, 0, 0, 0, 1, 1], 2) == 2
    assert multiple_factors([1, 0, 0, 0, 1, 1], 2)


@pytest.mark.parametrize("p,n", [(2, 2), (2, 5), (3, 3), (3, 4), (5, 3)])
def test_matches_sympy_factor_count(p, n):
    for low in itertools.product(range(p), repeat=n):
        f = list(low) + [1]
        assert multiple_factors(f, p) == (sympy_distinct_factors(f, p) >= 2), f


def test_find_nullity_stops_at_two():
    # x^4 has one distinct factor, x^4 - x = x (x - 1)(x^2 + x + 1) has three.
    assert nullity_of([0, 0, 0, 0, 1], 5) == 1
    assert nullity_of([0, 4, 0, 0, 1], 5) == 2


def test_nullity_counts_one_gcd_per_pivot():
    table = construct_power_table([1, 1, 0, 0, 1], 4, 2)
    counts = OperationCount()
    assert not has_multiple_irreducible_factors(table, 4, 2, counts)
    # Rows 1 to 3 of Q - I each hold a pivot.
    assert counts.num_gcds == 3
    assert counts.num_squarings == 1


def test_failed_inverse_is_an_internal_error(monkeypatch):
    monkeypatch.setattr(irreducibility, "inverse_mod_p", lambda u, p, counts=None: 0)
    with pytest.raises(PrimpolyInternalError):
        nullity_of([1, 1, 0, 0, 1], 2)
