"""
Tests for integer arithmetic modulo p.
"""

import pytest
from sympy import primerange
from sympy.ntheory import is_primitive_root as sympy_is_primitive_root

from modular_arithmetic import (
    SMALL_PRIMITIVE_ROOTS,
    OperationCount,
    inverse_mod_p,
    is_primitive_root,
    mod,
    power,
    power_mod,
)


def test_mod_is_never_negative():
    assert mod(7, 5) == 2
    assert mod(-3, 5) == 2
    assert mod(-10, 5) == 0


def test_power():
    assert power(2, 10) == 1024
    assert power(3, 0) == 1
    assert power(5, 20) == 95367431640625
    assert power(2, -1) == -1


@pytest.mark.parametrize("p", [2, 3, 7, 10, 29])
def test_power_mod_matches_builtin_pow(p):
    for a in range(0, 20):
        for n in range(0, 40):
            if a == 0 and n == 0:
                continue
            assert power_mod(a, n, p) == pow(a, n, p), (a, n, p)


def test_power_mod_large_exponent():
    p = 2 ** 61 - 1
    assert power_mod(3, p - 1, p) == 1
    assert power_mod(123456789, 987654321, 1000003) == pow(123456789, 987654321, 1000003)


def test_power_mod_sentinels():
    assert power_mod(-1, 2, 5) == -1
    assert power_mod(2, -1, 5) == -1
    assert power_mod(2, 3, 1) == -1
    assert power_mod(0, 0, 5) == -1


def test_primitive_roots_of_seven():
    assert [a for a in range(1, 7) if is_primitive_root(a, 7)] == [3, 5]


def test_small_primitive_root_table():
    for p, roots in SMALL_PRIMITIVE_ROOTS.items():
        assert tuple(a for a in range(1, p) if is_primitive_root(a, p)) == roots


def test_primitive_roots_match_sympy():
    for p in primerange(3, 200):
        for a in range(1, p):
            assert is_primitive_root(a, p) == sympy_is_primitive_root(a, p), (a, p)


def test_primitive_root_reduces_a_mod_p():
    assert is_primitive_root(3 + 7, 7)
    assert not is_primitive_root(7, 7)


def test_primitive_root_out_of_range():
    assert not is_primitive_root(0, 7)
    assert not is_primitive_root(3, 1)
    assert not is_primitive_root(3, 8)


def test_inverse_mod_p_verifies():
    for p in primerange(2, 100):
        for u in range(1, p):
            inv = inverse_mod_p(u, p)
            assert 0 < inv < p
            assert (u * inv) % p == 1


def test_inverse_mod_p_without_inverse():
    assert inverse_mod_p(4, 8) == 0
    assert inverse_mod_p(0, 7) == 0


def test_inverse_mod_p_counts_gcds():
    counts = OperationCount()
    inverse_mod_p(3, 7, counts)
    inverse_mod_p(4, 8, counts)
    assert counts.num_gcds == 2
