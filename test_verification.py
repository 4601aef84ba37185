"""
The sympy cross checks run on small ranges.
"""

from verification import verify_factorizations, verify_implementation, verify_primality


def test_fast_test_agrees_with_maximal_order():
    results = verify_implementation(max_p=5, max_n=4, max_p_to_n=125)
    assert {(p, n) for p, n, *_ in results} == {(2, 2), (2, 3), (2, 4), (3, 2), (3, 3), (3, 4), (5, 2), (5, 3)}
    for p, n, found, expected, disagreements, match in results:
        assert disagreements == [], (p, n)
        assert found == expected, (p, n)
        assert match


def test_factorizations_agree_with_sympy():
    assert verify_factorizations(range(1, 2000)) == []
    assert verify_factorizations([(p ** n - 1) // (p - 1) for p, n in [(2, 40), (3, 25), (5, 20), (7, 16)]]) == []


def test_primality_agrees_with_sympy():
    assert verify_primality(2000) == []
