"""
Field arithmetic tests
Tests: reduction, inverse, exponentiation and the p = 3 (mod 4) square root
"""

import pytest

from ecdh.common.errors import ConfigurationError, DomainError
from ecdh.crypto.field import PrimeField

PRIMES = [7, 11, 19, 23, 863]


@pytest.fixture
def F11():
    return PrimeField(11)


def test_results_are_normalized(F11):
    assert F11.normalize(-1) == 10
    assert F11.normalize(25) == 3
    assert F11.add(10, 5) == 4
    assert F11.sub(3, 7) == 7
    assert F11.mul(-3, 4) == 10
    assert F11.neg(0) == 0
    assert F11.neg(4) == 7


def test_pow(F11):
    assert F11.pow(5, 0) == 1
    assert F11.pow(2, 10) == 1
    assert F11.pow(3, 5) == 1
    assert F11.pow(-2, 3) == 3
    with pytest.raises(ValueError):
        F11.pow(2, -1)


@pytest.mark.parametrize("p", PRIMES)
def test_mul_by_inverse_is_one(p):
    F = PrimeField(p)
    for a in range(1, p):
        assert F.mul(a, F.inverse(a)) == 1


def test_known_inverses():
    F = PrimeField(863)
    assert F.inverse(2) == 432
    assert F.inverse(3) == 288
    assert F.div(1, 2) == 432


def test_inverse_of_zero_is_a_domain_error(F11):
    with pytest.raises(DomainError):
        F11.inverse(0)
    with pytest.raises(DomainError):
        F11.inverse(22)


@pytest.mark.parametrize("p", PRIMES)
def test_sqrt_squares_back(p):
    F = PrimeField(p)
    residues = {F.mul(x, x) for x in range(p)}
    for a in range(p):
        r = F.sqrt(a)
        if a in residues:
            assert r is not None
            assert F.mul(r, r) == a
        else:
            assert r is None


def test_sqrt_values(F11):
    assert F11.sqrt(0) == 0
    assert F11.sqrt(4) == 9
    assert F11.sqrt(2) is None
    assert F11.is_square(5)
    assert not F11.is_square(6)
    assert PrimeField(863).sqrt(2) == 612


def test_sqrt_needs_3_mod_4_prime():
    with pytest.raises(ConfigurationError):
        PrimeField(13).sqrt(4)


def test_modulus_must_be_at_least_two():
    with pytest.raises(ConfigurationError):
        PrimeField(1)
