"""
Configuration tests
Tests: default curve, prime checks and environment loading
"""

import time

import pytest
from pydantic import ValidationError

from ecdh.common.config import (
    DEFAULT_PRIME, CurveConfig, build_config, check_prime, load_config,
)
from ecdh.common.errors import ConfigurationError
from ecdh.common.utils import int_to_be, is_prime
from ecdh.crypto.curve import Curve


def test_defaults_are_valid():
    config = CurveConfig()
    assert config.p == DEFAULT_PRIME == 863
    assert (config.a, config.b, config.gx, config.gy) == (0, 3, 5, 282)
    assert Curve(config).is_on_curve(Curve(config).G)


def test_config_is_frozen():
    config = CurveConfig()
    with pytest.raises(ValidationError):
        config.p = 11


def test_p_11_accepted():
    config = build_config(p=11, a=1, b=6, gx=2, gy=7)
    assert config.p == 11


@pytest.mark.parametrize("p", [13, 15, 3, 5, 2, 1, 0, -11, 865, 861])
def test_bad_primes_rejected(p):
    with pytest.raises(ConfigurationError):
        build_config(p=p, a=1, b=6, gx=2, gy=7)


def test_p_13_reason():
    with pytest.raises(ConfigurationError, match="3 mod 4"):
        build_config(p=13, a=1, b=6, gx=2, gy=7)


def test_check_prime():
    assert check_prime(7) == 7
    assert check_prime(863) == 863
    with pytest.raises(ValueError):
        check_prime(9)


def test_singular_curve_rejected():
    # y^2 = x^3 over F_11 has a cusp at the origin
    with pytest.raises(ConfigurationError, match="singular"):
        build_config(p=11, a=0, b=0, gx=1, gy=1)


def test_generator_off_curve_rejected():
    with pytest.raises(ConfigurationError, match="not on the curve"):
        build_config(p=11, a=1, b=6, gx=2, gy=6)


def test_out_of_range_values_rejected():
    with pytest.raises(ConfigurationError):
        build_config(p=11, a=12, b=6, gx=2, gy=7)
    with pytest.raises(ConfigurationError):
        build_config(p=11, a=1, b=6, gx=2, gy=-4)


def test_load_defaults_from_empty_env():
    assert load_config({}) == CurveConfig()
    assert load_config({"ECDH_PRIME": "863"}) == CurveConfig()


def test_load_full_curve_from_env():
    env = {"ECDH_PRIME": "11", "ECDH_A": "1", "ECDH_B": "6", "ECDH_GX": "2", "ECDH_GY": "7"}
    assert load_config(env) == build_config(p=11, a=1, b=6, gx=2, gy=7)


def test_load_prime_only_searches_curve():
    config = load_config({"ECDH_PRIME": "1019", "ECDH_SEED": "3"})
    assert config.p == 1019
    assert load_config({"ECDH_PRIME": "1019", "ECDH_SEED": "3"}) == config


@pytest.mark.parametrize("env", [
    {"ECDH_PRIME": "13"},
    {"ECDH_PRIME": "15"},
    {"ECDH_PRIME": "abc"},
    {"ECDH_PRIME": "11", "ECDH_A": "1"},
    {"ECDH_A": "1", "ECDH_B": "6", "ECDH_GX": "2", "ECDH_GY": "7"},
])
def test_load_rejects_bad_env(env):
    with pytest.raises(ConfigurationError):
        load_config(env)


def test_utils():
    assert [n for n in range(30) if is_prime(n)] == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
    assert int_to_be(0) == b"\x00"
    assert int_to_be(532) == b"\x02\x14"
    assert int_to_be(2**64 - 1) == b"\xff" * 8


def test_is_prime_rejects_pseudoprimes():
    # Carmichael number, then a strong pseudoprime to every base up to 23
    assert not is_prime(561)
    assert not is_prime(3825123056546413051)
    assert not is_prime((2**32 - 5) * (2**32 - 17))
    assert is_prime(2**61 - 1)
    assert is_prime(2**64 - 59)


def test_word_sized_prime_checks_quickly():
    start = time.perf_counter()
    assert check_prime(2**61 - 1) == 2**61 - 1
    with pytest.raises(ValueError, match="not prime"):
        check_prime(3825123056546413051)
    assert time.perf_counter() - start < 1.0


def test_malformed_integer_keeps_cause():
    with pytest.raises(ConfigurationError, match="ECDH_PRIME must be an integer") as info:
        load_config({"ECDH_PRIME": "0x1g"})
    assert isinstance(info.value.__cause__, ValueError)
