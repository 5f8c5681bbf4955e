"""
Curve configuration: prime p, coefficients a, b and generator G.
Loaded from environment variables (see .env.example); validated once at startup.
"""
import os
import random
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ecdh.common.errors import ConfigurationError
from ecdh.common.utils import is_prime
from ecdh.crypto.field import PrimeField

# 863 = 2^5 * 3^3 - 1. y^2 = x^3 + 3 is supersingular over F_863, so it has
# p + 1 = 864 points, and G = (5, 282) generates all of them.
DEFAULT_PRIME = 863
DEFAULT_A = 0
DEFAULT_B = 3
DEFAULT_GX = 5
DEFAULT_GY = 282

PRIME_ENV = "ECDH_PRIME"
SEED_ENV = "ECDH_SEED"
CURVE_ENV = {
    "a": "ECDH_A",
    "b": "ECDH_B",
    "gx": "ECDH_GX",
    "gy": "ECDH_GY",
}


# -------------------- Parameter checks -------------------- #

def check_prime(p: int) -> int:
    """Accept only primes p >= 7 with p = 3 (mod 4)."""
    if p < 7:
        raise ValueError(f"p = {p} is too small, need p >= 7")
    if not is_prime(p):
        raise ValueError(f"p = {p} is not prime")
    if p % 4 != 3:
        raise ValueError(f"p = {p} is {p % 4} mod 4, need a '3 mod 4'-type prime")
    return p


def discriminant(field: PrimeField, a: int, b: int) -> int:
    """4a^3 + 27b^2 mod p; zero means the curve is singular."""
    return field.add(field.mul(4, field.pow(a, 3)), field.mul(27, field.pow(b, 2)))


# -------------------- Model -------------------- #

class CurveConfig(BaseModel):
    """Immutable curve parameters y^2 = x^3 + a*x + b over F_p with generator (gx, gy)."""

    model_config = ConfigDict(frozen=True)

    p: int = DEFAULT_PRIME
    a: int = DEFAULT_A
    b: int = DEFAULT_B
    gx: int = DEFAULT_GX
    gy: int = DEFAULT_GY

    @field_validator("p")
    @classmethod
    def _valid_prime(cls, p: int) -> int:
        return check_prime(p)

    @model_validator(mode="after")
    def _valid_curve(self):
        for name in ("a", "b", "gx", "gy"):
            value = getattr(self, name)
            if not 0 <= value < self.p:
                raise ValueError(f"{name} = {value} must lie in [0, {self.p - 1}]")

        field = PrimeField(self.p)
        if discriminant(field, self.a, self.b) == 0:
            raise ValueError(f"curve y^2 = x^3 + {self.a}x + {self.b} is singular mod {self.p}")

        lhs = field.mul(self.gy, self.gy)
        rhs = field.add(field.add(field.pow(self.gx, 3), field.mul(self.a, self.gx)), self.b)
        if lhs != rhs:
            raise ValueError(f"generator ({self.gx}, {self.gy}) is not on the curve")
        return self


def build_config(**values) -> CurveConfig:
    """Construct a CurveConfig, turning validation failures into ConfigurationError."""
    try:
        return CurveConfig(**values)
    except ValidationError as e:
        reasons = "; ".join(err["msg"] for err in e.errors())
        raise ConfigurationError(reasons) from e


# -------------------- Environment loading -------------------- #

def _read_int(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw.strip(), 0)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def load_config(environ: Optional[Mapping[str, str]] = None) -> CurveConfig:
    """
    Read ECDH_PRIME / ECDH_A / ECDH_B / ECDH_GX / ECDH_GY.
    A prime without curve values gets a curve found with ECDH_SEED.
    Callers wanting .env support run load_dotenv() first.
    """
    env = os.environ if environ is None else environ

    prime = _read_int(env, PRIME_ENV)
    curve = {}
    for field_name, var in CURVE_ENV.items():
        value = _read_int(env, var)
        if value is not None:
            curve[field_name] = value

    if curve and len(curve) != len(CURVE_ENV):
        missing = sorted(var for name, var in CURVE_ENV.items() if name not in curve)
        raise ConfigurationError(f"incomplete curve configuration, missing {', '.join(missing)}")

    if curve:
        if prime is not None:
            curve["p"] = prime
        return build_config(**curve)

    if prime is None or prime == DEFAULT_PRIME:
        return build_config()

    try:
        check_prime(prime)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    from ecdh.crypto.curve import find_curve
    seed = _read_int(env, SEED_ENV) or 0
    return find_curve(prime, random.Random(seed))
