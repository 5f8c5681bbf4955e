"""
Short Weierstrass curve y^2 = x^3 + a*x + b over F_p.
Points are either Infinity (the identity) or Affine(x, y).
"""
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from ecdh.common.config import CurveConfig, build_config, discriminant
from ecdh.common.errors import InvalidPointError
from ecdh.crypto.field import PrimeField


# -------------------- Points -------------------- #

class Infinity(BaseModel):
    """The point at infinity."""

    model_config = ConfigDict(frozen=True)

    def __str__(self):
        return "O"


class Affine(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int

    def __str__(self):
        return f"({self.x}, {self.y})"


Point = Union[Infinity, Affine]

INFINITY = Infinity()

LIFT_ATTEMPTS = 64


# -------------------- Curve -------------------- #

class Curve:
    """Group law on the curve described by a CurveConfig."""

    def __init__(self, config: CurveConfig):
        self.config = config
        self.field = PrimeField(config.p)
        self.a = config.a
        self.b = config.b
        self.G = Affine(x=config.gx, y=config.gy)

    def __repr__(self):
        return f"Curve(y^2 = x^3 + {self.a}x + {self.b} mod {self.field.p})"

    def rhs(self, x: int) -> int:
        F = self.field
        return F.add(F.add(F.pow(x, 3), F.mul(self.a, x)), self.b)

    def is_on_curve(self, point: Point) -> bool:
        if isinstance(point, Infinity):
            return True
        if not (0 <= point.x < self.field.p and 0 <= point.y < self.field.p):
            return False
        return self.field.mul(point.y, point.y) == self.rhs(point.x)

    def validate(self, point: Point) -> Point:
        if not self.is_on_curve(point):
            raise InvalidPointError(f"point {point} is not on {self!r}")
        return point

    def lift_x(self, x: int) -> Optional[Affine]:
        """Point with the given x coordinate, or None if x^3 + ax + b is a non-residue."""
        x = self.field.normalize(x)
        y = self.field.sqrt(self.rhs(x))
        if y is None:
            return None
        return Affine(x=x, y=y)

    # -------------------- Group law -------------------- #

    def neg(self, point: Point) -> Point:
        if isinstance(point, Infinity):
            return INFINITY
        return Affine(x=point.x, y=self.field.neg(point.y))

    def add(self, p1: Point, p2: Point) -> Point:
        if isinstance(p1, Infinity):
            return p2
        if isinstance(p2, Infinity):
            return p1

        F = self.field
        x1, y1 = p1.x, p1.y
        x2, y2 = p2.x, p2.y

        if x1 == x2 and y1 == F.neg(y2):
            return INFINITY

        if p1 == p2:
            m = F.div(F.add(F.mul(3, F.mul(x1, x1)), self.a), F.mul(2, y1))
        else:
            m = F.div(F.sub(y2, y1), F.sub(x2, x1))

        x3 = F.sub(F.sub(F.mul(m, m), x1), x2)
        y3 = F.sub(F.mul(m, F.sub(x1, x3)), y1)
        return Affine(x=x3, y=y3)

    def double(self, point: Point) -> Point:
        return self.add(point, point)


# -------------------- Curve search -------------------- #

def find_curve(p: int, rng) -> CurveConfig:
    """
    Pick random non-singular (a, b) over F_p and a generator by lifting random x.
    Non-residues are skipped, as are points with y = 0 (they have order 2).
    A curve that yields no usable x within LIFT_ATTEMPTS draws is replaced.
    """
    field = PrimeField(p)
    while True:
        a = rng.randint(1, p - 1)
        b = rng.randint(1, p - 1)
        if discriminant(field, a, b) == 0:
            continue

        for _ in range(LIFT_ATTEMPTS):
            x = rng.randint(0, p - 1)
            y = field.sqrt(field.add(field.add(field.pow(x, 3), field.mul(a, x)), b))
            if y is None or y == 0:
                continue
            return build_config(p=p, a=a, b=b, gx=x, gy=y)
