"""Scalar multiplication k*P by double-and-add, and the order of a point."""
from math import isqrt
from typing import Optional

from ecdh.common.errors import InvalidPointError
from ecdh.crypto.curve import INFINITY, Curve, Infinity, Point

# Beyond this prime size the simulator does not enumerate the order of G.
ORDER_SEARCH_LIMIT = 1_000_000


def multiply(curve: Curve, point: Point, scalar: int) -> Point:
    """Bits are consumed least significant first; 0*P is Infinity."""
    if scalar < 0:
        raise ValueError("scalar must be non-negative")
    result = INFINITY
    addend = point
    while scalar:
        if scalar & 1:
            result = curve.add(result, addend)
        addend = curve.double(addend)
        scalar >>= 1
    return result


def hasse_bound(p: int) -> int:
    """Upper bound p + 1 + 2*sqrt(p) on the number of points, hence on any point order."""
    return p + 1 + 2 * isqrt(p) + 1


def point_order(curve: Curve, point: Point, limit: Optional[int] = None) -> int:
    """Smallest n >= 1 with n*P = Infinity, by repeated addition."""
    if isinstance(point, Infinity):
        return 1
    curve.validate(point)
    if limit is None:
        limit = hasse_bound(curve.field.p)

    current = point
    order = 1
    while not isinstance(current, Infinity):
        if order >= limit:
            raise InvalidPointError(f"order of {point} exceeds {limit}")
        current = curve.add(current, point)
        order += 1
    return order
