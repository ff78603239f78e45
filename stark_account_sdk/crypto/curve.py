"""
Affine point arithmetic on the Stark curve.

Points are (x, y) tuples of ints; None is the point at infinity.
"""
from typing import Optional, Tuple

from .constants import ALPHA, BETA, FIELD_PRIME

ECPoint = Tuple[int, int]


def is_on_curve(point: ECPoint) -> bool:
    x, y = point
    return (y * y - (x * x * x + ALPHA * x + BETA)) % FIELD_PRIME == 0


def ec_neg(point: Optional[ECPoint]) -> Optional[ECPoint]:
    if point is None:
        return None
    return point[0], (-point[1]) % FIELD_PRIME


def ec_double(point: Optional[ECPoint]) -> Optional[ECPoint]:
    if point is None or point[1] == 0:
        return None
    x, y = point
    slope = (3 * x * x + ALPHA) * pow(2 * y, -1, FIELD_PRIME) % FIELD_PRIME
    new_x = (slope * slope - 2 * x) % FIELD_PRIME
    return new_x, (slope * (x - new_x) - y) % FIELD_PRIME


def ec_add(p: Optional[ECPoint], q: Optional[ECPoint]) -> Optional[ECPoint]:
    if p is None:
        return q
    if q is None:
        return p
    if p[0] == q[0]:
        if (p[1] + q[1]) % FIELD_PRIME == 0:
            return None
        return ec_double(p)
    slope = (q[1] - p[1]) * pow(q[0] - p[0], -1, FIELD_PRIME) % FIELD_PRIME
    new_x = (slope * slope - p[0] - q[0]) % FIELD_PRIME
    return new_x, (slope * (p[0] - new_x) - p[1]) % FIELD_PRIME


def ec_mult(scalar: int, point: Optional[ECPoint]) -> Optional[ECPoint]:
    """Double-and-add scalar multiplication."""
    if scalar < 0:
        return ec_mult(-scalar, ec_neg(point))
    result = None
    addend = point
    while scalar:
        if scalar & 1:
            result = ec_add(result, addend)
        addend = ec_double(addend)
        scalar >>= 1
    return result
