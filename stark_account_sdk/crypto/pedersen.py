"""
StarkNet Pedersen hash.

pedersen_hash(a, b) is the x coordinate of

    SHIFT + a_low * P1 + a_high * P2 + b_low * P3 + b_high * P4

where a_low holds the lower 248 bits of a and a_high the remaining 4 bits.
compute_hash_on_elements chains it over a sequence and folds in the length,
which makes the result sensitive to both element order and count.
"""
import functools
import logging
from typing import Iterable, List, Optional, Tuple

from ..felt import FieldElement, FeltLike, to_felt
from .constants import (
    LOW_PART_BITS, LOW_PART_MASK, N_ELEMENT_BITS_HASH,
    PEDERSEN_SHIFT_POINT, PEDERSEN_P1, PEDERSEN_P2, PEDERSEN_P3, PEDERSEN_P4,
)
from .curve import ECPoint, ec_add, ec_double

logger = logging.getLogger(__name__)

_BASE_POINTS = (PEDERSEN_P1, PEDERSEN_P2, PEDERSEN_P3, PEDERSEN_P4)


@functools.lru_cache(maxsize=None)
def _doublings(base_index: int) -> Tuple[ECPoint, ...]:
    """Return base, 2*base, 4*base, ... for one of the four base points."""
    bits = LOW_PART_BITS if base_index % 2 == 0 else N_ELEMENT_BITS_HASH - LOW_PART_BITS
    points: List[ECPoint] = []
    point: Optional[ECPoint] = _BASE_POINTS[base_index]
    for _ in range(bits):
        points.append(point)
        point = ec_double(point)
    logger.debug("Precomputed %d multiples of Pedersen base point P%d", bits, base_index + 1)
    return tuple(points)


def _accumulate(point: Optional[ECPoint], scalar: int, base_index: int) -> Optional[ECPoint]:
    for multiple in _doublings(base_index):
        if not scalar:
            break
        if scalar & 1:
            point = ec_add(point, multiple)
        scalar >>= 1
    return point


def pedersen_hash(a: FeltLike, b: FeltLike) -> FieldElement:
    """
    Hash two field elements.

    Args:
        a: First element (int, literal or FieldElement below the field prime)
        b: Second element

    Returns:
        The hash as a FieldElement

    Raises:
        InvalidFieldEncoding: If an input is not a canonical field element
    """
    point: Optional[ECPoint] = PEDERSEN_SHIFT_POINT
    for index, element in enumerate((to_felt(a).value, to_felt(b).value)):
        point = _accumulate(point, element & LOW_PART_MASK, 2 * index)
        point = _accumulate(point, element >> LOW_PART_BITS, 2 * index + 1)
    return FieldElement(point[0])


def compute_hash_on_elements(elements: Iterable[FeltLike]) -> FieldElement:
    """
    Hash a sequence of field elements.

    H([]) = pedersen(0, 0); H([x1..xn]) = pedersen(pedersen(...pedersen(0, x1)..., xn), n).
    """
    result = FieldElement(0)
    count = 0
    for element in elements:
        result = pedersen_hash(result, element)
        count += 1
    return pedersen_hash(result, count)
