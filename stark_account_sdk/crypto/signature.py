"""
ECDSA signatures over the Stark curve.

Signing is deterministic: the nonce k comes from RFC 6979 (HMAC-SHA256),
so signing the same (message_hash, private_key) pair always yields the
same signature.
"""
import hashlib
import logging
from typing import Optional, Tuple, Union

from ecdsa.rfc6979 import generate_k

from ..exceptions import InvalidHashRange, InvalidKeyRange
from ..felt import FeltLike, FieldElement, sqrt_mod
from ..models import Signature
from .constants import ALPHA, BETA, EC_GEN, EC_ORDER, FIELD_PRIME, N_ELEMENT_BITS_ECDSA
from .curve import ECPoint, ec_add, ec_mult, is_on_curve

logger = logging.getLogger(__name__)

_SIGNABLE_BOUND = 2**N_ELEMENT_BITS_ECDSA


def _as_int(value: Union[FeltLike, int]) -> int:
    if isinstance(value, FieldElement):
        return value.value
    if isinstance(value, str):
        return int(FieldElement.from_string(value))
    return value


def _check_private_key(private_key: int) -> None:
    if isinstance(private_key, bool) or not isinstance(private_key, int):
        raise InvalidKeyRange(f"Private key must be an integer, got {type(private_key).__name__}")
    if not 1 <= private_key < EC_ORDER:
        raise InvalidKeyRange("Private key must be in the range [1, EC_ORDER)")


def _check_message_hash(message_hash: int) -> None:
    if isinstance(message_hash, bool) or not isinstance(message_hash, int):
        raise InvalidHashRange(f"Message hash must be an integer, got {type(message_hash).__name__}")
    if not 0 <= message_hash < _SIGNABLE_BOUND:
        raise InvalidHashRange(f"Message hash {hex(message_hash)} is not below 2**{N_ELEMENT_BITS_ECDSA}")


def private_key_to_ec_point(private_key: Union[FeltLike, int]) -> ECPoint:
    """Return the full public point private_key * G."""
    private_key = _as_int(private_key)
    _check_private_key(private_key)
    return ec_mult(private_key, EC_GEN)


def private_to_stark_key(private_key: Union[FeltLike, int]) -> FieldElement:
    """Return the public key (x coordinate of private_key * G)."""
    return FieldElement(private_key_to_ec_point(private_key)[0])


def get_y_coordinate(stark_key: int) -> int:
    """
    Recover one of the two y coordinates for a public key x coordinate.

    Raises:
        ValueError: If no curve point has this x coordinate
    """
    y_squared = (stark_key ** 3 + ALPHA * stark_key + BETA) % FIELD_PRIME
    return sqrt_mod(y_squared, FIELD_PRIME)


def generate_k_rfc6979(message_hash: int, private_key: int, seed: Optional[int] = None) -> int:
    """
    Derive the signing nonce from the key and message as in RFC 6979.

    A hash one nibble short of 252 bits is shifted left by four bits first,
    so that the RFC 6979 bit truncation keeps every bit of it.
    """
    if 1 <= message_hash.bit_length() % 8 <= 4 and message_hash.bit_length() >= 248:
        message_hash *= 16

    if seed is None:
        extra_entropy = b""
    else:
        extra_entropy = seed.to_bytes((seed.bit_length() + 7) // 8, "big")

    return generate_k(
        EC_ORDER,
        private_key,
        hashlib.sha256,
        message_hash.to_bytes(max(1, (message_hash.bit_length() + 7) // 8), "big"),
        extra_entropy=extra_entropy,
    )


def sign(message_hash: Union[FeltLike, int], private_key: Union[FeltLike, int], seed: Optional[int] = None) -> Signature:
    """
    Sign a message hash.

    Args:
        message_hash: Value to sign, below 2**251
        private_key: Private key in [1, EC_ORDER)
        seed: Optional extra entropy mixed into the nonce derivation

    Returns:
        Signature (r, s)

    Raises:
        InvalidHashRange: If the hash cannot be signed
        InvalidKeyRange: If the private key is out of range
    """
    message_hash = _as_int(message_hash)
    private_key = _as_int(private_key)
    _check_message_hash(message_hash)
    _check_private_key(private_key)

    # Not every k is usable; retry with the next seed when r or w falls out of range
    while True:
        k = generate_k_rfc6979(message_hash, private_key, seed)
        seed = 1 if seed is None else seed + 1

        r = ec_mult(k, EC_GEN)[0]
        if not 1 <= r < _SIGNABLE_BOUND:
            logger.debug("Discarding nonce: r out of range")
            continue

        if (message_hash + r * private_key) % EC_ORDER == 0:
            logger.debug("Discarding nonce: degenerate message/key combination")
            continue

        w = k * pow(message_hash + r * private_key, -1, EC_ORDER) % EC_ORDER
        if not 1 <= w < _SIGNABLE_BOUND:
            logger.debug("Discarding nonce: w out of range")
            continue

        s = pow(w, -1, EC_ORDER)
        return Signature(r=FieldElement(r), s=FieldElement(s))


def _verify_point(message_hash: int, r: int, w: int, public_point: ECPoint) -> bool:
    # x = w * (z*G + r*Q)
    combined = ec_add(ec_mult(message_hash, EC_GEN), ec_mult(r, public_point))
    point = ec_mult(w, combined)
    return point is not None and point[0] == r


def verify(
    message_hash: Union[FeltLike, int],
    signature: Union[Signature, Tuple[FeltLike, FeltLike]],
    public_key: Union[FeltLike, int, ECPoint],
) -> bool:
    """
    Check a signature against a public key.

    Args:
        message_hash: Signed value
        signature: Signature or (r, s) pair
        public_key: Public key x coordinate, or the full (x, y) point

    Returns:
        True if the signature is valid, False otherwise
    """
    r, s = (_as_int(component) for component in signature)
    message_hash = _as_int(message_hash)

    if not 1 <= s < EC_ORDER:
        return False
    w = pow(s, -1, EC_ORDER)
    if not (1 <= r < _SIGNABLE_BOUND and 1 <= w < _SIGNABLE_BOUND):
        return False
    if not 0 <= message_hash < _SIGNABLE_BOUND:
        return False

    if isinstance(public_key, tuple):
        if not is_on_curve(public_key):
            return False
        return _verify_point(message_hash, r, w, public_key)

    stark_key = _as_int(public_key)
    try:
        y = get_y_coordinate(stark_key)
    except ValueError:
        return False
    return (
        _verify_point(message_hash, r, w, (stark_key, y))
        or _verify_point(message_hash, r, w, (stark_key, (-y) % FIELD_PRIME))
    )
