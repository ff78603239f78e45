"""
Field element arithmetic over the Stark prime field.

Every protocol value (addresses, selectors, calldata, hashes, signatures)
is a FieldElement: an integer residue modulo FIELD_PRIME.
"""
import functools
from typing import Union

from pydantic_core import core_schema

from .exceptions import InvalidFieldEncoding

# 2**251 + 17 * 2**192 + 1
FIELD_PRIME = 0x800000000000011000000000000000000000000000000000000000000000001

# Field elements serialise to 32 big-endian bytes
FELT_BYTE_LENGTH = 32

# Short strings must fit in 31 bytes to stay below FIELD_PRIME
SHORT_STRING_MAX_LENGTH = 31


@functools.total_ordering
class FieldElement:
    """
    Immutable integer residue modulo FIELD_PRIME.

    Integers passed to the constructor are reduced, so arithmetic wraps
    through the modulus instead of overflowing. Literals parsed with the
    ``from_*`` constructors must already be canonical.
    """

    __slots__ = ("_value",)

    def __init__(self, value: int = 0):
        if isinstance(value, FieldElement):
            value = value._value
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidFieldEncoding(
                f"FieldElement expects an int, got {type(value).__name__}"
            )
        object.__setattr__(self, "_value", value % FIELD_PRIME)

    def __setattr__(self, name, value):
        raise AttributeError("FieldElement is immutable")

    @property
    def value(self) -> int:
        return self._value

    # -- constructors --------------------------------------------------------

    @classmethod
    def from_hex(cls, literal: str) -> "FieldElement":
        """
        Parse a hex literal, with or without the 0x prefix.

        Raises:
            InvalidFieldEncoding: If the literal is malformed or not below FIELD_PRIME
        """
        if not isinstance(literal, str):
            raise InvalidFieldEncoding(f"Hex literal must be a string, got {type(literal).__name__}")
        digits = literal.strip()
        if digits[:2].lower() == "0x":
            digits = digits[2:]
        if not digits or digits.startswith(("+", "-")) or "_" in digits:
            raise InvalidFieldEncoding(f"Invalid hex literal: {literal!r}")
        try:
            value = int(digits, 16)
        except ValueError:
            raise InvalidFieldEncoding(f"Invalid hex literal: {literal!r}")
        return cls._canonical(value, literal)

    @classmethod
    def from_decimal(cls, literal: str) -> "FieldElement":
        """Parse a non-negative decimal literal."""
        if not isinstance(literal, str):
            raise InvalidFieldEncoding(f"Decimal literal must be a string, got {type(literal).__name__}")
        digits = literal.strip()
        if not (digits.isascii() and digits.isdigit()):
            raise InvalidFieldEncoding(f"Invalid decimal literal: {literal!r}")
        return cls._canonical(int(digits), literal)

    @classmethod
    def from_string(cls, literal: str) -> "FieldElement":
        """Parse a hex (0x-prefixed) or decimal literal."""
        if isinstance(literal, str) and literal.strip()[:2].lower() == "0x":
            return cls.from_hex(literal)
        return cls.from_decimal(literal)

    @classmethod
    def from_bytes(cls, data: bytes) -> "FieldElement":
        """Interpret up to 32 bytes as a big-endian integer."""
        if not isinstance(data, (bytes, bytearray)):
            raise InvalidFieldEncoding(f"Expected bytes, got {type(data).__name__}")
        if len(data) > FELT_BYTE_LENGTH:
            raise InvalidFieldEncoding(f"Byte string too long for a field element: {len(data)} bytes")
        return cls._canonical(int.from_bytes(data, "big"), "0x" + bytes(data).hex())

    @classmethod
    def _canonical(cls, value: int, literal: str) -> "FieldElement":
        if value >= FIELD_PRIME:
            raise InvalidFieldEncoding(f"Value {literal!r} is not below the field prime")
        return cls(value)

    # -- conversions ---------------------------------------------------------

    def to_hex(self) -> str:
        return hex(self._value)

    def to_bytes(self) -> bytes:
        return self._value.to_bytes(FELT_BYTE_LENGTH, "big")

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"FieldElement({self.to_hex()})"

    # -- arithmetic ----------------------------------------------------------

    def __add__(self, other: "FeltLike") -> "FieldElement":
        return FieldElement(self._value + _coerce(other))

    __radd__ = __add__

    def __sub__(self, other: "FeltLike") -> "FieldElement":
        return FieldElement(self._value - _coerce(other))

    def __rsub__(self, other: "FeltLike") -> "FieldElement":
        return FieldElement(_coerce(other) - self._value)

    def __mul__(self, other: "FeltLike") -> "FieldElement":
        return FieldElement(self._value * _coerce(other))

    __rmul__ = __mul__

    def __truediv__(self, other: "FeltLike") -> "FieldElement":
        return self * FieldElement(_coerce(other)).inverse()

    def __neg__(self) -> "FieldElement":
        return FieldElement(-self._value)

    def __pow__(self, exponent: int) -> "FieldElement":
        if exponent < 0:
            return self.inverse() ** (-exponent)
        return FieldElement(pow(self._value, exponent, FIELD_PRIME))

    def inverse(self) -> "FieldElement":
        if self._value == 0:
            raise ZeroDivisionError("cannot invert zero in the Stark field")
        return FieldElement(pow(self._value, -1, FIELD_PRIME))

    def sqrt(self) -> "FieldElement":
        """
        Square root via Tonelli-Shanks.

        Raises:
            ValueError: If the element is not a quadratic residue
        """
        return FieldElement(sqrt_mod(self._value, FIELD_PRIME))

    # -- comparisons ---------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: "FeltLike") -> bool:
        return self._value < _coerce(other)

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return self._value != 0

    # -- pydantic integration ------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        return core_schema.no_info_plain_validator_function(
            to_felt,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda felt: felt.to_hex(), when_used="json"
            ),
        )


FeltLike = Union[FieldElement, int, str]


def _coerce(value: FeltLike) -> int:
    if isinstance(value, FieldElement):
        return value.value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise TypeError(f"Expected FieldElement or int, got {type(value).__name__}")


def to_felt(value: FeltLike) -> FieldElement:
    """
    Coerce an int, a hex/decimal string or a FieldElement into a FieldElement.

    Raises:
        InvalidFieldEncoding: If the value cannot be interpreted as a field element
    """
    if isinstance(value, FieldElement):
        return value
    if isinstance(value, str):
        return FieldElement.from_string(value)
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0 or value >= FIELD_PRIME:
            raise InvalidFieldEncoding(f"Integer {value} is outside the field range")
        return FieldElement(value)
    raise InvalidFieldEncoding(f"Cannot convert {type(value).__name__} to a field element")


def encode_short_string(text: str) -> FieldElement:
    """
    Encode an ASCII string of at most 31 characters as a field element.

    >>> encode_short_string("SN_MAIN").to_hex()
    '0x534e5f4d41494e'
    """
    if not isinstance(text, str) or not text.isascii():
        raise InvalidFieldEncoding(f"Short string must be ASCII text: {text!r}")
    if len(text) > SHORT_STRING_MAX_LENGTH:
        raise InvalidFieldEncoding(
            f"Short string longer than {SHORT_STRING_MAX_LENGTH} characters: {text!r}"
        )
    return FieldElement(int.from_bytes(text.encode("ascii"), "big"))


def decode_short_string(felt: FeltLike) -> str:
    """Decode a field element produced by encode_short_string."""
    value = int(to_felt(felt))
    raw = value.to_bytes((value.bit_length() + 7) // 8, "big")
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError:
        raise InvalidFieldEncoding(f"Field element {hex(value)} is not an ASCII short string")
    return text


def sqrt_mod(value: int, prime: int) -> int:
    """Return a square root of value modulo an odd prime (Tonelli-Shanks)."""
    value %= prime
    if value == 0:
        return 0
    if pow(value, (prime - 1) // 2, prime) != 1:
        raise ValueError(f"{hex(value)} is not a quadratic residue")

    # prime - 1 = q * 2**s with q odd
    q, s = prime - 1, 0
    while q % 2 == 0:
        q //= 2
        s += 1

    z = 2
    while pow(z, (prime - 1) // 2, prime) != prime - 1:
        z += 1

    m, c, t, r = s, pow(z, q, prime), pow(value, q, prime), pow(value, (q + 1) // 2, prime)
    while t != 1:
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % prime
            i += 1
        b = pow(c, 1 << (m - i - 1), prime)
        m, c = i, b * b % prime
        t, r = t * c % prime, r * b % prime
    return r
