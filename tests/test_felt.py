"""
Tests for field element parsing, arithmetic and short strings.
"""
import pytest

from stark_account_sdk.exceptions import InvalidFieldEncoding
from stark_account_sdk.felt import (
    FIELD_PRIME,
    FieldElement,
    decode_short_string,
    encode_short_string,
    sqrt_mod,
    to_felt,
)


class TestConstruction:
    """FieldElement constructors."""

    def test_int_is_reduced(self):
        assert FieldElement(FIELD_PRIME + 5) == 5
        assert FieldElement(-1) == FIELD_PRIME - 1

    def test_rejects_non_int(self):
        with pytest.raises(InvalidFieldEncoding):
            FieldElement(1.5)
        with pytest.raises(InvalidFieldEncoding):
            FieldElement(True)

    @pytest.mark.parametrize("literal,expected", [
        ("0x0", 0),
        ("0x1", 1),
        ("0xABCDEF", 0xabcdef),
        ("abcdef", 0xabcdef),
        ("0x00000001", 1),
    ])
    def test_from_hex(self, literal, expected):
        assert FieldElement.from_hex(literal) == expected

    @pytest.mark.parametrize("literal", ["", "0x", "0xzz", "12g", " ", "0x-1"])
    def test_from_hex_malformed(self, literal):
        with pytest.raises(InvalidFieldEncoding):
            FieldElement.from_hex(literal)

    def test_from_hex_rejects_out_of_range(self):
        with pytest.raises(InvalidFieldEncoding):
            FieldElement.from_hex(hex(FIELD_PRIME))

    def test_from_decimal(self):
        assert FieldElement.from_decimal("12345") == 12345
        with pytest.raises(InvalidFieldEncoding):
            FieldElement.from_decimal("12a")
        with pytest.raises(InvalidFieldEncoding):
            FieldElement.from_decimal(str(FIELD_PRIME))

    def test_from_string_detects_prefix(self):
        assert FieldElement.from_string("0x10") == 16
        assert FieldElement.from_string("10") == 10

    def test_from_bytes(self):
        assert FieldElement.from_bytes(b"\x01\x00") == 256
        with pytest.raises(InvalidFieldEncoding):
            FieldElement.from_bytes(FIELD_PRIME.to_bytes(32, "big"))

    def test_to_felt(self):
        assert to_felt(7) == FieldElement(7)
        assert to_felt("0x7") == FieldElement(7)
        assert to_felt(FieldElement(7)) == 7
        with pytest.raises(InvalidFieldEncoding):
            to_felt(FIELD_PRIME)
        with pytest.raises(InvalidFieldEncoding):
            to_felt(-1)
        with pytest.raises(InvalidFieldEncoding):
            to_felt(None)


class TestEncoding:
    """Hex and byte output."""

    def test_to_hex_is_minimal_lowercase(self):
        assert FieldElement(0).to_hex() == "0x0"
        assert FieldElement(0xABC).to_hex() == "0xabc"

    def test_to_bytes_is_32_bytes(self):
        data = FieldElement(1).to_bytes()
        assert len(data) == 32
        assert data[-1] == 1

    def test_hex_round_trip(self):
        value = FieldElement(FIELD_PRIME - 1)
        assert FieldElement.from_hex(value.to_hex()) == value


class TestArithmetic:
    """Modular arithmetic."""

    def test_add_wraps(self):
        assert FieldElement(FIELD_PRIME - 1) + 2 == 1

    def test_sub_wraps(self):
        assert FieldElement(0) - 1 == FIELD_PRIME - 1
        assert 1 - FieldElement(2) == FIELD_PRIME - 1

    def test_mul_and_inverse(self):
        x = FieldElement(123456789)
        assert x * x.inverse() == 1
        assert x / x == 1

    def test_inverse_of_zero(self):
        with pytest.raises(ZeroDivisionError):
            FieldElement(0).inverse()

    def test_neg_and_pow(self):
        assert -FieldElement(1) == FIELD_PRIME - 1
        assert FieldElement(3) ** 2 == 9

    def test_sqrt(self):
        root = FieldElement(16).sqrt()
        assert root * root == 16
        assert sqrt_mod(0, FIELD_PRIME) == 0

    def test_ordering_and_hash(self):
        assert FieldElement(1) < FieldElement(2)
        assert FieldElement(2) > 1
        assert hash(FieldElement(5)) == hash(FieldElement(FIELD_PRIME + 5))
        assert len({FieldElement(5), FieldElement(FIELD_PRIME + 5)}) == 1

    def test_equality_with_int_is_consistent_with_hash(self):
        zero = FieldElement(0)
        assert zero != FIELD_PRIME
        assert FieldElement(1) != FIELD_PRIME + 1
        assert FieldElement(FIELD_PRIME - 1) != -1
        assert zero == 0
        assert len({zero, 0}) == 1
        assert len({zero, FIELD_PRIME}) == 2
        assert zero < FIELD_PRIME

    def test_immutable(self):
        x = FieldElement(1)
        with pytest.raises(AttributeError):
            x._value = 2

    def test_index(self):
        assert [10, 20, 30][FieldElement(1)] == 20
        assert hex(FieldElement(255)) == "0xff"


class TestShortStrings:
    """ASCII short string encoding."""

    @pytest.mark.parametrize("text,expected", [
        ("SN_MAIN", 0x534e5f4d41494e),
        ("SN_GOERLI", 0x534e5f474f45524c49),
        ("SN_SEPOLIA", 0x534e5f5345504f4c4941),
        ("invoke", 0x696e766f6b65),
    ])
    def test_encode(self, text, expected):
        assert encode_short_string(text) == expected
        assert decode_short_string(expected) == text

    def test_too_long(self):
        with pytest.raises(InvalidFieldEncoding):
            encode_short_string("x" * 32)

    def test_non_ascii(self):
        with pytest.raises(InvalidFieldEncoding):
            encode_short_string("héllo")
