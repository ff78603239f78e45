"""
Property-based tests for the Stark Account SDK.

These tests verify that properties hold true across many random inputs.
"""
from hypothesis import assume, given, settings, strategies as st

from stark_account_sdk.calldata import fmt_calldata
from stark_account_sdk.crypto.constants import EC_ORDER
from stark_account_sdk.crypto.pedersen import compute_hash_on_elements
from stark_account_sdk.crypto.signature import private_to_stark_key, sign, verify
from stark_account_sdk.felt import FIELD_PRIME, FieldElement, decode_short_string, encode_short_string
from stark_account_sdk.transaction_hash import compute_invoke_hash
from conftest import TEST_ACCOUNT_ADDRESS

felts = st.integers(min_value=0, max_value=FIELD_PRIME - 1)
nonzero_felts = st.integers(min_value=1, max_value=FIELD_PRIME - 1)
private_keys = st.integers(min_value=1, max_value=EC_ORDER - 1)
signable_hashes = st.integers(min_value=0, max_value=2**251 - 1)
short_strings = st.text(
    alphabet=st.characters(min_codepoint=0x21, max_codepoint=0x7e), min_size=1, max_size=31
)
calls = st.lists(
    st.tuples(felts, felts, st.lists(felts, max_size=4)),
    max_size=4,
)


@given(felts)
def test_hex_round_trip(value):
    felt = FieldElement(value)
    assert FieldElement.from_hex(felt.to_hex()) == felt
    assert FieldElement.from_bytes(felt.to_bytes()) == felt


@given(felts, felts, felts)
def test_field_laws(a, b, c):
    x, y, z = FieldElement(a), FieldElement(b), FieldElement(c)
    assert x + y == y + x
    assert (x * y) * z == x * (y * z)
    assert x * (y + z) == x * y + x * z
    assert x - x == 0


@given(nonzero_felts)
def test_inverse(value):
    assert FieldElement(value) * FieldElement(value).inverse() == 1


@given(short_strings)
def test_short_string_round_trip(text):
    assert decode_short_string(encode_short_string(text)) == text


@settings(max_examples=25, deadline=None)
@given(felts, felts)
def test_hash_order_sensitive(a, b):
    assume(a != b)
    assert compute_hash_on_elements([a, b]) != compute_hash_on_elements([b, a])


@settings(max_examples=25, deadline=None)
@given(st.lists(felts, max_size=4))
def test_hash_length_sensitive(elements):
    assert compute_hash_on_elements(elements) != compute_hash_on_elements(elements + [0])


@settings(max_examples=50)
@given(calls)
def test_calldata_shape(call_list):
    result = fmt_calldata(call_list)
    total = sum(len(data) for _, _, data in call_list)

    assert result[0] == len(call_list)
    assert len(result) == 1 + 4 * len(call_list) + 1 + total
    assert result[1 + 4 * len(call_list)] == total

    offset = 0
    for index, (_, _, data) in enumerate(call_list):
        assert result[1 + 4 * index + 2] == offset
        assert result[1 + 4 * index + 3] == len(data)
        offset += len(data)


@settings(max_examples=10, deadline=None)
@given(st.lists(felts, max_size=6), felts, felts)
def test_transaction_hash_deterministic(calldata, nonce, max_fee):
    args = (1, calldata, nonce, max_fee, TEST_ACCOUNT_ADDRESS, encode_short_string("SN_MAIN"))
    assert compute_invoke_hash(*args) == compute_invoke_hash(*args)


@settings(max_examples=10, deadline=None)
@given(signable_hashes, private_keys)
def test_sign_verify(message_hash, private_key):
    signature = sign(message_hash, private_key)
    assert signature == sign(message_hash, private_key)
    assert verify(message_hash, signature, private_to_stark_key(private_key))
