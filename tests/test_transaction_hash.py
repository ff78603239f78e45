"""
Tests for invoke transaction hashing.
"""
import pytest

from stark_account_sdk.chain_id import StarknetChainId
from stark_account_sdk.crypto.pedersen import compute_hash_on_elements
from stark_account_sdk.exceptions import InvalidFieldEncoding, UnsupportedTransactionVersion
from stark_account_sdk.felt import encode_short_string
from stark_account_sdk.transaction_hash import (
    TransactionHashPrefix,
    calculate_transaction_hash_common,
    compute_invoke_hash,
)
from conftest import (
    TEST_ACCOUNT_ADDRESS,
    TEST_CALLDATA,
    TEST_MAX_FEE,
    TEST_NONCE,
    TEST_TX_HASH,
    TEST_TX_HASH_V0,
)

MAINNET_SENDER = 0x59cd166e363be0a921e42dd5cfca0049aedcf2093a707ef90b5c6e46d4555a8
MAINNET_CALLDATA = [
    1,
    0x5dbdedc203e92749e2e746e2d40a768d966bd243df04a6b712e222bc040a9af,
    0x2f0b3c5710379609eb5495f1ecd348cb28167711b73609fe565a72734550354,
    0,
    1,
    1,
    0x52884ee3f,
]
MAINNET_TX_HASH = 0x3476c76a81522fe52616c41e95d062f5c3ea4eeb6c652904ad389fcd9ff4637


def test_prefix_felt():
    assert TransactionHashPrefix.INVOKE.felt == 0x696e766f6b65


def test_goerli_v1_vector():
    tx_hash = compute_invoke_hash(
        version=1,
        calldata=TEST_CALLDATA,
        nonce=TEST_NONCE,
        max_fee=TEST_MAX_FEE,
        sender_address=TEST_ACCOUNT_ADDRESS,
        chain_id=StarknetChainId.SN_GOERLI,
    )
    assert tx_hash.to_hex() == TEST_TX_HASH


def test_goerli_zero_vector():
    tx_hash = compute_invoke_hash(
        version=1,
        calldata=[0],
        nonce=0,
        max_fee=0,
        sender_address=0,
        chain_id=StarknetChainId.SN_GOERLI,
    )
    assert tx_hash.to_hex() == "0x135c34f53f8b7f59efd450eb689fccd9dd4cfe7f9d9dc4d09954c5653138698"


def test_mainnet_v1_vector():
    tx_hash = compute_invoke_hash(
        version=1,
        calldata=MAINNET_CALLDATA,
        nonce=1,
        max_fee=0x2a173cd36e400,
        sender_address=MAINNET_SENDER,
        chain_id=encode_short_string("SN_MAIN"),
    )
    assert tx_hash == MAINNET_TX_HASH


def test_v1_layout_matches_common_hash():
    expected = compute_hash_on_elements([
        TransactionHashPrefix.INVOKE.felt,
        1,
        int(TEST_ACCOUNT_ADDRESS, 16),
        0,
        compute_hash_on_elements(TEST_CALLDATA),
        TEST_MAX_FEE,
        StarknetChainId.SN_GOERLI,
        TEST_NONCE,
    ])
    actual = calculate_transaction_hash_common(
        TransactionHashPrefix.INVOKE, 1, TEST_ACCOUNT_ADDRESS, 0, TEST_CALLDATA,
        TEST_MAX_FEE, int(StarknetChainId.SN_GOERLI), additional_data=[TEST_NONCE],
    )
    assert actual == expected


def test_legacy_v0_vector():
    tx_hash = compute_invoke_hash(
        version=0,
        calldata=TEST_CALLDATA,
        nonce=TEST_NONCE,
        max_fee=TEST_MAX_FEE,
        sender_address=TEST_ACCOUNT_ADDRESS,
        chain_id=StarknetChainId.SN_GOERLI,
    )
    assert tx_hash.to_hex() == TEST_TX_HASH_V0


def test_legacy_v0_ignores_nonce():
    kwargs = dict(
        version=0,
        calldata=TEST_CALLDATA,
        max_fee=TEST_MAX_FEE,
        sender_address=TEST_ACCOUNT_ADDRESS,
        chain_id=StarknetChainId.SN_GOERLI,
    )
    assert compute_invoke_hash(nonce=1, **kwargs) == compute_invoke_hash(nonce=99, **kwargs)


def test_v1_depends_on_every_field():
    base = dict(
        version=1,
        calldata=TEST_CALLDATA,
        nonce=TEST_NONCE,
        max_fee=TEST_MAX_FEE,
        sender_address=TEST_ACCOUNT_ADDRESS,
        chain_id=StarknetChainId.SN_GOERLI,
    )
    reference = compute_invoke_hash(**base)
    for field, value in [
        ("nonce", TEST_NONCE + 1),
        ("max_fee", TEST_MAX_FEE + 1),
        ("sender_address", 0x1234),
        ("chain_id", StarknetChainId.SN_MAIN),
        ("calldata", TEST_CALLDATA[:-1]),
    ]:
        assert compute_invoke_hash(**{**base, field: value}) != reference, field


@pytest.mark.parametrize("version", [2, 3, -1, True])
def test_unsupported_versions(version):
    with pytest.raises(UnsupportedTransactionVersion):
        compute_invoke_hash(version, TEST_CALLDATA, 0, 0, TEST_ACCOUNT_ADDRESS, StarknetChainId.SN_MAIN)


def test_invalid_field_rejected():
    with pytest.raises(InvalidFieldEncoding):
        compute_invoke_hash(1, TEST_CALLDATA, "0xzz", 0, TEST_ACCOUNT_ADDRESS, StarknetChainId.SN_MAIN)
