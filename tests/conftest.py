"""
Pytest fixtures for the Stark Account SDK tests.
"""
import pytest

from stark_account_sdk.account import Account
from stark_account_sdk.chain_id import StarknetChainId
from stark_account_sdk.config import NetworkConfig
from stark_account_sdk.keystore import MemKeystore
from stark_account_sdk.provider._rate_limited_log import reset_rate_limited_log
from stark_account_sdk.provider.stub import StubProvider

# Known-good goerli invoke: one ERC20 transfer from TEST_ACCOUNT_ADDRESS
TEST_ACCOUNT_ADDRESS = "0x043784df59268c02b716e20bf77797bd96c68c2f100b2a634e448c35e3ad363e"
TEST_PRIVATE_KEY = "0x043b7fe9d91942c98cd5fd37579bd99ec74f879c4c79d886633eecae9dad35fa"
TEST_PUBLIC_KEY = "0x49f060d2dffd3bf6f2c103b710baf519530df44529045f92c3903097e8d861f"
TEST_TOKEN_ADDRESS = "0x049d36570d4e46f48e99674bd3fcc84644ddd6b96f7c741b1562b82f9e004dc7"
TEST_TRANSFER_SELECTOR = "0x83afd3f4caedc6eebf44246fe54e38c95e3179a5ec9ea81740eca5b482d12e"
TEST_NONCE = 2
TEST_MAX_FEE = 0x574fbde6000
TEST_TX_HASH = "0x73cf79c4bfa0c7a41f473c07e1be5ac25faa7c2fdf9edcbd12c1438f40f13d8"
TEST_TX_HASH_V0 = "0x3085154a9113a464b95f92cde8c495f5ea038e6b11fe488e10305abaa34c023"
TEST_SIGNATURE_R = "0x10d405427040655f118bc8b897e2f2f8147858bbcb0e3d6bc6dfbc6d0205e8"
TEST_SIGNATURE_S = "0x5cdfe4a3d5b63002e9011ec0ba59ae2b75a43cb2a3bc1699b35aa64cb9ca3cf"

# Transfer of 1 (two-limb uint256) to the token contract itself
TEST_TRANSFER_CALL = (TEST_TOKEN_ADDRESS, "transfer", [TEST_TOKEN_ADDRESS, 1, 0])
TEST_CALLDATA = [
    0x1,
    int(TEST_TOKEN_ADDRESS, 16),
    int(TEST_TRANSFER_SELECTOR, 16),
    0x0,
    0x3,
    0x3,
    int(TEST_TOKEN_ADDRESS, 16),
    0x1,
    0x0,
]

TEST_RPC_URL = "https://rpc.example.com"


@pytest.fixture(autouse=True)
def _reset_shared_state():
    """Clear class-level caches between tests."""
    NetworkConfig._networks_cache = None
    reset_rate_limited_log()
    yield
    NetworkConfig._networks_cache = None


@pytest.fixture
def keystore():
    store = MemKeystore()
    store.put(TEST_ACCOUNT_ADDRESS, TEST_PRIVATE_KEY)
    return store


@pytest.fixture
def stub_provider():
    return StubProvider(chain_id="SN_GOERLI")


@pytest.fixture
def account(stub_provider, keystore):
    return Account(
        provider=stub_provider,
        address=TEST_ACCOUNT_ADDRESS,
        public_key_identifier=TEST_ACCOUNT_ADDRESS,
        keystore=keystore,
    )


@pytest.fixture
def goerli_chain_id():
    return StarknetChainId.SN_GOERLI
