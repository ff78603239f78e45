"""
Stark Account SDK - build, sign and submit StarkNet invoke transactions.
"""
from .version import __version__
from .account import Account
from .calldata import fmt_calldata
from .chain_id import ChainIdCache, StarknetChainId, chain_id_to_felt, chain_id_to_name
from .config import NetworkConfig
from .crypto import compute_hash_on_elements, pedersen_hash, private_to_stark_key, sign, verify
from .exceptions import (
    StarkAccountError,
    InvalidFieldEncoding,
    CalldataFormatError,
    UnsupportedTransactionVersion,
    KeyNotFound,
    KeystoreCorrupted,
    SigningError,
    InvalidKeyRange,
    InvalidHashRange,
    ProviderError,
    ProviderConnectionError,
    ChainIdResolutionFailed,
    SubmissionRejected,
    InvalidContractClass,
    ClassHashNotFound,
)
from .felt import FIELD_PRIME, FieldElement, decode_short_string, encode_short_string, to_felt
from .keystore import FileKeystore, Keystore, MemKeystore
from .models import AddInvokeTransactionResponse, Call, InvokeTransaction, Signature
from .provider import Provider, ProviderErrorCategory, RpcProvider, StubProvider
from .transaction_hash import compute_invoke_hash
from .utils import get_selector_from_name, starknet_keccak

__all__ = [
    "__version__",
    "Account",
    "fmt_calldata",
    "ChainIdCache",
    "StarknetChainId",
    "chain_id_to_felt",
    "chain_id_to_name",
    "NetworkConfig",
    "compute_hash_on_elements",
    "pedersen_hash",
    "private_to_stark_key",
    "sign",
    "verify",
    "StarkAccountError",
    "InvalidFieldEncoding",
    "CalldataFormatError",
    "UnsupportedTransactionVersion",
    "KeyNotFound",
    "KeystoreCorrupted",
    "SigningError",
    "InvalidKeyRange",
    "InvalidHashRange",
    "ProviderError",
    "ProviderConnectionError",
    "ChainIdResolutionFailed",
    "SubmissionRejected",
    "InvalidContractClass",
    "ClassHashNotFound",
    "FIELD_PRIME",
    "FieldElement",
    "decode_short_string",
    "encode_short_string",
    "to_felt",
    "FileKeystore",
    "Keystore",
    "MemKeystore",
    "AddInvokeTransactionResponse",
    "Call",
    "InvokeTransaction",
    "Signature",
    "Provider",
    "ProviderErrorCategory",
    "RpcProvider",
    "StubProvider",
    "compute_invoke_hash",
    "get_selector_from_name",
    "starknet_keccak",
]
