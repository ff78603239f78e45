"""
Transaction hash computation for invoke transactions.

The hash binds a protocol prefix, the version, the sender, an entry point
selector slot, the calldata hash, the max fee and the chain id together,
plus version-specific trailing data:

    version 1: H([invoke, 1, sender, 0, H(calldata), max_fee, chain_id, nonce])
    version 0: H([invoke, 0, sender, selector(__execute__), H(calldata), max_fee, chain_id])
"""
import logging
from enum import Enum
from typing import Iterable, Optional, Sequence

from .crypto.pedersen import compute_hash_on_elements
from .exceptions import UnsupportedTransactionVersion
from .felt import FeltLike, FieldElement, encode_short_string, to_felt
from .utils import EXECUTE_ENTRY_POINT_NAME, get_selector_from_name, short_hex

logger = logging.getLogger(__name__)

TRANSACTION_VERSION_0 = 0
TRANSACTION_VERSION_1 = 1
SUPPORTED_INVOKE_VERSIONS = (TRANSACTION_VERSION_0, TRANSACTION_VERSION_1)


class TransactionHashPrefix(Enum):
    """ASCII tags prepended to transaction hashes."""
    INVOKE = "invoke"

    @property
    def felt(self) -> FieldElement:
        return encode_short_string(self.value)


def calculate_transaction_hash_common(
    tx_hash_prefix: TransactionHashPrefix,
    version: int,
    contract_address: FeltLike,
    entry_point_selector: FeltLike,
    calldata: Iterable[FeltLike],
    max_fee: FeltLike,
    chain_id: FeltLike,
    additional_data: Sequence[FeltLike] = (),
) -> FieldElement:
    """
    Hash the fields shared by every transaction type.

    Args:
        tx_hash_prefix: Transaction type tag
        version: Transaction version
        contract_address: Sender (account) address
        entry_point_selector: Selector slot; 0 for version 1 invoke transactions
        calldata: Flattened calldata
        max_fee: Maximum fee the sender pays
        chain_id: Chain id field element
        additional_data: Version-specific trailing fields

    Returns:
        Transaction hash
    """
    calldata_hash = compute_hash_on_elements(calldata)
    data_to_hash = [
        tx_hash_prefix.felt,
        version,
        contract_address,
        entry_point_selector,
        calldata_hash,
        max_fee,
        chain_id,
        *additional_data,
    ]
    return compute_hash_on_elements(data_to_hash)


def compute_invoke_hash(
    version: int,
    calldata: Sequence[FeltLike],
    nonce: FeltLike,
    max_fee: FeltLike,
    sender_address: FeltLike,
    chain_id: FeltLike,
    entry_point_selector: Optional[FeltLike] = None,
) -> FieldElement:
    """
    Compute the hash an account signs for an invoke transaction.

    Args:
        version: 0 (legacy layout) or 1
        calldata: Calldata already formatted with fmt_calldata
        nonce: Account nonce; not part of the version 0 hash
        max_fee: Maximum fee
        sender_address: Account address
        chain_id: Chain id field element
        entry_point_selector: Version 0 only; defaults to the __execute__ selector

    Returns:
        Transaction hash

    Raises:
        UnsupportedTransactionVersion: If version is neither 0 nor 1
        InvalidFieldEncoding: If a field is not a valid field element
    """
    if isinstance(version, bool) or version not in SUPPORTED_INVOKE_VERSIONS:
        raise UnsupportedTransactionVersion(version)

    if version == TRANSACTION_VERSION_1:
        tx_hash = calculate_transaction_hash_common(
            tx_hash_prefix=TransactionHashPrefix.INVOKE,
            version=version,
            contract_address=to_felt(sender_address),
            entry_point_selector=0,
            calldata=[to_felt(item) for item in calldata],
            max_fee=to_felt(max_fee),
            chain_id=to_felt(chain_id),
            additional_data=[to_felt(nonce)],
        )
    else:
        if entry_point_selector is None:
            entry_point_selector = get_selector_from_name(EXECUTE_ENTRY_POINT_NAME)
        tx_hash = calculate_transaction_hash_common(
            tx_hash_prefix=TransactionHashPrefix.INVOKE,
            version=version,
            contract_address=to_felt(sender_address),
            entry_point_selector=to_felt(entry_point_selector),
            calldata=[to_felt(item) for item in calldata],
            max_fee=to_felt(max_fee),
            chain_id=to_felt(chain_id),
        )

    logger.debug("Computed v%d invoke hash %s for sender %s",
                 version, short_hex(tx_hash), short_hex(to_felt(sender_address)))
    return tx_hash
