"""
Account - builds, signs and submits invoke transactions for one account.
"""
import logging
from typing import Iterable, List, Optional

from .calldata import CallLike, fmt_calldata
from .chain_id import ChainIdCache
from .exceptions import UnsupportedTransactionVersion
from .felt import FeltLike, FieldElement, to_felt
from .keystore import Keystore
from .models import AddInvokeTransactionResponse, InvokeTransaction, Signature
from .provider.base import Provider
from .transaction_hash import SUPPORTED_INVOKE_VERSIONS, compute_invoke_hash
from .utils import short_hex


class Account:
    """
    Client-side view of a deployed account contract.

    The account holds no key material itself. Signing is delegated to the
    keystore under public_key_identifier, and the network is reached only
    through the provider. The chain id is fetched from the provider on first
    use and cached for the lifetime of the account.

    Example:
        >>> keystore = MemKeystore()
        >>> keystore.put(address, private_key)
        >>> account = Account(RpcProvider(url), address, address, keystore)
        >>> account.execute([(token, "transfer", [recipient, 1, 0])], nonce=2, max_fee=10**15)
    """

    def __init__(
        self,
        provider: Provider,
        address: FeltLike,
        public_key_identifier: str,
        keystore: Keystore,
        version: int = 1,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the account.

        Args:
            provider: Node access used for the chain id and submissions
            address: Account contract address
            public_key_identifier: Keystore identifier of the signing key
            keystore: Keystore holding the signing key
            version: Default invoke transaction version (0 or 1)
            logger: Optional logger instance

        Raises:
            UnsupportedTransactionVersion: If version is neither 0 nor 1
            InvalidFieldEncoding: If address is not a valid field element
        """
        if isinstance(version, bool) or version not in SUPPORTED_INVOKE_VERSIONS:
            raise UnsupportedTransactionVersion(version)

        self.provider = provider
        self.address = to_felt(address)
        self.public_key_identifier = public_key_identifier
        self.keystore = keystore
        self.version = version
        self.logger = logger or logging.getLogger(__name__)
        self._chain_id = ChainIdCache(provider.chain_id)

    @property
    def chain_id(self) -> FieldElement:
        """
        Chain id field element, fetched from the provider on first access.

        Raises:
            ChainIdResolutionFailed: If the provider cannot supply it
        """
        return self._chain_id.get()

    def transaction_hash(
        self,
        calldata: Iterable[FeltLike],
        nonce: FeltLike,
        max_fee: FeltLike,
        sender_address: Optional[FeltLike] = None,
        version: Optional[int] = None,
    ) -> FieldElement:
        """
        Compute the hash of an invoke transaction on this account's chain.

        Args:
            calldata: Calldata already formatted with fmt_calldata
            nonce: Account nonce
            max_fee: Maximum fee
            sender_address: Defaults to the account address
            version: Defaults to the account version
        """
        return compute_invoke_hash(
            version=self.version if version is None else version,
            calldata=list(calldata),
            nonce=nonce,
            max_fee=max_fee,
            sender_address=self.address if sender_address is None else sender_address,
            chain_id=self.chain_id,
        )

    def sign(self, message_hash: FeltLike) -> Signature:
        """
        Sign a hash with the account key.

        Raises:
            KeyNotFound: If the keystore has no key for this account
            InvalidHashRange: If the hash is out of the signable range
        """
        return self.keystore.sign(self.public_key_identifier, message_hash)

    @staticmethod
    def fmt_calldata(calls: Iterable[CallLike]) -> List[FieldElement]:
        """Flatten calls into multicall calldata."""
        return fmt_calldata(calls)

    def build_and_sign_invoke(
        self,
        calls: Iterable[CallLike],
        nonce: FeltLike,
        max_fee: FeltLike,
        version: Optional[int] = None,
    ) -> InvokeTransaction:
        """
        Build a signed invoke transaction from a list of calls.

        The hash is always recomputed from the formatted calldata and stored
        on the returned transaction as transaction_hash.
        """
        version = self.version if version is None else version
        calldata = fmt_calldata(calls)
        tx_hash = self.transaction_hash(calldata, nonce, max_fee, version=version)
        signature = self.sign(tx_hash)

        transaction = InvokeTransaction(
            sender_address=self.address,
            calldata=tuple(calldata),
            nonce=nonce,
            max_fee=max_fee,
            version=version,
            transaction_hash=tx_hash,
        )
        transaction.attach_signature(signature)
        self.logger.debug("Signed v%d invoke %s from %s",
                          version, short_hex(tx_hash), short_hex(self.address))
        return transaction

    def add_invoke_transaction(self, transaction: InvokeTransaction) -> AddInvokeTransactionResponse:
        """
        Submit a signed transaction through the provider.

        Raises:
            ValueError: If the transaction carries no signature
            SubmissionRejected: If the network refused it
        """
        if not transaction.is_signed:
            raise ValueError("Cannot submit an unsigned transaction")
        response = self.provider.add_invoke_transaction(transaction)
        self.logger.info("Invoke transaction accepted: %s", short_hex(response.transaction_hash))
        return response

    def execute(
        self,
        calls: Iterable[CallLike],
        nonce: FeltLike,
        max_fee: FeltLike,
    ) -> AddInvokeTransactionResponse:
        """Build, sign and submit an invoke transaction in one step."""
        transaction = self.build_and_sign_invoke(calls, nonce, max_fee)
        return self.add_invoke_transaction(transaction)
