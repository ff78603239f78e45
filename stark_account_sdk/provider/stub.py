"""
In-memory provider for offline use and tests.
"""
import logging
import threading
from typing import List, Optional

from ..crypto.pedersen import compute_hash_on_elements
from ..models import AddInvokeTransactionResponse, InvokeTransaction
from .base import Provider
from .errors import classify_submission_error

logger = logging.getLogger(__name__)


class StubProvider(Provider):
    """
    Provider that never touches the network.

    It answers chain id queries with a fixed name and records every
    submitted transaction. Setting reject_with makes submissions fail as if
    the node had returned that message.
    """

    def __init__(self, chain_id: str = "SN_GOERLI", reject_with: Optional[str] = None):
        self._chain_id = chain_id
        self.reject_with = reject_with
        self.chain_id_calls = 0
        self.submitted: List[InvokeTransaction] = []
        self._lock = threading.Lock()

    def chain_id(self) -> str:
        with self._lock:
            self.chain_id_calls += 1
        return self._chain_id

    def add_invoke_transaction(self, transaction: InvokeTransaction) -> AddInvokeTransactionResponse:
        # Same precondition as a real node: the wire form needs a signature
        transaction.to_wire()

        if self.reject_with is not None:
            logger.debug("Stub provider rejecting transaction: %s", self.reject_with)
            raise classify_submission_error(self.reject_with)

        with self._lock:
            self.submitted.append(transaction)

        tx_hash = transaction.transaction_hash
        if tx_hash is None:
            tx_hash = compute_hash_on_elements(list(transaction.signature))
        return AddInvokeTransactionResponse(transaction_hash=tx_hash)
