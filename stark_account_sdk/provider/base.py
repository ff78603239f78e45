"""
Provider interface used by Account.
"""
from abc import ABC, abstractmethod

from ..models import AddInvokeTransactionResponse, InvokeTransaction


class Provider(ABC):
    """
    Abstract base class for node access.

    Account only needs two capabilities from a node: the chain id it runs
    and a way to broadcast a signed invoke transaction.
    """

    @abstractmethod
    def chain_id(self) -> str:
        """
        Return the chain id name, e.g. "SN_MAIN".

        Raises:
            ProviderError: If the node cannot answer
        """
        pass

    @abstractmethod
    def add_invoke_transaction(self, transaction: InvokeTransaction) -> AddInvokeTransactionResponse:
        """
        Submit a signed invoke transaction.

        Raises:
            SubmissionRejected: If the network refused the transaction
            ProviderConnectionError: If the node cannot be reached
        """
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
