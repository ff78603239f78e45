"""
Data models for the Stark Account SDK.
"""
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .felt import FeltLike, FieldElement, to_felt
from .utils import EXECUTE_ENTRY_POINT_NAME, get_selector_from_name

INVOKE_TRANSACTION_TYPE = "INVOKE"

# Serialises attaching signatures so one transaction is never signed twice
_SIGNATURE_LOCK = threading.Lock()


class Call(BaseModel):
    """A single contract call; several of them are batched into one invoke."""
    model_config = ConfigDict(frozen=True)

    contract_address: FieldElement
    selector: FieldElement
    calldata: Tuple[FieldElement, ...] = ()

    @classmethod
    def from_function_name(
        cls,
        contract_address: FeltLike,
        function_name: str,
        calldata: Sequence[FeltLike] = (),
    ) -> "Call":
        """Build a call whose selector is derived from the function name."""
        return cls(
            contract_address=contract_address,
            selector=get_selector_from_name(function_name),
            calldata=tuple(calldata),
        )


@dataclass(frozen=True)
class Signature:
    """
    Stark ECDSA signature.

    Both components are non-zero; a zero component means signing failed.
    """
    r: FieldElement
    s: FieldElement

    def __post_init__(self):
        object.__setattr__(self, "r", to_felt(self.r))
        object.__setattr__(self, "s", to_felt(self.s))
        if not self.r or not self.s:
            raise ValueError("Signature components must be non-zero")

    def __iter__(self):
        yield self.r
        yield self.s

    def to_hex(self) -> List[str]:
        return [self.r.to_hex(), self.s.to_hex()]


class InvokeTransaction(BaseModel):
    """
    Invoke transaction in its wire form.

    All fields are fixed at construction; the signature starts out empty and
    can be attached exactly once.
    """
    model_config = ConfigDict(validate_assignment=True)

    sender_address: FieldElement
    calldata: Tuple[FieldElement, ...]
    nonce: FieldElement
    max_fee: FieldElement
    version: int = 1
    type: Literal["INVOKE"] = INVOKE_TRANSACTION_TYPE
    signature: Optional[Signature] = None
    # Hash the signature was produced over; informational, never sent
    transaction_hash: Optional[FieldElement] = Field(default=None, exclude=True)

    def __setattr__(self, name: str, value: Any) -> None:
        if name != "signature":
            raise AttributeError(f"InvokeTransaction.{name} cannot be changed after construction")
        with _SIGNATURE_LOCK:
            if self.signature is not None:
                raise ValueError("Transaction is already signed")
            super().__setattr__(name, value)

    def attach_signature(self, signature: Signature) -> None:
        """
        Attach the signature.

        Raises:
            ValueError: If a signature is already present
        """
        self.signature = signature

    @property
    def is_signed(self) -> bool:
        return self.signature is not None

    def to_wire(self) -> Dict[str, Any]:
        """
        Render the transaction as the JSON object providers expect.

        Raises:
            ValueError: If the transaction has not been signed
        """
        if self.signature is None:
            raise ValueError("Cannot serialise an unsigned transaction")

        wire: Dict[str, Any] = {
            "type": self.type,
            "calldata": [item.to_hex() for item in self.calldata],
            "max_fee": self.max_fee.to_hex(),
            "version": hex(self.version),
            "signature": self.signature.to_hex(),
        }
        if self.version == 0:
            wire["contract_address"] = self.sender_address.to_hex()
            wire["entry_point_selector"] = get_selector_from_name(EXECUTE_ENTRY_POINT_NAME).to_hex()
        else:
            wire["sender_address"] = self.sender_address.to_hex()
            wire["nonce"] = self.nonce.to_hex()
        return wire


class AddInvokeTransactionResponse(BaseModel):
    """Provider acknowledgement of a submitted invoke transaction"""
    transaction_hash: FieldElement
