"""
Exceptions for the Stark Account SDK.
"""
from typing import Optional


class StarkAccountError(Exception):
    """Base exception for all SDK errors."""
    pass


class InvalidFieldEncoding(StarkAccountError, ValueError):
    """Raised when a hex/decimal literal or byte string is not a valid field element."""
    pass


class CalldataFormatError(StarkAccountError, ValueError):
    """Raised when a call list cannot be flattened into calldata."""
    pass


class UnsupportedTransactionVersion(StarkAccountError, ValueError):
    """Raised when a transaction version has no known hash layout."""

    def __init__(self, version: int):
        self.version = version
        super().__init__(f"Unsupported invoke transaction version: {version}")


class KeyNotFound(StarkAccountError):
    """Raised when the keystore holds no key for an identifier."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"No key registered for identifier {identifier!r}")


class KeystoreCorrupted(StarkAccountError, ValueError):
    """Raised when a keystore file cannot be parsed; the file is left untouched."""
    pass


class SigningError(StarkAccountError):
    """Base exception for signature failures."""
    pass


class InvalidKeyRange(SigningError, ValueError):
    """Raised when a private key is zero or not below the curve order."""
    pass


class InvalidHashRange(SigningError, ValueError):
    """Raised when a message hash cannot be signed."""
    pass


class ProviderError(StarkAccountError):
    """Base exception for errors reported by, or while talking to, a provider."""
    pass


class ProviderConnectionError(ProviderError):
    """Raised when the provider endpoint cannot be reached."""
    pass


class ChainIdResolutionFailed(ProviderError):
    """Raised when the chain id cannot be fetched from the provider."""
    pass


class SubmissionRejected(ProviderError):
    """
    Raised when the provider reports the network refused a transaction.

    Attributes:
        category: ProviderErrorCategory the raw message was classified as
        raw_message: Provider message, unmodified
    """

    def __init__(self, raw_message: str, category: Optional["ProviderErrorCategory"] = None):
        # Imported here to avoid a cycle with the provider package
        from .provider.errors import ProviderErrorCategory

        self.raw_message = raw_message
        self.category = category or ProviderErrorCategory.UNCLASSIFIED
        super().__init__(raw_message)


class InvalidContractClass(SubmissionRejected):
    """The submitted contract class is invalid."""
    pass


class ClassHashNotFound(SubmissionRejected):
    """The referenced class hash is not declared on the network."""
    pass
