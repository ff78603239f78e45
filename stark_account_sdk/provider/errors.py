"""
Classification of provider rejection messages.

Nodes report why a transaction was refused as free text. The messages are
matched against one ordered rule table and turned into typed exceptions;
anything the table does not know is surfaced unchanged.
"""
import re
from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple, Type

from ..exceptions import ClassHashNotFound, InvalidContractClass, SubmissionRejected


class ProviderErrorCategory(str, Enum):
    """Known reasons a provider rejects a submitted transaction."""
    UNCLASSIFIED = "UNCLASSIFIED"
    INVALID_CONTRACT_CLASS = "INVALID_CONTRACT_CLASS"
    CLASS_HASH_NOT_FOUND = "CLASS_HASH_NOT_FOUND"
    CLASS_ALREADY_DECLARED = "CLASS_ALREADY_DECLARED"
    INVALID_TRANSACTION_NONCE = "INVALID_TRANSACTION_NONCE"
    INSUFFICIENT_MAX_FEE = "INSUFFICIENT_MAX_FEE"
    INSUFFICIENT_ACCOUNT_BALANCE = "INSUFFICIENT_ACCOUNT_BALANCE"
    VALIDATION_FAILURE = "VALIDATION_FAILURE"
    DUPLICATE_TX = "DUPLICATE_TX"


class MatchKind(str, Enum):
    EXACT = "EXACT"
    PREFIX = "PREFIX"


class ErrorRule(NamedTuple):
    category: ProviderErrorCategory
    kind: MatchKind
    pattern: str


# Checked in order; the first match wins
ERROR_RULES: Tuple[ErrorRule, ...] = (
    ErrorRule(ProviderErrorCategory.INVALID_CONTRACT_CLASS, MatchKind.PREFIX, "invalid contract class"),
    ErrorRule(ProviderErrorCategory.CLASS_HASH_NOT_FOUND, MatchKind.PREFIX, "class hash not found"),
    ErrorRule(ProviderErrorCategory.CLASS_ALREADY_DECLARED, MatchKind.PREFIX, "class already declared"),
    ErrorRule(ProviderErrorCategory.INVALID_TRANSACTION_NONCE, MatchKind.PREFIX, "invalid transaction nonce"),
    ErrorRule(ProviderErrorCategory.INSUFFICIENT_MAX_FEE, MatchKind.PREFIX, "max fee is smaller than the minimal transaction cost"),
    ErrorRule(ProviderErrorCategory.INSUFFICIENT_MAX_FEE, MatchKind.EXACT, "insufficient max fee"),
    ErrorRule(ProviderErrorCategory.INSUFFICIENT_ACCOUNT_BALANCE, MatchKind.PREFIX, "account balance is smaller than the transaction's max_fee"),
    ErrorRule(ProviderErrorCategory.INSUFFICIENT_ACCOUNT_BALANCE, MatchKind.EXACT, "insufficient account balance"),
    ErrorRule(ProviderErrorCategory.VALIDATION_FAILURE, MatchKind.PREFIX, "account validation failed"),
    ErrorRule(ProviderErrorCategory.DUPLICATE_TX, MatchKind.PREFIX, "a transaction with the same hash already exists"),
)

_CATEGORY_EXCEPTIONS: Dict[ProviderErrorCategory, Type[SubmissionRejected]] = {
    ProviderErrorCategory.INVALID_CONTRACT_CLASS: InvalidContractClass,
    ProviderErrorCategory.CLASS_HASH_NOT_FOUND: ClassHashNotFound,
}

# JSON-RPC errors are often rendered as "<code>: <message>"
_CODE_PREFIX = re.compile(r"^-?\d+\s*:\s*")


def _normalise(message: str) -> str:
    text = message.strip()
    text = _CODE_PREFIX.sub("", text, count=1)
    return text.strip().casefold()


def match_category(message: Optional[str]) -> ProviderErrorCategory:
    """Return the category of a provider message, or UNCLASSIFIED."""
    if not message:
        return ProviderErrorCategory.UNCLASSIFIED
    text = _normalise(message)
    for rule in ERROR_RULES:
        pattern = rule.pattern.casefold()
        if rule.kind is MatchKind.EXACT and text == pattern:
            return rule.category
        if rule.kind is MatchKind.PREFIX and text.startswith(pattern):
            return rule.category
    return ProviderErrorCategory.UNCLASSIFIED


def classify_submission_error(message: str) -> SubmissionRejected:
    """
    Build the exception to raise for a rejected submission.

    The raw message is kept verbatim on the exception whatever the category.
    """
    category = match_category(message)
    exc_class = _CATEGORY_EXCEPTIONS.get(category, SubmissionRejected)
    return exc_class(message, category)
