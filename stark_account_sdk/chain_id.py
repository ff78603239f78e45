"""
Chain id encoding and per-account chain id caching.
"""
import logging
import threading
from enum import IntEnum
from typing import Callable, Optional, Union

from .exceptions import ChainIdResolutionFailed, InvalidFieldEncoding, ProviderError
from .felt import FieldElement, decode_short_string, encode_short_string

logger = logging.getLogger(__name__)


class StarknetChainId(IntEnum):
    """Well-known chain ids, as the felt encoding of their ASCII names"""
    SN_MAIN = 0x534E5F4D41494E
    SN_GOERLI = 0x534E5F474F45524C49
    SN_SEPOLIA = 0x534E5F5345504F4C4941


def chain_id_to_felt(identifier: Union[str, int, StarknetChainId, FieldElement]) -> FieldElement:
    """
    Convert a chain id identifier into the field element used in hashes.

    Known names come from StarknetChainId. A "0x" literal is taken as the
    encoded value itself; any other name (custom devnets) is encoded as a
    short string.

    Raises:
        InvalidFieldEncoding: If the identifier cannot be encoded
    """
    if isinstance(identifier, FieldElement):
        return identifier
    if isinstance(identifier, int) and not isinstance(identifier, bool):
        return FieldElement(int(identifier))
    if not isinstance(identifier, str) or not identifier.strip():
        raise InvalidFieldEncoding(f"Chain id must be a non-empty string, got {identifier!r}")

    name = identifier.strip()
    if name in StarknetChainId.__members__:
        return FieldElement(StarknetChainId[name].value)
    if name[:2].lower() == "0x":
        return FieldElement.from_hex(name)
    return encode_short_string(name)


def chain_id_to_name(chain_id: Union[FieldElement, int, str]) -> str:
    """
    Reverse of chain_id_to_felt for values reported by a node.

    Hex answers are decoded back into their ASCII name. Values that are not
    printable ASCII, or whose name would not encode back to the same felt
    (e.g. "0x1" as text, or surrounding spaces), are returned as hex.
    """
    if isinstance(chain_id, str):
        if chain_id[:2].lower() != "0x":
            return chain_id
        chain_id = FieldElement.from_hex(chain_id)
    felt = FieldElement(int(chain_id))
    try:
        name = decode_short_string(felt)
    except (InvalidFieldEncoding, UnicodeDecodeError):
        return felt.to_hex()
    if not name or not name.isprintable():
        return felt.to_hex()
    try:
        if chain_id_to_felt(name) != felt:
            return felt.to_hex()
    except InvalidFieldEncoding:
        return felt.to_hex()
    return name


class ChainIdCache:
    """
    Resolves a chain id once and remembers it.

    The resolver is called under a lock, so concurrent first calls make a
    single request. The value is stored only after a successful resolution;
    a failure leaves the cache empty and the next call tries again.
    """

    def __init__(self, resolver: Callable[[], str]):
        self._resolver = resolver
        self._lock = threading.Lock()
        self._value: Optional[FieldElement] = None

    @property
    def resolved(self) -> bool:
        return self._value is not None

    def get(self) -> FieldElement:
        """
        Return the cached chain id, resolving it on first use.

        Raises:
            ChainIdResolutionFailed: If the resolver fails or returns garbage
        """
        value = self._value
        if value is not None:
            return value

        with self._lock:
            if self._value is not None:
                return self._value
            try:
                identifier = self._resolver()
                resolved = chain_id_to_felt(identifier)
            except ChainIdResolutionFailed:
                raise
            except (ProviderError, InvalidFieldEncoding) as e:
                raise ChainIdResolutionFailed(f"Failed to resolve chain id: {e}") from e
            logger.debug("Resolved chain id %s", identifier)
            self._value = resolved
            return resolved
