"""
Utility functions for the Stark Account SDK.
"""
from typing import Union

from eth_utils import keccak

from .felt import FieldElement

# starknet_keccak keeps the lower 250 bits of keccak256
MASK_250 = 2**250 - 1

DEFAULT_ENTRY_POINT_NAME = "__default__"
DEFAULT_L1_ENTRY_POINT_NAME = "__l1_default__"
EXECUTE_ENTRY_POINT_NAME = "__execute__"


def starknet_keccak(data: bytes) -> FieldElement:
    """
    Keccak256 of data truncated to 250 bits.

    Args:
        data: Raw bytes to hash

    Returns:
        FieldElement holding the truncated digest
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError(f"starknet_keccak expects bytes, got {type(data).__name__}")
    return FieldElement(int.from_bytes(keccak(bytes(data)), "big") & MASK_250)


def get_selector_from_name(function_name: str) -> FieldElement:
    """
    Compute the entry point selector of a contract function.

    The default entry points have selector 0.
    """
    if not isinstance(function_name, str) or not function_name:
        raise ValueError("Function name must be a non-empty string")
    if function_name in (DEFAULT_ENTRY_POINT_NAME, DEFAULT_L1_ENTRY_POINT_NAME):
        return FieldElement(0)
    return starknet_keccak(function_name.encode("ascii"))


def short_hex(value: Union[FieldElement, int], keep: int = 6) -> str:
    """Truncate a hex value for log output, e.g. 0x43784d…363e."""
    text = hex(int(value))
    if len(text) <= 2 * keep + 2:
        return text
    return f"{text[:keep + 2]}…{text[-keep + 2:]}"
