"""
Node providers.
"""
from .base import Provider
from .errors import ProviderErrorCategory, classify_submission_error
from .rpc import RpcProvider
from .stub import StubProvider

__all__ = [
    "Provider",
    "ProviderErrorCategory",
    "RpcProvider",
    "StubProvider",
    "classify_submission_error",
]
