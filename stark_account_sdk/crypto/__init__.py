"""
Stark curve cryptography: Pedersen hashing and ECDSA signatures.
"""
from .pedersen import pedersen_hash, compute_hash_on_elements
from .signature import (
    sign, verify, private_to_stark_key, private_key_to_ec_point, generate_k_rfc6979
)

__all__ = [
    "pedersen_hash",
    "compute_hash_on_elements",
    "sign",
    "verify",
    "private_to_stark_key",
    "private_key_to_ec_point",
    "generate_k_rfc6979",
]
