"""
Core cryptographic utilities.

Hash256 value type, SHA-256 hashing, Ed25519 signatures, Base58 encoding
and address derivation.
"""
from .hash256 import (
    HASH_SIZE,
    HASH_BITS,
    Hash256,
)
from .hashing import (
    sha256,
    hash_bytes,
    double_sha256,
    hash_combine,
    hash_concat,
    to_hex,
    from_hex,
)
from .signatures import (
    Signature,
    PublicKey,
    PrivateKey,
    Keypair,
    generate_keypair,
    sign,
    verify,
)
from .address import (
    Address,
    AddressType,
)

__all__ = [
    "HASH_SIZE",
    "HASH_BITS",
    "Hash256",
    "sha256",
    "hash_bytes",
    "double_sha256",
    "hash_combine",
    "hash_concat",
    "to_hex",
    "from_hex",
    "Signature",
    "PublicKey",
    "PrivateKey",
    "Keypair",
    "generate_keypair",
    "sign",
    "verify",
    "Address",
    "AddressType",
]
