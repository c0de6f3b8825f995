"""
Schemas

Error taxonomy shared by the rest of the library.
Wire formats live in kaiblock.schemas.proof (imported on demand because
they depend on kaiblock.crypto).
"""

from .errors import (
    ErrorCodes,
    KaiblockError,
    KaiblockException,
    EmptyInputException,
    IndexOutOfRangeException,
    InvalidHashException,
    InvalidKeyException,
    InvalidSignatureException,
    AddressException,
    SerializationException,
    MerkleVerificationException,
)

__all__ = [
    "ErrorCodes",
    "KaiblockError",
    "KaiblockException",
    "EmptyInputException",
    "IndexOutOfRangeException",
    "InvalidHashException",
    "InvalidKeyException",
    "InvalidSignatureException",
    "AddressException",
    "SerializationException",
    "MerkleVerificationException",
]
