"""
Hashing Utilities
SHA-256 primitives producing Hash256 values.

This module provides:
- sha256 / hash_bytes: single SHA-256 of raw bytes
- double_sha256: sha256(sha256(data)), used for Merkle nodes, PoW and checksums
- hash_combine: single SHA-256 over several chunks fed in order
- hash_concat: double SHA-256 over left || right (the Merkle parent rule)
- to_hex / from_hex: 0x-prefixed hex helpers for arbitrary byte strings

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Iterable

from kaiblock.crypto.hash256 import Hash256


def sha256(data: bytes) -> Hash256:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        Hash256 digest

    Example:
        >>> sha256(b"hello world").to_hex()
        'b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9'
    """
    return Hash256(hashlib.sha256(data).digest())


def hash_bytes(data: bytes) -> Hash256:
    """Alias for sha256()."""
    return sha256(data)


def double_sha256(data: bytes) -> Hash256:
    """
    Compute SHA-256 applied twice: sha256(sha256(data)).

    Args:
        data: Raw bytes to hash

    Returns:
        Hash256 digest
    """
    first = hashlib.sha256(data).digest()
    return Hash256(hashlib.sha256(first).digest())


def hash_combine(chunks: Iterable[bytes]) -> Hash256:
    """
    Hash several byte chunks together as if concatenated.

    hash_combine([b"hello", b"world"]) == sha256(b"helloworld")
    """
    hasher = hashlib.sha256()
    for chunk in chunks:
        hasher.update(bytes(chunk))
    return Hash256(hasher.digest())


def hash_concat(left: Hash256, right: Hash256) -> Hash256:
    """
    Double-hash the concatenation of two hashes.

    parent = double_sha256(left || right)

    Args:
        left: Left operand
        right: Right operand

    Returns:
        Hash256 digest of the 64-byte concatenation
    """
    return double_sha256(left.digest + right.digest)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + bytes(data).hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string (0x prefix optional) to bytes.

    Raises:
        ValueError: If the string has odd length or contains invalid hex characters
    """
    hex_content = hex_string[2:] if hex_string.startswith(("0x", "0X")) else hex_string

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "sha256",
    "hash_bytes",
    "double_sha256",
    "hash_combine",
    "hash_concat",
    "to_hex",
    "from_hex",
]
