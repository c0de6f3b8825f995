"""
Ed25519 Signatures
Key handling, signing and verification on top of the `cryptography` package.

This module provides:
- PrivateKey / PublicKey: 32-byte key wrappers with hex (de)serialization
- Signature: 64-byte signature value
- Keypair: a private key with its derived public key
- generate_keypair / sign / verify module-level helpers

verify() answers with a boolean and never raises for a signature that
simply does not match; malformed key or signature encodings raise.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from kaiblock.crypto.hashing import from_hex
from kaiblock.schemas.errors import (
    InvalidKeyException,
    InvalidSignatureException,
    SerializationException,
)


KEY_SIZE = 32
SIGNATURE_SIZE = 64
SCHEME = "ed25519"


def _decode_hex(hex_string: str, what: str, exc_cls: type) -> bytes:
    try:
        return from_hex(hex_string)
    except ValueError as e:
        raise exc_cls(f"Invalid hex for {what}: {e}") from e


@dataclass(frozen=True)
class Signature:
    """A detached Ed25519 signature."""
    signature: bytes
    scheme: str = SCHEME

    def __post_init__(self) -> None:
        if len(self.signature) != SIGNATURE_SIZE:
            raise InvalidSignatureException(
                f"Signature must be {SIGNATURE_SIZE} bytes, got {len(self.signature)}"
            )

    @classmethod
    def from_hex(cls, hex_string: str) -> "Signature":
        return cls(_decode_hex(hex_string, "signature", InvalidSignatureException))

    def to_bytes(self) -> bytes:
        return self.signature

    def to_hex(self) -> str:
        return self.signature.hex()

    def __str__(self) -> str:
        return self.to_hex()


class PublicKey:
    """Ed25519 verifying key."""

    def __init__(self, key: ed25519.Ed25519PublicKey) -> None:
        self._key = key

    @classmethod
    def from_bytes(cls, data: bytes) -> "PublicKey":
        if len(data) != KEY_SIZE:
            raise InvalidKeyException(
                f"Public key must be {KEY_SIZE} bytes, got {len(data)}"
            )
        try:
            return cls(ed25519.Ed25519PublicKey.from_public_bytes(bytes(data)))
        except ValueError as e:
            raise InvalidKeyException(f"Invalid public key: {e}") from e

    @classmethod
    def from_hex(cls, hex_string: str) -> "PublicKey":
        return cls.from_bytes(_decode_hex(hex_string, "public key", InvalidKeyException))

    def to_bytes(self) -> bytes:
        return self._key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def to_hex_prefixed(self) -> str:
        return "0x" + self.to_hex()

    def verify(self, message: bytes, signature: Signature) -> bool:
        """Return True if signature is a valid signature of message under this key."""
        try:
            self._key.verify(signature.to_bytes(), message)
        except InvalidSignature:
            return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"PublicKey({self.to_hex()})"


class PrivateKey:
    """Ed25519 signing key. repr() never shows the key material."""

    def __init__(self, key: ed25519.Ed25519PrivateKey) -> None:
        self._key = key

    @classmethod
    def generate(cls) -> "PrivateKey":
        return cls(ed25519.Ed25519PrivateKey.generate())

    @classmethod
    def from_bytes(cls, data: bytes) -> "PrivateKey":
        if len(data) != KEY_SIZE:
            raise InvalidKeyException(
                f"Private key must be {KEY_SIZE} bytes, got {len(data)}"
            )
        return cls(ed25519.Ed25519PrivateKey.from_private_bytes(bytes(data)))

    @classmethod
    def from_hex(cls, hex_string: str) -> "PrivateKey":
        return cls.from_bytes(_decode_hex(hex_string, "private key", InvalidKeyException))

    def to_bytes(self) -> bytes:
        return self._key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def to_hex_prefixed(self) -> str:
        return "0x" + self.to_hex()

    def public_key(self) -> PublicKey:
        return PublicKey(self._key.public_key())

    def sign(self, message: bytes) -> Signature:
        return Signature(self._key.sign(message))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrivateKey):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.public_key())

    def __repr__(self) -> str:
        return "PrivateKey([HIDDEN])"


class Keypair:
    """
    Ed25519 key pair for signing and verification.

    Example:
        >>> kp = Keypair.generate()
        >>> sig = kp.sign(b"payload")
        >>> kp.verify(b"payload", sig)
        True
    """

    def __init__(self, private_key: PrivateKey) -> None:
        self._private_key = private_key
        self._public_key = private_key.public_key()

    @classmethod
    def generate(cls) -> "Keypair":
        return cls(PrivateKey.generate())

    @classmethod
    def from_private_bytes(cls, data: bytes) -> "Keypair":
        return cls(PrivateKey.from_bytes(data))

    @classmethod
    def from_private_hex(cls, hex_string: str) -> "Keypair":
        return cls(PrivateKey.from_hex(hex_string))

    @property
    def private_key(self) -> PrivateKey:
        return self._private_key

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    def sign(self, message: bytes) -> Signature:
        return self._private_key.sign(message)

    def verify(self, message: bytes, signature: Signature) -> bool:
        return self._public_key.verify(message, signature)

    def export_private_key(self) -> str:
        return self._private_key.to_hex()

    def export_public_key(self) -> str:
        return self._public_key.to_hex()

    def to_dict(self) -> dict[str, str]:
        """Serializable form for storage (contains the private key)."""
        return {
            "scheme": SCHEME,
            "private_key_hex": self.export_private_key(),
            "public_key_hex": self.export_public_key(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Keypair":
        """
        Restore a keypair from to_dict() output.

        Raises:
            SerializationException: If fields are missing or the stored
                public key does not match the private key
        """
        try:
            keypair = cls.from_private_hex(data["private_key_hex"])
        except KeyError as e:
            raise SerializationException(f"Missing keypair field: {e}") from e
        stored_public = data.get("public_key_hex")
        if stored_public and stored_public.lower() != keypair.export_public_key():
            raise SerializationException("Stored public key does not match private key")
        return keypair

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Keypair):
            return NotImplemented
        return self._private_key == other._private_key

    def __hash__(self) -> int:
        return hash(self._public_key)

    def __repr__(self) -> str:
        return f"Keypair(public_key={self.export_public_key()})"


def generate_keypair() -> Keypair:
    """Generate a new random key pair from the OS CSPRNG."""
    return Keypair.generate()


def sign(private_key: PrivateKey, message: bytes) -> Signature:
    """Sign message with private_key."""
    return private_key.sign(message)


def verify(public_key: PublicKey, message: bytes, signature: Signature) -> bool:
    """Verify signature over message with public_key."""
    return public_key.verify(message, signature)


__all__ = [
    "KEY_SIZE",
    "SIGNATURE_SIZE",
    "Signature",
    "PublicKey",
    "PrivateKey",
    "Keypair",
    "generate_keypair",
    "sign",
    "verify",
]
