"""
Hash256 Value Type
A fixed-size 32-byte digest used everywhere a hash is passed around.

This module provides:
- Hash256: immutable, hashable, ordered wrapper over exactly 32 bytes
- Lowercase fixed-width hex encoding (64 chars, no prefix) and decoding
- Integer conversion and leading-zero-bit counting for difficulty checks

Ordering compares the raw bytes, which for a fixed width is the same as
comparing the big-endian integers, so `digest <= target` works directly.
"""
from __future__ import annotations

from dataclasses import dataclass

from kaiblock.schemas.errors import InvalidHashException


HASH_SIZE = 32
HASH_BITS = HASH_SIZE * 8
HEX_LENGTH = HASH_SIZE * 2


@dataclass(frozen=True, order=True)
class Hash256:
    """
    A 256-bit hash value.

    Attributes:
        digest: The raw 32 bytes

    Example:
        >>> h = Hash256.from_hex("00" * 31 + "01")
        >>> h.leading_zero_bits()
        255
    """
    digest: bytes

    def __post_init__(self) -> None:
        """Validate and normalize the backing bytes."""
        if isinstance(self.digest, (bytearray, memoryview)):
            object.__setattr__(self, "digest", bytes(self.digest))
        if not isinstance(self.digest, bytes):
            raise InvalidHashException(
                f"Hash256 requires bytes, got {type(self.digest).__name__}"
            )
        if len(self.digest) != HASH_SIZE:
            raise InvalidHashException(
                f"Expected {HASH_SIZE} bytes, got {len(self.digest)}",
                details={"length": len(self.digest)},
            )

    # -- construction -------------------------------------------------------

    @classmethod
    def from_bytes(cls, data: bytes) -> "Hash256":
        """Create a hash from exactly 32 bytes."""
        return cls(data)

    @classmethod
    def from_hex(cls, hex_string: str) -> "Hash256":
        """
        Decode a 64-character hex string (optional 0x prefix, any case).

        Raises:
            InvalidHashException: On wrong length or non-hex characters
        """
        if not isinstance(hex_string, str):
            raise InvalidHashException(
                f"Expected hex string, got {type(hex_string).__name__}"
            )
        hex_content = hex_string[2:] if hex_string.startswith(("0x", "0X")) else hex_string
        if len(hex_content) != HEX_LENGTH:
            raise InvalidHashException(
                f"Hex hash must be {HEX_LENGTH} characters, got {len(hex_content)}",
                details={"length": len(hex_content)},
            )
        try:
            return cls(bytes.fromhex(hex_content))
        except ValueError as e:
            raise InvalidHashException(f"Invalid hex characters in hash: {e}") from e

    @classmethod
    def from_int(cls, value: int) -> "Hash256":
        """Create a hash from a non-negative integer below 2**256 (big-endian)."""
        if value < 0 or value >= 1 << HASH_BITS:
            raise InvalidHashException(
                f"Integer out of range for a 256-bit hash: {value}"
            )
        return cls(value.to_bytes(HASH_SIZE, "big"))

    @classmethod
    def zero(cls) -> "Hash256":
        """The all-zero hash."""
        return cls(bytes(HASH_SIZE))

    # -- conversion ---------------------------------------------------------

    def to_hex(self) -> str:
        """Lowercase hex, exactly 64 characters, no prefix."""
        return self.digest.hex()

    def to_hex_prefixed(self) -> str:
        return "0x" + self.to_hex()

    def to_int(self) -> int:
        return int.from_bytes(self.digest, "big")

    def is_zero(self) -> bool:
        return not any(self.digest)

    def leading_zero_bits(self) -> int:
        """Count zero bits from the most significant bit; 256 for the zero hash."""
        return HASH_BITS - self.to_int().bit_length()

    def __bytes__(self) -> bytes:
        return self.digest

    def __len__(self) -> int:
        return HASH_SIZE

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"Hash256({self.to_hex()})"


__all__ = [
    "HASH_SIZE",
    "HASH_BITS",
    "Hash256",
]
