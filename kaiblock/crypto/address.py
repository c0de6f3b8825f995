"""
Addresses
Human-readable account identifiers derived from public keys.

Three formats are supported:
- BASE58: Base58Check(0x00 || first 20 bytes of sha256(pubkey)), Bitcoin style
- HEX_CHECKSUM: 0x + last 20 bytes, letters upper-cased by a sha256 mask
- HEX: 0x + last 20 bytes, lowercase, no checksum

A 0x-prefixed string of mixed case is read as HEX_CHECKSUM; single-case
0x strings are read as plain HEX.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from kaiblock.crypto.encoding import BASE58_ALPHABET, b58check_decode, b58check_encode
from kaiblock.crypto.hash256 import Hash256
from kaiblock.crypto.hashing import sha256
from kaiblock.crypto.signatures import PublicKey
from kaiblock.schemas.errors import AddressException


ADDRESS_DATA_SIZE = 20
MAINNET_VERSION = b"\x00"


class AddressType(str, Enum):
    """Address encoding formats."""
    BASE58 = "base58"
    HEX_CHECKSUM = "hex-checksum"
    HEX = "hex"

    @property
    def prefix(self) -> str:
        if self is AddressType.BASE58:
            return "1"
        return "0x"

    @classmethod
    def detect(cls, address: str) -> "AddressType | None":
        """Guess the format of an address string; None if unrecognised."""
        if address.startswith("0x"):
            body = address[2:]
            if len(body) == ADDRESS_DATA_SIZE * 2 and body.lower() != body and body.upper() != body:
                return cls.HEX_CHECKSUM
            return cls.HEX
        if address and all(c in BASE58_ALPHABET for c in address):
            return cls.BASE58
        return None


def _checksum_case(hex_lower: str) -> str:
    mask = sha256(hex_lower.encode("ascii")).digest
    out = []
    for i, c in enumerate(hex_lower):
        if c.isalpha() and mask[i // 2] & (0x80 if i % 2 == 0 else 0x08):
            out.append(c.upper())
        else:
            out.append(c)
    return "".join(out)


@dataclass(frozen=True)
class Address:
    """
    A parsed or derived address.

    Attributes:
        address_type: Encoding format
        data: Raw address bytes (20 bytes; no version byte or checksum)
        encoded: The string form
    """
    address_type: AddressType
    data: bytes
    encoded: str

    @classmethod
    def from_public_key(
        cls,
        public_key: Union[PublicKey, bytes],
        address_type: AddressType = AddressType.BASE58,
    ) -> "Address":
        key_bytes = public_key.to_bytes() if isinstance(public_key, PublicKey) else bytes(public_key)
        return cls.from_hash(sha256(key_bytes), address_type)

    @classmethod
    def from_hash(cls, digest: Hash256, address_type: AddressType = AddressType.BASE58) -> "Address":
        address_type = AddressType(address_type)
        if address_type is AddressType.BASE58:
            data = digest.digest[:ADDRESS_DATA_SIZE]
            return cls(address_type, data, b58check_encode(data, MAINNET_VERSION))

        data = digest.digest[-ADDRESS_DATA_SIZE:]
        hex_lower = data.hex()
        if address_type is AddressType.HEX_CHECKSUM:
            return cls(address_type, data, "0x" + _checksum_case(hex_lower))
        return cls(address_type, data, "0x" + hex_lower)

    @classmethod
    def parse(cls, address: str) -> "Address":
        """
        Parse and validate an address string.

        Raises:
            AddressException: If the format is unknown or the checksum fails
        """
        address_type = AddressType.detect(address)
        if address_type is None:
            raise AddressException("Unknown address format", address=address)

        if address_type is AddressType.BASE58:
            version, data = b58check_decode(address)
            if version != MAINNET_VERSION or len(data) != ADDRESS_DATA_SIZE:
                raise AddressException("Invalid Base58 address payload", address=address)
            return cls(address_type, data, address)

        body = address[2:]
        try:
            data = bytes.fromhex(body)
        except ValueError as e:
            raise AddressException(f"Invalid hex address: {e}", address=address) from e

        if address_type is AddressType.HEX_CHECKSUM:
            if _checksum_case(body.lower()) != body:
                raise AddressException("Invalid address checksum", address=address)
        elif len(data) != ADDRESS_DATA_SIZE:
            raise AddressException(
                f"Hex address must be {ADDRESS_DATA_SIZE} bytes, got {len(data)}",
                address=address,
            )
        return cls(address_type, data, address)

    @classmethod
    def validate(cls, address: str) -> AddressType:
        """Return the address type, raising AddressException if invalid."""
        return cls.parse(address).address_type

    def __str__(self) -> str:
        return self.encoded


__all__ = [
    "AddressType",
    "Address",
]
