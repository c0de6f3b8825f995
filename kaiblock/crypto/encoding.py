"""
Base58 Encoding
Bitcoin-style Base58 and Base58Check encoding used for address strings.

Base58Check layout: version byte || payload || first 4 bytes of
double_sha256(version || payload).
"""
from __future__ import annotations

from kaiblock.crypto.hashing import double_sha256
from kaiblock.schemas.errors import AddressException


BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE58_INDEX = {c: i for i, c in enumerate(BASE58_ALPHABET)}

CHECKSUM_SIZE = 4


def b58encode(data: bytes) -> str:
    """Encode bytes as Base58; each leading zero byte becomes a '1'."""
    num = int.from_bytes(data, "big")
    encoded = ""
    while num > 0:
        num, rem = divmod(num, 58)
        encoded = BASE58_ALPHABET[rem] + encoded
    pad = len(data) - len(data.lstrip(b"\x00"))
    return "1" * pad + encoded


def b58decode(text: str) -> bytes:
    """
    Decode a Base58 string.

    Raises:
        AddressException: If the string contains a non-Base58 character
    """
    num = 0
    for char in text:
        digit = _BASE58_INDEX.get(char)
        if digit is None:
            raise AddressException(f"Invalid Base58 character: {char!r}", address=text)
        num = num * 58 + digit
    pad = len(text) - len(text.lstrip("1"))
    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    return b"\x00" * pad + body


def checksum(payload: bytes) -> bytes:
    """First four bytes of the double SHA-256 of payload."""
    return double_sha256(payload).digest[:CHECKSUM_SIZE]


def b58check_encode(payload: bytes, version: bytes = b"\x00") -> str:
    versioned = version + payload
    return b58encode(versioned + checksum(versioned))


def b58check_decode(text: str) -> tuple[bytes, bytes]:
    """
    Decode a Base58Check string into (version byte, payload).

    Raises:
        AddressException: On bad characters, short input or checksum mismatch
    """
    raw = b58decode(text)
    if len(raw) < CHECKSUM_SIZE + 1:
        raise AddressException("Base58Check string too short", address=text)
    versioned, check = raw[:-CHECKSUM_SIZE], raw[-CHECKSUM_SIZE:]
    if checksum(versioned) != check:
        raise AddressException("Invalid Base58Check checksum", address=text)
    return versioned[:1], versioned[1:]


__all__ = [
    "BASE58_ALPHABET",
    "b58encode",
    "b58decode",
    "b58check_encode",
    "b58check_decode",
    "checksum",
]
