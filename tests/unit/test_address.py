"""
Address Tests
Tests for kaiblock/crypto/address.py
"""
import pytest

from kaiblock.crypto.address import Address, AddressType
from kaiblock.crypto.encoding import b58check_decode
from kaiblock.crypto.hashing import sha256
from kaiblock.schemas.errors import AddressException


def _recase_one_letter(encoded: str) -> str:
    """Change the case of one letter while keeping the body mixed-case."""
    body = encoded[2:]
    lowers = [i for i, c in enumerate(body) if c.isalpha() and c.islower()]
    uppers = [i for i, c in enumerate(body) if c.isalpha() and c.isupper()]
    if len(lowers) >= 2 and uppers:
        i = lowers[0]
        return "0x" + body[:i] + body[i].upper() + body[i + 1:]
    if len(uppers) >= 2 and lowers:
        i = uppers[0]
        return "0x" + body[:i] + body[i].lower() + body[i + 1:]
    pytest.skip("address has too few letters to recase")


class TestAddressType:
    """Tests for format detection."""

    def test_prefixes(self):
        """Base58 addresses start with 1; hex ones with 0x."""
        assert AddressType.BASE58.prefix == "1"
        assert AddressType.HEX.prefix == "0x"
        assert AddressType.HEX_CHECKSUM.prefix == "0x"

    def test_detect(self):
        """detect classifies by prefix and case."""
        assert AddressType.detect("1111111111111111111114oLvT2") is AddressType.BASE58
        assert AddressType.detect("0x" + "ab" * 20) is AddressType.HEX
        assert AddressType.detect("0x" + "AB" * 20) is AddressType.HEX
        assert AddressType.detect("0x" + "aB" * 20) is AddressType.HEX_CHECKSUM
        assert AddressType.detect("not-an-address!") is None
        assert AddressType.detect("") is None

    def test_values(self):
        """Enum values are the names used in configuration."""
        assert AddressType("hex-checksum") is AddressType.HEX_CHECKSUM


class TestBase58Address:
    """Tests for Base58Check addresses."""

    def test_derivation(self, keypair):
        """Payload is the first 20 bytes of sha256(pubkey) under version 0."""
        address = Address.from_public_key(keypair.public_key)
        digest = sha256(keypair.public_key.to_bytes())

        assert address.address_type is AddressType.BASE58
        assert address.data == digest.digest[:20]
        assert address.encoded.startswith("1")
        assert b58check_decode(address.encoded) == (b"\x00", digest.digest[:20])

    def test_parse_round_trip(self, keypair):
        """parse returns the same address."""
        address = Address.from_public_key(keypair.public_key)
        assert Address.parse(address.encoded) == address
        assert Address.validate(str(address)) is AddressType.BASE58

    def test_raw_bytes_key(self, keypair):
        """Raw public key bytes are accepted."""
        assert Address.from_public_key(keypair.public_key.to_bytes()) == Address.from_public_key(keypair.public_key)

    def test_corrupted_checksum(self, keypair):
        """A changed character is detected."""
        encoded = Address.from_public_key(keypair.public_key).encoded
        replacement = "2" if encoded[-1] != "2" else "3"
        with pytest.raises(AddressException):
            Address.parse(encoded[:-1] + replacement)

    def test_wrong_version(self):
        """Only version 0 is accepted."""
        from kaiblock.crypto.encoding import b58check_encode
        with pytest.raises(AddressException):
            Address.parse(b58check_encode(bytes(20), version=b"\x05"))


class TestHexChecksumAddress:
    """Tests for mixed-case checksum addresses."""

    def test_derivation(self, keypair):
        """Payload is the last 20 bytes of sha256(pubkey)."""
        address = Address.from_public_key(keypair.public_key, AddressType.HEX_CHECKSUM)
        digest = sha256(keypair.public_key.to_bytes())

        assert address.data == digest.digest[-20:]
        assert address.encoded.lower() == "0x" + digest.digest[-20:].hex()
        assert len(address.encoded) == 42

    def test_parse_round_trip(self, keypair):
        """A derived checksum address validates."""
        address = Address.from_public_key(keypair.public_key, AddressType.HEX_CHECKSUM)
        assert Address.parse(address.encoded).data == address.data

    def test_wrong_case_rejected(self, keypair):
        """Changing the case of a letter breaks the checksum."""
        encoded = Address.from_public_key(keypair.public_key, AddressType.HEX_CHECKSUM).encoded
        if AddressType.detect(encoded) is not AddressType.HEX_CHECKSUM:
            pytest.skip("derived address happens to be single-case")
        with pytest.raises(AddressException, match="checksum"):
            Address.parse(_recase_one_letter(encoded))


class TestHexAddress:
    """Tests for plain hex addresses."""

    def test_derivation(self, keypair):
        """Plain hex is 0x plus the last 20 bytes, lowercase."""
        address = Address.from_public_key(keypair.public_key, AddressType.HEX)
        digest = sha256(keypair.public_key.to_bytes())
        assert address.encoded == "0x" + digest.digest[-20:].hex()

    def test_parse(self):
        """Plain lowercase hex parses."""
        address = Address.parse("0x" + "00" * 20)
        assert address.address_type is AddressType.HEX
        assert address.data == bytes(20)

    def test_wrong_length(self):
        """Plain hex must be 20 bytes."""
        with pytest.raises(AddressException):
            Address.parse("0x" + "00" * 19)

    def test_bad_hex(self):
        """Non-hex characters are rejected."""
        with pytest.raises(AddressException):
            Address.parse("0x" + "zz" * 20)

    def test_unknown_format(self):
        """Strings in no known format are rejected."""
        with pytest.raises(AddressException) as exc_info:
            Address.validate("???")
        assert exc_info.value.details["address"] == "???"
