"""
Ed25519 Signature Tests
Tests for kaiblock/crypto/signatures.py
"""
import pytest

from kaiblock.crypto.signatures import (
    Keypair,
    PrivateKey,
    PublicKey,
    Signature,
    generate_keypair,
    sign,
    verify,
)
from kaiblock.schemas.errors import (
    InvalidKeyException,
    InvalidSignatureException,
    SerializationException,
)

from fixtures.common import (
    RFC8032_EMPTY_SIGNATURE_HEX,
    RFC8032_PUBLIC_HEX,
    RFC8032_SECRET_HEX,
    make_keypair,
)


class TestKnownAnswer:
    """RFC 8032 test vector 1."""

    def test_public_key_derivation(self, keypair):
        """The secret derives the published public key."""
        assert keypair.export_public_key() == RFC8032_PUBLIC_HEX

    def test_signature_of_empty_message(self, keypair):
        """Signing b"" gives the published signature."""
        assert keypair.sign(b"").to_hex() == RFC8032_EMPTY_SIGNATURE_HEX

    def test_published_signature_verifies(self):
        """The published signature verifies under the published key."""
        public_key = PublicKey.from_hex(RFC8032_PUBLIC_HEX)
        signature = Signature.from_hex(RFC8032_EMPTY_SIGNATURE_HEX)
        assert public_key.verify(b"", signature)


class TestSignVerify:
    """Tests for signing and verification."""

    def test_round_trip(self):
        """A fresh keypair verifies its own signatures."""
        kp = generate_keypair()
        sig = kp.sign(b"payload")
        assert kp.verify(b"payload", sig)
        assert verify(kp.public_key, b"payload", sig)

    def test_module_sign(self, keypair):
        """sign() matches PrivateKey.sign."""
        assert sign(keypair.private_key, b"m") == keypair.sign(b"m")

    def test_tampered_message(self, keypair):
        """A changed message fails verification."""
        sig = keypair.sign(b"payload")
        assert not keypair.verify(b"payloaD", sig)

    def test_wrong_key(self, keypair):
        """Another key does not verify the signature."""
        sig = keypair.sign(b"payload")
        assert not Keypair.generate().verify(b"payload", sig)

    def test_tampered_signature(self, keypair):
        """A flipped signature bit fails verification."""
        raw = bytearray(keypair.sign(b"payload").to_bytes())
        raw[0] ^= 0x01
        assert not keypair.verify(b"payload", Signature(bytes(raw)))

    def test_deterministic(self, keypair):
        """Ed25519 signatures are deterministic."""
        assert keypair.sign(b"x") == keypair.sign(b"x")


class TestKeyEncoding:
    """Tests for key and signature parsing."""

    def test_private_key_round_trip(self, keypair):
        """Exported private key hex restores the same keypair."""
        restored = Keypair.from_private_hex(keypair.export_private_key())
        assert restored == keypair
        assert restored.public_key == keypair.public_key

    def test_prefixed_hex(self):
        """0x-prefixed hex is accepted."""
        assert PrivateKey.from_hex("0x" + RFC8032_SECRET_HEX) == PrivateKey.from_hex(RFC8032_SECRET_HEX)
        assert PublicKey.from_hex(RFC8032_PUBLIC_HEX).to_hex_prefixed() == "0x" + RFC8032_PUBLIC_HEX

    @pytest.mark.parametrize("bad", ["", "abcd", "zz" * 32, "00" * 33])
    def test_bad_private_key(self, bad):
        """Malformed private keys raise InvalidKeyException."""
        with pytest.raises(InvalidKeyException):
            PrivateKey.from_hex(bad)

    def test_bad_public_key_length(self):
        """Public keys must be 32 bytes."""
        with pytest.raises(InvalidKeyException):
            PublicKey.from_bytes(b"\x01" * 31)

    def test_bad_signature_length(self):
        """Signatures must be 64 bytes."""
        with pytest.raises(InvalidSignatureException):
            Signature(b"\x00" * 63)
        with pytest.raises(InvalidSignatureException):
            Signature.from_hex("xyz")

    def test_private_key_repr_hidden(self, keypair):
        """repr never reveals the private key."""
        assert RFC8032_SECRET_HEX not in repr(keypair.private_key)
        assert RFC8032_SECRET_HEX not in repr(keypair)


class TestKeypairDict:
    """Tests for Keypair.to_dict / from_dict."""

    def test_round_trip(self, keypair):
        """to_dict output restores the keypair."""
        data = keypair.to_dict()
        assert data["scheme"] == "ed25519"
        assert Keypair.from_dict(data) == keypair

    def test_missing_private_key(self):
        """A dict without the private key is rejected."""
        with pytest.raises(SerializationException):
            Keypair.from_dict({"public_key_hex": RFC8032_PUBLIC_HEX})

    def test_mismatched_public_key(self, keypair):
        """A stored public key that does not match is rejected."""
        data = keypair.to_dict()
        data["public_key_hex"] = Keypair.generate().export_public_key()
        with pytest.raises(SerializationException):
            Keypair.from_dict(data)

    def test_hashable(self):
        """Equal keypairs hash equal."""
        assert hash(make_keypair()) == hash(make_keypair())
