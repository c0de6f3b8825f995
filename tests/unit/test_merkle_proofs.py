"""
Merkle Proof Serialization and Convenience Class Tests
Tests for kaiblock/merkle/merkle_proofs.py and kaiblock/schemas/proof.py
"""
import json

import pytest
from pydantic import ValidationError

from kaiblock.crypto.hashing import sha256
from kaiblock.merkle import (
    MerkleProver,
    MerkleTree,
    MerkleVerifier,
    proof_from_dict,
    proof_from_json,
    proof_to_dict,
    proof_to_json,
    verify_merkle_proof,
)
from kaiblock.schemas.errors import (
    ErrorCodes,
    MerkleVerificationException,
    SerializationException,
)
from kaiblock.schemas.proof import PROOF_SCHEMA_VERSION, MerkleProofSchema

from fixtures.common import make_items, make_leaves, make_tree, tamper_proof


class TestProofSerialization:
    """Tests for the JSON wire form of proofs."""

    def test_dict_layout(self, abc_tree):
        """proof_to_dict produces hex strings and side names."""
        data = proof_to_dict(abc_tree.generate_proof(2))

        assert data["schema_version"] == PROOF_SCHEMA_VERSION
        assert data["leaf_index"] == 2
        assert data["leaf_hash"] == sha256(b"c").to_hex()
        assert data["root"] == abc_tree.root.to_hex()
        assert [s["side"] for s in data["siblings"]] == ["right", "left"]

    def test_json_round_trip_verifies(self):
        """A proof read back from JSON still verifies."""
        tree = make_tree(count=9)
        for index in (0, 4, 8):
            text = proof_to_json(tree.generate_proof(index))
            restored = proof_from_json(text)
            assert restored == tree.generate_proof(index)
            assert verify_merkle_proof(restored, tree.root)

    def test_json_is_plain_object(self):
        """proof_to_json output parses as a JSON object."""
        text = proof_to_json(make_tree().generate_proof(0), indent=None)
        assert isinstance(json.loads(text), dict)
        assert "\n" not in text

    def test_uppercase_and_prefixed_hex_accepted(self, abc_tree):
        """Hex in incoming data is normalized."""
        data = proof_to_dict(abc_tree.generate_proof(0))
        data["root"] = "0x" + data["root"].upper()
        proof = proof_from_dict(data)
        assert proof.root == abc_tree.root

    def test_bad_hash_rejected(self, abc_tree):
        """A malformed hash raises SerializationException."""
        data = proof_to_dict(abc_tree.generate_proof(0))
        data["siblings"][0]["hash"] = "abc"
        with pytest.raises(SerializationException) as exc_info:
            proof_from_dict(data)
        assert exc_info.value.code == ErrorCodes.SERIALIZATION_ERROR
        assert exc_info.value.details["errors"]

    def test_bad_side_rejected(self, abc_tree):
        """Only "left" and "right" are valid sides."""
        data = proof_to_dict(abc_tree.generate_proof(0))
        data["siblings"][0]["side"] = "up"
        with pytest.raises(SerializationException):
            proof_from_dict(data)

    def test_negative_index_rejected(self, abc_tree):
        """leaf_index must be non-negative."""
        data = proof_to_dict(abc_tree.generate_proof(0))
        data["leaf_index"] = -1
        with pytest.raises(SerializationException):
            proof_from_dict(data)

    def test_unknown_field_rejected(self, abc_tree):
        """Extra fields are not allowed."""
        data = proof_to_dict(abc_tree.generate_proof(0))
        data["extra"] = True
        with pytest.raises(SerializationException):
            proof_from_dict(data)

    def test_invalid_json(self):
        """Malformed JSON raises SerializationException."""
        with pytest.raises(SerializationException):
            proof_from_json("{not json")

    def test_json_array_rejected(self):
        """The top level must be an object."""
        with pytest.raises(SerializationException):
            proof_from_json("[]")

    def test_schema_model_is_frozen(self, abc_tree):
        """MerkleProofSchema instances are immutable."""
        schema = MerkleProofSchema.model_validate(proof_to_dict(abc_tree.generate_proof(1)))
        with pytest.raises(ValidationError):
            schema.leaf_index = 0


class TestMerkleProver:
    """Tests for MerkleProver convenience class."""

    def test_prove(self):
        """prove builds the tree and returns a proof for the index."""
        items = make_items(6)
        proof = MerkleProver.prove(items, 3)
        assert proof.leaf_index == 3
        assert proof.root == MerkleTree(items).root

    def test_prove_leaf(self):
        """prove_leaf works on precomputed leaf hashes."""
        leaves = make_leaves(4)
        proof = MerkleProver.prove_leaf(leaves, 1)
        assert proof.leaf_hash == leaves[1]
        assert verify_merkle_proof(proof, MerkleTree.from_leaves(leaves).root)

    def test_prove_all(self):
        """prove_all returns one valid proof per item."""
        items = make_items(7)
        proofs = MerkleProver.prove_all(items)
        root = MerkleProver.compute_root(items)
        assert len(proofs) == 7
        assert all(verify_merkle_proof(p, root) for p in proofs)

    def test_compute_root_from_leaves(self):
        """compute_root and compute_root_from_leaves agree."""
        assert MerkleProver.compute_root(make_items(5)) == MerkleProver.compute_root_from_leaves(make_leaves(5))


class TestMerkleVerifier:
    """Tests for MerkleVerifier convenience class."""

    def test_verify(self):
        """verify matches verify_merkle_proof."""
        tree = make_tree()
        proof = tree.generate_proof(2)
        assert MerkleVerifier.verify(proof, tree.root)
        assert not MerkleVerifier.verify(tamper_proof(proof, leaf=True), tree.root)

    def test_verify_item(self):
        """verify_item also checks the item hashes to the leaf."""
        items = make_items(4)
        tree = MerkleTree(items)
        proof = tree.generate_proof(1)
        assert MerkleVerifier.verify_item(items[1], proof, tree.root)
        assert not MerkleVerifier.verify_item(items[2], proof, tree.root)

    def test_require_passes(self):
        """require returns None for a valid proof."""
        tree = make_tree()
        assert MerkleVerifier.require(tree.generate_proof(0), tree.root) is None

    def test_require_raises(self):
        """require raises MerkleVerificationException for an invalid proof."""
        tree = make_tree()
        proof = tamper_proof(tree.generate_proof(0), sibling=0)
        with pytest.raises(MerkleVerificationException) as exc_info:
            MerkleVerifier.require(proof, tree.root)
        assert exc_info.value.code == ErrorCodes.MERKLE_PROOF_INVALID
