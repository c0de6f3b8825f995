"""
Merkle Proofs Convenience Wrappers
Thin wrappers around the core Merkle tree for a cleaner API, plus the
conversion between MerkleProof and its JSON wire form.

This module provides class-based interfaces:
- MerkleProver: Build trees and generate proofs from raw items
- MerkleVerifier: Verify proofs, optionally raising on failure

And serialization helpers:
- proof_to_dict / proof_from_dict
- proof_to_json / proof_from_json
"""
from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from pydantic import ValidationError

from kaiblock.crypto.hash256 import Hash256
from kaiblock.crypto.hashing import sha256
from kaiblock.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    ProofStep,
    Side,
    verify_merkle_proof,
)
from kaiblock.schemas.errors import MerkleVerificationException, SerializationException
from kaiblock.schemas.proof import MerkleProofSchema, ProofStepSchema


logger = logging.getLogger(__name__)


# =============================================================================
# Serialization
# =============================================================================

def proof_to_schema(proof: MerkleProof) -> MerkleProofSchema:
    return MerkleProofSchema(
        leaf_hash=proof.leaf_hash.to_hex(),
        leaf_index=proof.leaf_index,
        siblings=[
            ProofStepSchema(hash=step.hash.to_hex(), side=step.side.value)
            for step in proof.siblings
        ],
        root=proof.root.to_hex(),
    )


def proof_from_schema(schema: MerkleProofSchema) -> MerkleProof:
    return MerkleProof(
        leaf_hash=Hash256.from_hex(schema.leaf_hash),
        leaf_index=schema.leaf_index,
        siblings=tuple(
            ProofStep(hash=Hash256.from_hex(step.hash), side=Side(step.side))
            for step in schema.siblings
        ),
        root=Hash256.from_hex(schema.root),
    )


def proof_to_dict(proof: MerkleProof) -> dict[str, Any]:
    """
    Convert a proof to a JSON-compatible dict.

    Example:
        {"schema_version": "v1", "leaf_hash": "ab..", "leaf_index": 2,
         "siblings": [{"hash": "cd..", "side": "right"}], "root": "ef.."}
    """
    return proof_to_schema(proof).model_dump()


def proof_from_dict(data: dict[str, Any]) -> MerkleProof:
    """
    Rebuild a proof from proof_to_dict() output.

    Raises:
        SerializationException: If the data does not match the proof schema
    """
    try:
        schema = MerkleProofSchema.model_validate(data)
    except ValidationError as e:
        raise SerializationException(
            f"Invalid Merkle proof data: {e.error_count()} error(s)",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e
    return proof_from_schema(schema)


def proof_to_json(proof: MerkleProof, indent: int | None = 2) -> str:
    return json.dumps(proof_to_dict(proof), indent=indent)


def proof_from_json(text: str) -> MerkleProof:
    """
    Parse a proof from JSON text.

    Raises:
        SerializationException: On malformed JSON or schema mismatch
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SerializationException(f"Proof is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SerializationException("Proof JSON must be an object")
    return proof_from_dict(data)


# =============================================================================
# Convenience classes
# =============================================================================

class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Provides static methods for proof generation from:
    - Raw items (hashed with sha256)
    - Pre-hashed leaves (Hash256)

    Example:
        >>> proof = MerkleProver.prove([b"a", b"b", b"c"], index=1)
        >>> proof.leaf_hash == sha256(b"b")
        True
    """

    @staticmethod
    def prove(items: Sequence[bytes], index: int) -> MerkleProof:
        """
        Generate a Merkle proof for the item at the given index.

        Raises:
            EmptyInputException: If items is empty
            IndexOutOfRangeException: If index is out of range
        """
        return MerkleTree(items).generate_proof(index)

    @staticmethod
    def prove_leaf(leaves: Sequence[Hash256], index: int) -> MerkleProof:
        """Generate a proof from pre-hashed leaves."""
        return MerkleTree.from_leaves(leaves).generate_proof(index)

    @staticmethod
    def prove_all(items: Sequence[bytes]) -> list[MerkleProof]:
        """Proofs for every item, sharing one tree."""
        tree = MerkleTree(items)
        return [tree.generate_proof(i) for i in range(tree.leaf_count)]

    @staticmethod
    def compute_root(items: Sequence[bytes]) -> Hash256:
        return MerkleTree(items).root

    @staticmethod
    def compute_root_from_leaves(leaves: Sequence[Hash256]) -> Hash256:
        return MerkleTree.from_leaves(leaves).root


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> tree = MerkleTree([b"a", b"b"])
        >>> MerkleVerifier.verify(tree.generate_proof(0), tree.root)
        True
    """

    @staticmethod
    def verify(proof: MerkleProof, expected_root: Hash256) -> bool:
        return verify_merkle_proof(proof, expected_root)

    @staticmethod
    def verify_item(item: bytes, proof: MerkleProof, expected_root: Hash256) -> bool:
        """
        Verify that item itself (not just proof.leaf_hash) is in the tree.

        The item is hashed and must match the proof's leaf hash.
        """
        if sha256(bytes(item)) != proof.leaf_hash:
            return False
        return verify_merkle_proof(proof, expected_root)

    @staticmethod
    def require(proof: MerkleProof, expected_root: Hash256) -> None:
        """
        Verify a proof, raising when it does not hold.

        Raises:
            MerkleVerificationException: If the proof is invalid
        """
        if not verify_merkle_proof(proof, expected_root):
            logger.warning(
                "Merkle proof rejected for leaf %d against root %s",
                proof.leaf_index, expected_root.to_hex(),
            )
            raise MerkleVerificationException(
                "Merkle proof does not reproduce the expected root",
                leaf_index=proof.leaf_index,
                details={"expected_root": expected_root.to_hex()},
            )


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
    "proof_to_schema",
    "proof_from_schema",
    "proof_to_dict",
    "proof_from_dict",
    "proof_to_json",
    "proof_from_json",
]
