"""
Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: tree built once from an ordered list of items
- MerkleProof: detached inclusion proof (ProofStep / Side per level)
- merkle_parent: the hash-combination rule
- verify_merkle_proof: static verification against a root

Commitment Rules:
1. Leaf hashing: sha256(item)
2. Parent hashing: double_sha256(left || right)
3. Padding: the last node of an odd-sized level is paired with itself
4. Empty input: EmptyInputException
5. Single leaf: root = leaf

Usage:
    from kaiblock.merkle import MerkleTree, verify_merkle_proof

    tree = MerkleTree([b"tx1", b"tx2", b"tx3"])
    proof = tree.generate_proof(2)
    assert verify_merkle_proof(proof, tree.root)
"""
from .merkle_tree import (
    Side,
    ProofStep,
    MerkleProof,
    MerkleTree,
    merkle_parent,
    compute_tree_height,
    verify_merkle_proof,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
    proof_to_dict,
    proof_from_dict,
    proof_to_json,
    proof_from_json,
)


__all__ = [
    # Core types
    "Side",
    "ProofStep",
    "MerkleProof",
    "MerkleTree",
    # Core functions
    "merkle_parent",
    "compute_tree_height",
    "verify_merkle_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
    # Serialization
    "proof_to_dict",
    "proof_from_dict",
    "proof_to_json",
    "proof_from_json",
]
