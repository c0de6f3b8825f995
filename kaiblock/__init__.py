"""
kaiblock - blockchain crypto primitives.

Merkle trees with detached inclusion proofs, a 32-byte Hash256 value type,
difficulty targets and proof-of-work, Ed25519 signatures and addresses.

Usage:
    from kaiblock import MerkleTree, verify_merkle_proof

    tree = MerkleTree([b"a", b"b", b"c"])
    assert verify_merkle_proof(tree.generate_proof(0), tree.root)
"""

__version__ = "0.1.0"

from kaiblock.crypto import Hash256, sha256, double_sha256
from kaiblock.merkle import MerkleProof, MerkleTree, merkle_parent, verify_merkle_proof

__all__ = [
    "__version__",
    "Hash256",
    "sha256",
    "double_sha256",
    "MerkleProof",
    "MerkleTree",
    "merkle_parent",
    "verify_merkle_proof",
]
