"""
Common test fixtures shared by all modules.

Provides factory functions for:
- item lists and leaf hashes
- MerkleTree instances
- deterministic Ed25519 keypairs
- tampered copies of MerkleProof objects
"""

from dataclasses import replace
from typing import Optional, Sequence

from kaiblock.crypto.hash256 import Hash256
from kaiblock.crypto.hashing import sha256
from kaiblock.crypto.signatures import Keypair
from kaiblock.merkle import MerkleProof, MerkleTree, ProofStep, Side


# RFC 8032 section 7.1, TEST 1 (empty message)
RFC8032_SECRET_HEX = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
RFC8032_PUBLIC_HEX = "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
RFC8032_EMPTY_SIGNATURE_HEX = (
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555"
    "fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)


# =============================================================================
# Items and Trees
# =============================================================================

def make_items(count: int, prefix: str = "item") -> list[bytes]:
    """Create `count` distinct byte items: b"item0", b"item1", ..."""
    return [f"{prefix}{i}".encode() for i in range(count)]


def make_leaves(count: int, prefix: str = "item") -> list[Hash256]:
    """Leaf hashes for make_items(count, prefix)."""
    return [sha256(item) for item in make_items(count, prefix)]


def make_tree(items: Optional[Sequence[bytes]] = None, count: int = 5) -> MerkleTree:
    """Build a MerkleTree from items, or from make_items(count)."""
    return MerkleTree(items if items is not None else make_items(count))


# =============================================================================
# Keys
# =============================================================================

def make_keypair(secret_hex: str = RFC8032_SECRET_HEX) -> Keypair:
    """Create a deterministic keypair from a hex-encoded secret."""
    return Keypair.from_private_hex(secret_hex)


# =============================================================================
# Tampering
# =============================================================================

def flip_byte(digest: Hash256, position: int = 0) -> Hash256:
    """Return digest with one byte XOR-ed with 0x01."""
    data = bytearray(digest.digest)
    data[position] ^= 0x01
    return Hash256(bytes(data))


def flip_side(side: Side) -> Side:
    return Side.RIGHT if side is Side.LEFT else Side.LEFT


def tamper_proof(
    proof: MerkleProof,
    *,
    leaf: bool = False,
    sibling: Optional[int] = None,
    side: Optional[int] = None,
    index: Optional[int] = None,
) -> MerkleProof:
    """
    Return a copy of proof with one field corrupted.

    Args:
        leaf: Flip a byte of the leaf hash
        sibling: Flip a byte of the sibling hash at this level
        side: Flip the side flag at this level
        index: Replace the leaf index
    """
    steps = list(proof.siblings)
    if sibling is not None:
        step = steps[sibling]
        steps[sibling] = ProofStep(hash=flip_byte(step.hash), side=step.side)
    if side is not None:
        step = steps[side]
        steps[side] = ProofStep(hash=step.hash, side=flip_side(step.side))

    return replace(
        proof,
        leaf_hash=flip_byte(proof.leaf_hash) if leaf else proof.leaf_hash,
        leaf_index=proof.leaf_index if index is None else index,
        siblings=tuple(steps),
    )
