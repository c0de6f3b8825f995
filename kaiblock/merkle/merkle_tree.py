"""
Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification.

This module provides:
- merkle_parent: the single hash-combination rule for two child nodes
- MerkleTree: level-by-level node storage built once from ordered items
- MerkleProof / ProofStep / Side: detached inclusion proofs
- verify_merkle_proof: static verification against a known root

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(item)
2. Parent hashing: parent = double_sha256(left || right)
3. Padding rule: the last node of an odd-sized level is paired with itself
4. Empty input: rejected with EmptyInputException
5. Single leaf: root = leaf (no combination levels)

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf order is the caller's item order; this module never sorts leaves
- Levels are stored as tuples and never mutated after construction, so a
  tree (and every proof it hands out) can be shared across threads
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from kaiblock.crypto.hash256 import Hash256
from kaiblock.crypto.hashing import hash_concat, sha256
from kaiblock.schemas.errors import EmptyInputException, IndexOutOfRangeException


logger = logging.getLogger(__name__)


class Side(str, Enum):
    """Which operand the sibling is when re-hashing upward."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ProofStep:
    """
    One level of an inclusion proof.

    Attributes:
        hash: The sibling node hash at this level
        side: Side.RIGHT if the sibling is the right operand, Side.LEFT otherwise
    """
    hash: Hash256
    side: Side

    def __post_init__(self) -> None:
        object.__setattr__(self, "side", Side(self.side))


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf in a Merkle tree.

    The proof allows verification that a leaf is included in a tree
    with a known root, without access to the rest of the tree. It owns
    all of its hashes and keeps no reference to the tree that made it.

    Attributes:
        leaf_hash: The leaf hash being proven
        leaf_index: The 0-based index of the leaf in the original item list
        siblings: Sibling steps ordered from the leaf level up to the root
        root: The Merkle root at the time the proof was generated
    """
    leaf_hash: Hash256
    leaf_index: int
    siblings: tuple[ProofStep, ...]
    root: Hash256

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.leaf_index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.leaf_index}")
        if not isinstance(self.siblings, tuple):
            object.__setattr__(self, "siblings", tuple(self.siblings))

    @property
    def height(self) -> int:
        return len(self.siblings)

    def verify(self, expected_root: Hash256 | None = None) -> bool:
        """Verify against expected_root, or against the recorded root if omitted."""
        return verify_merkle_proof(self, self.root if expected_root is None else expected_root)


def merkle_parent(left: Hash256, right: Hash256) -> Hash256:
    """
    Compute the parent hash of two child nodes.

    Parent hash is deterministic: double_sha256(left || right).
    Order matters: merkle_parent(a, b) != merkle_parent(b, a) in general.

    Args:
        left: Left child hash
        right: Right child hash

    Returns:
        Parent Hash256
    """
    return hash_concat(left, right)


def compute_tree_height(leaf_count: int) -> int:
    """
    Number of combination levels above the leaves.

    Equals ceil(log2(leaf_count)) and is the length of every proof:
    0 for one leaf, 1 for two, 2 for three or four, 3 for five to eight.
    """
    if leaf_count <= 1:
        return 0
    return (leaf_count - 1).bit_length()


def _next_level(level: Sequence[Hash256]) -> tuple[Hash256, ...]:
    parents = []
    for i in range(0, len(level), 2):
        left = level[i]
        right = level[i + 1] if i + 1 < len(level) else left
        parents.append(merkle_parent(left, right))
    return tuple(parents)


def _sides_match_index(proof: MerkleProof) -> bool:
    index = proof.leaf_index
    for step in proof.siblings:
        expected = Side.RIGHT if index % 2 == 0 else Side.LEFT
        if step.side is not expected:
            return False
        index //= 2
    return index == 0


def verify_merkle_proof(proof: MerkleProof, expected_root: Hash256) -> bool:
    """
    Verify a Merkle proof against a root.

    Algorithm:
    1. Start with the leaf hash
    2. For each step (bottom-up):
       - sibling on the right: hash = parent(hash, sibling)
       - sibling on the left:  hash = parent(sibling, hash)
    3. Check the computed root equals expected_root

    The recorded sides must also agree with the bits of leaf_index, and the
    index must fit in the proof height. Honest proofs always do; the check
    catches flipped sides at self-paired levels and forged indices.

    Args:
        proof: MerkleProof to verify
        expected_root: The root the verifier trusts

    Returns:
        True if the proof is valid, False otherwise. Never raises for
        mistyped input; it is simply not a valid proof.
    """
    if not isinstance(proof, MerkleProof) or not isinstance(expected_root, Hash256):
        return False
    if not isinstance(proof.leaf_hash, Hash256):
        return False
    if not all(isinstance(step, ProofStep) and isinstance(step.hash, Hash256) for step in proof.siblings):
        return False
    if not _sides_match_index(proof):
        return False

    current = proof.leaf_hash
    for step in proof.siblings:
        if step.side is Side.RIGHT:
            current = merkle_parent(current, step.hash)
        else:
            current = merkle_parent(step.hash, current)

    return current == expected_root


class MerkleTree:
    """
    Binary hash tree over an ordered list of items.

    Every level is kept as a tuple of node hashes; level 0 holds the leaves
    and the last level holds only the root. Parent/child relations are pure
    index arithmetic (parent = i // 2, children = 2k, 2k + 1).

    Example:
        >>> tree = MerkleTree([b"apple", b"banana", b"cherry"])
        >>> proof = tree.generate_proof(1)
        >>> MerkleTree.verify_proof(proof, tree.root)
        True
    """

    def __init__(self, items: Iterable[bytes]) -> None:
        """
        Build the tree from raw items (each hashed with sha256).

        Raises:
            EmptyInputException: If items is empty
        """
        leaves = tuple(sha256(bytes(item)) for item in items)
        self._levels = self._build_levels(leaves)

    @classmethod
    def build(cls, items: Iterable[bytes]) -> "MerkleTree":
        """Alias for the constructor."""
        return cls(items)

    @classmethod
    def from_leaves(cls, leaves: Iterable[Hash256]) -> "MerkleTree":
        """
        Build a tree from leaf hashes computed elsewhere.

        Raises:
            EmptyInputException: If leaves is empty
            TypeError: If any leaf is not a Hash256
        """
        leaf_tuple = tuple(leaves)
        for leaf in leaf_tuple:
            if not isinstance(leaf, Hash256):
                raise TypeError(f"Leaves must be Hash256, got {type(leaf).__name__}")
        tree = cls.__new__(cls)
        tree._levels = cls._build_levels(leaf_tuple)
        return tree

    @staticmethod
    def _build_levels(leaves: tuple[Hash256, ...]) -> tuple[tuple[Hash256, ...], ...]:
        if not leaves:
            raise EmptyInputException()

        levels = [leaves]
        while len(levels[-1]) > 1:
            levels.append(_next_level(levels[-1]))

        logger.debug(
            "Built Merkle tree: %d leaves, height %d, root %s",
            len(leaves), len(levels) - 1, levels[-1][0].to_hex(),
        )
        return tuple(levels)

    # -- accessors ----------------------------------------------------------

    @property
    def root(self) -> Hash256:
        return self._levels[-1][0]

    def root_hash(self) -> Hash256:
        return self.root

    @property
    def leaves(self) -> tuple[Hash256, ...]:
        return self._levels[0]

    @property
    def levels(self) -> tuple[tuple[Hash256, ...], ...]:
        return self._levels

    @property
    def leaf_count(self) -> int:
        return len(self._levels[0])

    @property
    def height(self) -> int:
        return len(self._levels) - 1

    def __len__(self) -> int:
        return self.leaf_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MerkleTree):
            return NotImplemented
        return self._levels == other._levels

    def __hash__(self) -> int:
        return hash(self._levels)

    def __repr__(self) -> str:
        return f"MerkleTree(leaves={self.leaf_count}, root={self.root.to_hex()})"

    # -- proofs -------------------------------------------------------------

    def generate_proof(self, index: int) -> MerkleProof:
        """
        Generate a Merkle proof for the leaf at the given index.

        Algorithm:
        1. Start at the target leaf index
        2. At each level below the root:
           - The sibling is index ^ 1, or the node itself when it is the
             unpaired last node of an odd-sized level
           - Even index: sibling is on the right; odd index: on the left
           - Move up: index = index // 2

        Args:
            index: 0-based index of the leaf to prove

        Returns:
            MerkleProof with leaf, index, siblings (bottom-up), and root

        Raises:
            IndexOutOfRangeException: If index is out of range
        """
        if index < 0 or index >= self.leaf_count:
            raise IndexOutOfRangeException(index, self.leaf_count)

        steps: list[ProofStep] = []
        current = index
        for level in self._levels[:-1]:
            if current % 2 == 0:
                sibling = current + 1 if current + 1 < len(level) else current
                side = Side.RIGHT
            else:
                sibling = current - 1
                side = Side.LEFT
            steps.append(ProofStep(hash=level[sibling], side=side))
            current //= 2

        return MerkleProof(
            leaf_hash=self.leaves[index],
            leaf_index=index,
            siblings=tuple(steps),
            root=self.root,
        )

    def index_of(self, item: bytes) -> int:
        """
        Index of the first leaf whose item hashes like item.

        Raises:
            IndexOutOfRangeException: If no leaf matches
        """
        target = sha256(bytes(item))
        try:
            return self.leaves.index(target)
        except ValueError:
            raise IndexOutOfRangeException(
                -1, self.leaf_count, details={"leaf_hash": target.to_hex()}
            ) from None

    def proof_for_item(self, item: bytes) -> MerkleProof:
        """Generate a proof for the first occurrence of item."""
        return self.generate_proof(self.index_of(item))

    @staticmethod
    def verify_proof(proof: MerkleProof, expected_root: Hash256) -> bool:
        """Static verification; see verify_merkle_proof()."""
        return verify_merkle_proof(proof, expected_root)


__all__ = [
    "Side",
    "ProofStep",
    "MerkleProof",
    "MerkleTree",
    "merkle_parent",
    "compute_tree_height",
    "verify_merkle_proof",
]
