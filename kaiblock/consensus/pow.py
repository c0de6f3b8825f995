"""Hash chains and a small proof-of-work miner over Hash256 values."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional, Sequence

from kaiblock.consensus.difficulty import (
    compact_to_target,
    leading_zero_bits,
    meets_target,
    target_from_difficulty,
)
from kaiblock.crypto.hash256 import Hash256
from kaiblock.crypto.hashing import double_sha256, sha256
from kaiblock.merkle.merkle_tree import merkle_parent

logger = logging.getLogger(__name__)

NONCE_SIZE = 8


# ---------------------------------------------------------------------------
# Hash chains
# ---------------------------------------------------------------------------

def chain_hashes(items: Sequence[bytes], genesis: Optional[Hash256] = None) -> list[Hash256]:
    """Link each item to the one before it.

    link[i] = merkle_parent(link[i-1], sha256(items[i])), with link[-1] = genesis
    (the zero hash by default). An empty item list yields an empty chain.
    """
    previous = genesis if genesis is not None else Hash256.zero()
    links: list[Hash256] = []
    for item in items:
        previous = merkle_parent(previous, sha256(bytes(item)))
        links.append(previous)
    return links


def verify_chain(
    items: Sequence[bytes],
    links: Sequence[Hash256],
    genesis: Optional[Hash256] = None,
) -> bool:
    """Recompute the chain for items and compare it link by link."""
    if len(items) != len(links):
        return False
    return chain_hashes(items, genesis) == list(links)


# ---------------------------------------------------------------------------
# Proof-of-Work
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PowSolution:
    nonce: int
    hash: Hash256
    attempts: int
    elapsed: float

    @property
    def leading_zero_bits(self) -> int:
        return leading_zero_bits(self.hash)


class ProofOfWork:
    """Nonce search: find n with double_sha256(header || n) <= target.

    The nonce is appended as 8 little-endian bytes.
    """

    def __init__(
        self,
        difficulty_bits: int = 16,
        max_nonce: int = 2_000_000,
        target: Optional[Hash256] = None,
    ) -> None:
        """An explicit target overrides difficulty_bits."""
        if max_nonce <= 0:
            raise ValueError(f"max_nonce must be positive, got {max_nonce}")
        if target is None:
            target = target_from_difficulty(difficulty_bits)
        else:
            difficulty_bits = leading_zero_bits(target)
        self.difficulty_bits = difficulty_bits
        self.target = target
        self.max_nonce = max_nonce

    @classmethod
    def from_compact(cls, nbits: int, max_nonce: int = 2_000_000) -> "ProofOfWork":
        """Build a miner whose target comes from compact nBits."""
        return cls(max_nonce=max_nonce, target=compact_to_target(nbits))

    @staticmethod
    def pow_hash(header: bytes, nonce: int) -> Hash256:
        return double_sha256(bytes(header) + nonce.to_bytes(NONCE_SIZE, "little"))

    def verify(self, header: bytes, nonce: int) -> bool:
        if nonce < 0 or nonce >= 1 << (8 * NONCE_SIZE):
            return False
        return meets_target(self.pow_hash(header, nonce), self.target)

    def mine(self, header: bytes, start_nonce: int = 0) -> PowSolution | None:
        """Search nonces [start_nonce, max_nonce); None if none meets the target."""
        start = time.time()
        for nonce in range(start_nonce, self.max_nonce):
            digest = self.pow_hash(header, nonce)
            if meets_target(digest, self.target):
                elapsed = time.time() - start
                logger.info(
                    "PoW solved in %.3fs (nonce=%d, difficulty=%d bits, hash=%s)",
                    elapsed, nonce, self.difficulty_bits, digest.to_hex(),
                )
                return PowSolution(
                    nonce=nonce,
                    hash=digest,
                    attempts=nonce - start_nonce + 1,
                    elapsed=round(elapsed, 4),
                )
        logger.warning(
            "PoW search exhausted %d nonces without meeting target %s",
            max(self.max_nonce - start_nonce, 0), self.target.to_hex(),
        )
        return None

    def get_info(self) -> dict[str, object]:
        return {
            "difficulty_bits": self.difficulty_bits,
            "target": self.target.to_hex(),
            "max_nonce": self.max_nonce,
        }
