"""
Schemas - Proof Wire Format
File: proof.py

Purpose: JSON-compatible schema for Merkle inclusion proofs, so a proof can
be written to disk or sent to a third party and verified there.

Hashes travel as lowercase 64-character hex strings without prefix.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kaiblock.crypto.hash256 import Hash256


PROOF_SCHEMA_VERSION = "v1"


def _normalize_hash_hex(value: str) -> str:
    # Raises InvalidHashException (a ValueError) which pydantic reports
    return Hash256.from_hex(value).to_hex()


class ProofStepSchema(BaseModel):
    """One sibling entry of a serialized proof."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    hash: str = Field(..., description="Sibling hash, 64 hex chars")
    side: Literal["left", "right"] = Field(..., description="Side of the sibling")

    @field_validator("hash")
    @classmethod
    def _check_hash(cls, value: str) -> str:
        return _normalize_hash_hex(value)


class MerkleProofSchema(BaseModel):
    """
    Serialized Merkle inclusion proof.

    Mirrors kaiblock.merkle.MerkleProof field for field.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=PROOF_SCHEMA_VERSION)
    leaf_hash: str = Field(..., description="Leaf hash, 64 hex chars")
    leaf_index: int = Field(..., ge=0, description="0-based leaf index")
    siblings: list[ProofStepSchema] = Field(
        default_factory=list,
        description="Sibling steps from the leaf level up to the root",
    )
    root: str = Field(..., description="Root recorded when the proof was generated")

    @field_validator("leaf_hash", "root")
    @classmethod
    def _check_hash(cls, value: str) -> str:
        return _normalize_hash_hex(value)


__all__ = [
    "PROOF_SCHEMA_VERSION",
    "ProofStepSchema",
    "MerkleProofSchema",
]
