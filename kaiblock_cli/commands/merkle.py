"""
CLI Merkle Commands

Build a Merkle root, produce an inclusion proof, or check a proof offline.

Usage:
    kaiblock merkle root a b c [--json]
    kaiblock merkle prove --index 2 a b c [--out proof.json]
    kaiblock merkle verify proof.json --root <HEX> [--json]

Items given on the command line are UTF-8 encoded; with --file, each
non-empty line of the file is one item.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from kaiblock.crypto.hash256 import Hash256
from kaiblock.merkle import (
    MerkleTree,
    MerkleVerifier,
    proof_from_json,
    proof_to_dict,
    proof_to_json,
)
from kaiblock.schemas.errors import KaiblockException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def load_items(args: Namespace) -> list[bytes]:
    """Collect items from --file (one per line) or positional arguments."""
    if getattr(args, "file", None):
        lines = Path(args.file).read_text(encoding="utf-8").splitlines()
        return [line.encode("utf-8") for line in lines if line]
    return [item.encode("utf-8") for item in (args.items or [])]


def merkle_root_cmd(args: Namespace) -> int:
    """Handle `merkle root`."""
    items = load_items(args)
    try:
        tree = MerkleTree(items)
    except KaiblockException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps({
            "leaf_count": tree.leaf_count,
            "height": tree.height,
            "root": tree.root.to_hex(),
        }, indent=2))
    else:
        print(tree.root.to_hex())
    return EXIT_SUCCESS


def merkle_prove_cmd(args: Namespace) -> int:
    """Handle `merkle prove`."""
    items = load_items(args)
    try:
        tree = MerkleTree(items)
        proof = tree.generate_proof(args.index)
    except KaiblockException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    proof_json = proof_to_json(proof)
    if args.out:
        out_path = Path(args.out)
        out_path.write_text(proof_json + "\n")
        logger.info("Wrote proof for leaf %d to %s", args.index, out_path)
        print(f"Proof written to: {out_path}")
        print(f"root: {tree.root.to_hex()}")
    else:
        print(proof_json)
    return EXIT_SUCCESS


def merkle_verify_cmd(args: Namespace) -> int:
    """Handle `merkle verify`."""
    proof_path = Path(args.proof)
    if not proof_path.exists():
        print(f"Error: Proof file not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        proof = proof_from_json(proof_path.read_text())
        expected_root = Hash256.from_hex(args.root)
    except KaiblockException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    valid = MerkleVerifier.verify(proof, expected_root)

    if args.json:
        print(json.dumps({
            "valid": valid,
            "leaf_index": proof.leaf_index,
            "root": expected_root.to_hex(),
            "proof": proof_to_dict(proof),
        }, indent=2))
    else:
        print(f"leaf_index: {proof.leaf_index}")
        print(f"root: {expected_root.to_hex()}")
        print(f"valid: {str(valid).lower()}")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
