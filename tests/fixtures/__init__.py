"""
Test fixtures package for kaiblock tests.

This package provides factory functions for creating test objects:
- common.py: item lists, trees, keypairs and proof tampering helpers

Usage:
    from tests.fixtures import make_tree, tamper_proof

    def test_something():
        tree = make_tree([b"a", b"b", b"c"])
        bad = tamper_proof(tree.generate_proof(0), sibling=0)
"""

from .common import (
    RFC8032_SECRET_HEX,
    RFC8032_PUBLIC_HEX,
    RFC8032_EMPTY_SIGNATURE_HEX,
    make_items,
    make_leaves,
    make_tree,
    make_keypair,
    flip_byte,
    tamper_proof,
)

__all__ = [
    "RFC8032_SECRET_HEX",
    "RFC8032_PUBLIC_HEX",
    "RFC8032_EMPTY_SIGNATURE_HEX",
    "make_items",
    "make_leaves",
    "make_tree",
    "make_keypair",
    "flip_byte",
    "tamper_proof",
]
