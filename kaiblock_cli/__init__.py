"""
kaiblock CLI

Command-line interface for kaiblock hashing, Merkle proofs, proof-of-work,
keys and addresses.

Usage:
    python -m kaiblock_cli hash "hello" --double
    python -m kaiblock_cli merkle root a b c
    python -m kaiblock_cli merkle prove --index 2 a b c --out proof.json
    python -m kaiblock_cli merkle verify proof.json --root <HEX>
    python -m kaiblock_cli pow mine "header" --bits 12
    python -m kaiblock_cli keys generate
    python -m kaiblock_cli address --pubkey <HEX>
"""

__version__ = "0.1.0"
