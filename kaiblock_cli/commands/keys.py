"""
CLI Key Commands

Generate Ed25519 keypairs, sign messages and verify signatures.

Usage:
    kaiblock keys generate [--out key.json]
    kaiblock keys sign --key <PRIVATE_HEX> "<message>"
    kaiblock keys verify --pubkey <HEX> --signature <HEX> "<message>"
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path

from kaiblock.crypto.signatures import Keypair, PublicKey, Signature
from kaiblock.schemas.errors import KaiblockException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def keys_generate_cmd(args: Namespace) -> int:
    """Handle `keys generate`."""
    keypair = Keypair.generate()
    data = json.dumps(keypair.to_dict(), indent=2)

    if args.out:
        out_path = Path(args.out)
        if out_path.exists():
            print(f"Error: Key file already exists: {out_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        out_path.write_text(data + "\n")
        print(f"Keypair written to: {out_path}")
        print(f"public_key: {keypair.export_public_key()}")
    else:
        print(data)
    return EXIT_SUCCESS


def keys_sign_cmd(args: Namespace) -> int:
    """Handle `keys sign`."""
    try:
        keypair = Keypair.from_private_hex(args.key)
    except KaiblockException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    signature = keypair.sign(args.message.encode("utf-8"))

    if args.json:
        print(json.dumps({
            "public_key": keypair.export_public_key(),
            "signature": signature.to_hex(),
        }, indent=2))
    else:
        print(signature.to_hex())
    return EXIT_SUCCESS


def keys_verify_cmd(args: Namespace) -> int:
    """Handle `keys verify`; exit 2 when the signature does not match."""
    try:
        public_key = PublicKey.from_hex(args.pubkey)
        signature = Signature.from_hex(args.signature)
    except KaiblockException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    valid = public_key.verify(args.message.encode("utf-8"), signature)

    if args.json:
        print(json.dumps({"valid": valid, "public_key": public_key.to_hex()}, indent=2))
    else:
        print(f"valid: {str(valid).lower()}")
    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
