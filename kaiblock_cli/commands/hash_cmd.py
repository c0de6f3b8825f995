"""
CLI Hash Command

Hash a string or a file with SHA-256 (or double SHA-256).

Usage:
    kaiblock hash "hello" [--double] [--json]
    kaiblock hash --file data.bin
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path

from kaiblock.crypto.hashing import double_sha256, sha256


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def read_input(args: Namespace) -> tuple[str, bytes]:
    """Return a label and the bytes to hash from --file or the text argument."""
    if args.file:
        path = Path(args.file)
        return str(path), path.read_bytes()
    return args.text, args.text.encode("utf-8")


def hash_cmd(args: Namespace) -> int:
    """Handle hash command."""
    if not args.file and args.text is None:
        print("Error: provide TEXT or --file PATH", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    source, data = read_input(args)
    algorithm = "double_sha256" if args.double else "sha256"
    digest = double_sha256(data) if args.double else sha256(data)

    if args.json:
        print(json.dumps({
            "input": source,
            "algorithm": algorithm,
            "hash": digest.to_hex(),
        }, indent=2))
    else:
        print(digest.to_hex())

    return EXIT_SUCCESS
