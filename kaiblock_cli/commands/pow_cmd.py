"""
CLI Proof-of-Work Commands

Usage:
    kaiblock pow mine "<header>" [--bits N] [--max-nonce N] [--json]
    kaiblock pow target --bits N
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from kaiblock.consensus import ProofOfWork, target_from_difficulty, target_to_compact


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def pow_mine_cmd(args: Namespace) -> int:
    """Handle `pow mine`; bits and max nonce fall back to the CLI config."""
    config = args.cli_config
    bits = args.bits if args.bits is not None else config.difficulty_bits
    max_nonce = args.max_nonce if args.max_nonce is not None else config.max_nonce

    try:
        miner = ProofOfWork(difficulty_bits=bits, max_nonce=max_nonce)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    solution = miner.mine(args.header.encode("utf-8"))
    if solution is None:
        print(
            f"Error: no nonce below {max_nonce} meets {bits} bits of difficulty",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps({
            **miner.get_info(),
            "nonce": solution.nonce,
            "hash": solution.hash.to_hex(),
            "attempts": solution.attempts,
            "elapsed": solution.elapsed,
        }, indent=2))
    else:
        print(f"nonce: {solution.nonce}")
        print(f"hash: {solution.hash.to_hex()}")
        print(f"attempts: {solution.attempts}")
        print(f"elapsed: {solution.elapsed:.3f}s")
    return EXIT_SUCCESS


def pow_target_cmd(args: Namespace) -> int:
    """Handle `pow target`."""
    try:
        target = target_from_difficulty(args.bits)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    compact = target_to_compact(target)
    if getattr(args, "json", False):
        print(json.dumps({
            "bits": args.bits,
            "target": target.to_hex(),
            "compact": f"0x{compact:08x}",
        }, indent=2))
    else:
        print(f"target: {target.to_hex()}")
        print(f"compact: 0x{compact:08x}")
    return EXIT_SUCCESS
