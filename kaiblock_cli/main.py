"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m kaiblock_cli hash "<text>" [--double] [--json]
    python -m kaiblock_cli merkle root ITEMS... [--file PATH] [--json]
    python -m kaiblock_cli merkle prove --index N ITEMS... [--out PROOF.json]
    python -m kaiblock_cli merkle verify PROOF.json --root HEX [--json]
    python -m kaiblock_cli pow mine "<header>" [--bits N] [--max-nonce N] [--json]
    python -m kaiblock_cli pow target --bits N
    python -m kaiblock_cli keys generate [--out FILE]
    python -m kaiblock_cli keys sign --key HEX "<message>"
    python -m kaiblock_cli keys verify --pubkey HEX --signature HEX "<message>"
    python -m kaiblock_cli address --pubkey HEX [--type base58|hex-checksum|hex]
    python -m kaiblock_cli address --validate ADDRESS
    python -m kaiblock_cli config --init

Environment Variables:
    KAIBLOCK_POW_DIFFICULTY_BITS    Default mining difficulty (default: 16)
    KAIBLOCK_POW_MAX_NONCE          Nonce search limit (default: 2000000)
    KAIBLOCK_ADDRESS_TYPE           Default address format (default: base58)
    KAIBLOCK_LOG_LEVEL              Log level (default: INFO)
    KAIBLOCK_LOG_FILE               Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from kaiblock_cli import __version__
from kaiblock_cli.commands import address, hash_cmd, keys, merkle, pow_cmd
from kaiblock_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

ADDRESS_TYPES = ["base58", "hex-checksum", "hex"]


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_item_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("items", nargs="*", help="Items (UTF-8 strings)")
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read items from a file, one per line",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="kaiblock",
        description="kaiblock CLI - Hash data, build and verify Merkle proofs, mine, and manage keys.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./kaiblock.json or ~/.config/kaiblock/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- hash command ---
    hash_parser = subparsers.add_parser(
        "hash",
        help="Hash a string or file",
        description="Print the SHA-256 (or double SHA-256) digest of the input.",
    )
    hash_parser.add_argument("text", nargs="?", default=None, help="Text to hash (UTF-8)")
    hash_parser.add_argument("--file", "-f", type=str, default=None, help="Hash a file instead")
    hash_parser.add_argument(
        "--double",
        action="store_true",
        default=False,
        help="Use double SHA-256",
    )
    hash_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    hash_parser.set_defaults(func=hash_cmd.hash_cmd)

    # --- merkle command ---
    merkle_parser = subparsers.add_parser(
        "merkle",
        help="Build Merkle roots and inclusion proofs",
        description="Compute roots, generate proofs and verify proofs offline.",
    )
    merkle_subparsers = merkle_parser.add_subparsers(dest="merkle_action", help="Merkle action")

    merkle_root = merkle_subparsers.add_parser("root", help="Compute the Merkle root of items")
    _add_item_arguments(merkle_root)
    merkle_root.add_argument("--json", action="store_true", help="JSON output")
    merkle_root.set_defaults(func=merkle.merkle_root_cmd)

    merkle_prove = merkle_subparsers.add_parser("prove", help="Generate an inclusion proof")
    _add_item_arguments(merkle_prove)
    merkle_prove.add_argument("--index", "-i", type=int, required=True, help="Leaf index to prove")
    merkle_prove.add_argument("--out", "-o", type=str, default=None, help="Write proof JSON to this file")
    merkle_prove.set_defaults(func=merkle.merkle_prove_cmd)

    merkle_verify = merkle_subparsers.add_parser("verify", help="Verify a proof against a root")
    merkle_verify.add_argument("proof", type=str, help="Path to proof JSON")
    merkle_verify.add_argument("--root", "-r", type=str, required=True, help="Expected root (hex)")
    merkle_verify.add_argument("--json", action="store_true", help="JSON output")
    merkle_verify.set_defaults(func=merkle.merkle_verify_cmd)

    merkle_parser.set_defaults(func=lambda args: merkle_parser.print_help() or EXIT_SUCCESS)

    # --- pow command ---
    pow_parser = subparsers.add_parser(
        "pow",
        help="Proof-of-work mining and targets",
        description="Mine a nonce for a header or print the target for a difficulty.",
    )
    pow_subparsers = pow_parser.add_subparsers(dest="pow_action", help="PoW action")

    pow_mine = pow_subparsers.add_parser("mine", help="Search for a nonce meeting the target")
    pow_mine.add_argument("header", type=str, help="Header data (UTF-8)")
    pow_mine.add_argument("--bits", type=int, default=None, help="Difficulty in leading zero bits")
    pow_mine.add_argument("--max-nonce", type=int, default=None, help="Nonce search limit")
    pow_mine.add_argument("--json", action="store_true", help="JSON output")
    pow_mine.set_defaults(func=pow_cmd.pow_mine_cmd)

    pow_target = pow_subparsers.add_parser("target", help="Show the target for a difficulty")
    pow_target.add_argument("--bits", type=int, required=True, help="Difficulty in leading zero bits")
    pow_target.add_argument("--json", action="store_true", help="JSON output")
    pow_target.set_defaults(func=pow_cmd.pow_target_cmd)

    pow_parser.set_defaults(func=lambda args: pow_parser.print_help() or EXIT_SUCCESS)

    # --- keys command ---
    keys_parser = subparsers.add_parser(
        "keys",
        help="Ed25519 key management",
        description="Generate keypairs, sign messages and verify signatures.",
    )
    keys_subparsers = keys_parser.add_subparsers(dest="keys_action", help="Key action")

    keys_generate = keys_subparsers.add_parser("generate", help="Generate a new keypair")
    keys_generate.add_argument("--out", "-o", type=str, default=None, help="Write keypair JSON to this file")
    keys_generate.set_defaults(func=keys.keys_generate_cmd)

    keys_sign = keys_subparsers.add_parser("sign", help="Sign a message")
    keys_sign.add_argument("message", type=str, help="Message (UTF-8)")
    keys_sign.add_argument("--key", "-k", type=str, required=True, help="Private key (hex)")
    keys_sign.add_argument("--json", action="store_true", help="JSON output")
    keys_sign.set_defaults(func=keys.keys_sign_cmd)

    keys_verify = keys_subparsers.add_parser("verify", help="Verify a signature")
    keys_verify.add_argument("message", type=str, help="Message (UTF-8)")
    keys_verify.add_argument("--pubkey", "-p", type=str, required=True, help="Public key (hex)")
    keys_verify.add_argument("--signature", "-s", type=str, required=True, help="Signature (hex)")
    keys_verify.add_argument("--json", action="store_true", help="JSON output")
    keys_verify.set_defaults(func=keys.keys_verify_cmd)

    keys_parser.set_defaults(func=lambda args: keys_parser.print_help() or EXIT_SUCCESS)

    # --- address command ---
    address_parser = subparsers.add_parser(
        "address",
        help="Derive or validate addresses",
        description="Derive an address from a public key or validate an address string.",
    )
    address_source = address_parser.add_mutually_exclusive_group(required=True)
    address_source.add_argument("--pubkey", "-p", type=str, help="Public key (hex)")
    address_source.add_argument("--validate", type=str, help="Address to validate")
    address_parser.add_argument(
        "--type", "-t",
        type=str,
        choices=ADDRESS_TYPES,
        default=None,
        help="Address format (default: from config or base58)",
    )
    address_parser.add_argument("--json", action="store_true", help="JSON output")
    address_parser.set_defaults(func=address.address_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="kaiblock.json",
        help="Path for config file (default: kaiblock.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (KAIBLOCK_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        print(json.dumps(config.to_runtime_config().to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: kaiblock config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
