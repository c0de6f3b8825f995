"""
CLI Address Command

Derive an address from a public key, or validate an address string.

Usage:
    kaiblock address --pubkey <HEX> [--type base58|hex-checksum|hex]
    kaiblock address --validate <ADDRESS>
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from kaiblock.crypto.address import Address, AddressType
from kaiblock.crypto.signatures import PublicKey
from kaiblock.schemas.errors import AddressException, KaiblockException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def address_cmd(args: Namespace) -> int:
    """Handle address command."""
    if args.validate:
        return _validate(args)

    address_type = AddressType(args.type or args.cli_config.address_type)
    try:
        public_key = PublicKey.from_hex(args.pubkey)
    except KaiblockException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    address = Address.from_public_key(public_key, address_type)
    if args.json:
        print(json.dumps({
            "type": address.address_type.value,
            "address": address.encoded,
            "data": address.data.hex(),
        }, indent=2))
    else:
        print(address.encoded)
    return EXIT_SUCCESS


def _validate(args: Namespace) -> int:
    try:
        address_type = Address.validate(args.validate)
    except AddressException as e:
        if args.json:
            print(json.dumps({"valid": False, "error": e.message}, indent=2))
        else:
            print(f"valid: false ({e.message})")
        return EXIT_VERIFICATION_FAILED

    if args.json:
        print(json.dumps({"valid": True, "type": address_type.value}, indent=2))
    else:
        print(f"valid: true ({address_type.value})")
    return EXIT_SUCCESS
