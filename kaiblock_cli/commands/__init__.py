"""
CLI command modules.
"""

from kaiblock_cli.commands import address, hash_cmd, keys, merkle, pow_cmd

__all__ = ["address", "hash_cmd", "keys", "merkle", "pow_cmd"]
