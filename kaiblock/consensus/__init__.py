"""
Consensus helpers: difficulty targets, hash chains and proof-of-work.
"""
from .difficulty import (
    MAX_TARGET,
    INITIAL_COMPACT,
    leading_zero_bits,
    target_from_difficulty,
    meets_target,
    meets_difficulty,
    target_to_compact,
    compact_to_target,
    retarget,
)
from .pow import (
    PowSolution,
    ProofOfWork,
    chain_hashes,
    verify_chain,
)

__all__ = [
    "MAX_TARGET",
    "INITIAL_COMPACT",
    "leading_zero_bits",
    "target_from_difficulty",
    "meets_target",
    "meets_difficulty",
    "target_to_compact",
    "compact_to_target",
    "retarget",
    "PowSolution",
    "ProofOfWork",
    "chain_hashes",
    "verify_chain",
]
