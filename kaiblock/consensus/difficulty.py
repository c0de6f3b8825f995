"""
Difficulty Utilities
Leading-zero-bit difficulty, thresholds, and Bitcoin-style compact targets.

A hash "meets" a target when, read as a big-endian integer, it is less than
or equal to the target. Hash256 orders by its bytes, which is the same
comparison, so targets are Hash256 values too.

Compact "nBits" layout: high byte = size in bytes, low three bytes =
mantissa; bit 0x00800000 is a sign bit and is never set by the encoder.
"""
from __future__ import annotations

from typing import Union

from kaiblock.crypto.hash256 import HASH_BITS, Hash256


MAX_TARGET_INT = (1 << HASH_BITS) - 1
MAX_TARGET = Hash256.from_int(MAX_TARGET_INT)

# Difficulty 1 in Bitcoin's genesis header
INITIAL_COMPACT = 0x1D00FFFF

# Retarget adjustment is clamped to this factor either way
MAX_ADJUSTMENT_FACTOR = 4

TargetLike = Union[Hash256, int]


def _target_int(target: TargetLike) -> int:
    if isinstance(target, Hash256):
        return target.to_int()
    if target < 0 or target > MAX_TARGET_INT:
        raise ValueError(f"Target out of range for a 256-bit value: {target}")
    return target


def leading_zero_bits(digest: Hash256) -> int:
    """
    Count zero bits from the most significant bit of digest.

    Returns 256 for the all-zero hash and 255 when only the lowest bit is set.
    """
    return digest.leading_zero_bits()


def target_from_difficulty(bits: int) -> Hash256:
    """
    Threshold whose high `bits` bits are zero and the rest are one.

    Any hash with at least `bits` leading zero bits is <= this target.

    Raises:
        ValueError: If bits is outside 0..256
    """
    if bits < 0 or bits > HASH_BITS:
        raise ValueError(f"Difficulty bits must be in 0..{HASH_BITS}, got {bits}")
    return Hash256.from_int((1 << (HASH_BITS - bits)) - 1)


def meets_target(digest: Hash256, target: TargetLike) -> bool:
    return digest.to_int() <= _target_int(target)


def meets_difficulty(digest: Hash256, bits: int) -> bool:
    return meets_target(digest, target_from_difficulty(bits))


def target_to_compact(target: TargetLike) -> int:
    """
    Encode a target into compact nBits form.

    Precision beyond the three-byte mantissa is truncated, as in Bitcoin.
    """
    value = _target_int(target)
    if value == 0:
        return 0

    size = (value.bit_length() + 7) // 8
    if size <= 3:
        mantissa = value << (8 * (3 - size))
    else:
        mantissa = value >> (8 * (size - 3))

    # Keep the sign bit clear by moving to a larger exponent
    if mantissa & 0x00800000:
        mantissa >>= 8
        size += 1

    return (size << 24) | mantissa


def compact_to_target(compact: int) -> Hash256:
    """
    Decode compact nBits into a target.

    Raises:
        ValueError: If the encoding is negative or overflows 256 bits
    """
    if compact < 0 or compact > 0xFFFFFFFF:
        raise ValueError(f"Compact target must fit in 32 bits, got {compact:#x}")

    size = compact >> 24
    mantissa = compact & 0x007FFFFF

    if mantissa and compact & 0x00800000:
        raise ValueError(f"Negative compact target: {compact:#010x}")

    if size <= 3:
        value = mantissa >> (8 * (3 - size))
    else:
        value = mantissa << (8 * (size - 3))

    if value > MAX_TARGET_INT:
        raise ValueError(f"Compact target overflows 256 bits: {compact:#010x}")
    return Hash256.from_int(value)


def retarget(old_target: TargetLike, actual_time: int, expected_time: int) -> Hash256:
    """
    Scale a target by how long the last interval actually took.

    new = old * actual / expected, clamped to [old / 4, old * 4] and
    capped at MAX_TARGET.
    Slow intervals raise the target (easier); fast ones lower it.

    Raises:
        ValueError: If expected_time is not positive
    """
    if expected_time <= 0:
        raise ValueError(f"Expected time must be positive, got {expected_time}")

    old_value = _target_int(old_target)
    new_value = old_value * max(actual_time, 0) // expected_time
    new_value = max(new_value, old_value // MAX_ADJUSTMENT_FACTOR)
    new_value = min(new_value, old_value * MAX_ADJUSTMENT_FACTOR)
    return Hash256.from_int(min(new_value, MAX_TARGET_INT))


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
]
