"""Compressed integer encoding used by the accounting subsystem (comp_t).

Times and memory sizes in an accounting record are stored as 16-bit
pseudo floating point numbers so that large counts fit in two bytes:

    bit  15 14 13 | 12 ............................ 0
         exponent |            mantissa
         (base 8) |            (13 bits)

    value = mantissa << (3 * exponent)

References:
    - linux/kernel/acct.c (encode_comp_t)
    - Stevens, W. R. "Advanced Programming in the UNIX Environment", 8.14
"""

from __future__ import annotations

MANTISSA_BITS = 13
EXPONENT_BITS = 3

MANTISSA_MASK = (1 << MANTISSA_BITS) - 1  # 0x1fff
EXPONENT_MASK = (1 << EXPONENT_BITS) - 1  # 0x7
MAX_MANTISSA = MANTISSA_MASK
MAX_EXPONENT = EXPONENT_MASK

COMP_T_MAX = 0xFFFF


def decode_comp_t(value: int) -> int:
    """Expand a comp_t into a plain unsigned integer.

    Any 16-bit input is valid; bits above bit 15 are ignored.

    Example:
        >>> decode_comp_t(0)
        0
        >>> decode_comp_t(pack_comp_t(100, 1))
        800
    """
    mantissa = value & MANTISSA_MASK
    exponent = (value >> MANTISSA_BITS) & EXPONENT_MASK
    return mantissa << (EXPONENT_BITS * exponent)


def pack_comp_t(mantissa: int, exponent: int) -> int:
    """Pack a mantissa and base-8 exponent into a comp_t.

    Raises:
        ValueError: If either part does not fit its bit field.
    """
    if not 0 <= mantissa <= MAX_MANTISSA:
        raise ValueError(f"mantissa must be in [0, {MAX_MANTISSA}], got {mantissa}")
    if not 0 <= exponent <= MAX_EXPONENT:
        raise ValueError(f"exponent must be in [0, {MAX_EXPONENT}], got {exponent}")
    return (exponent << MANTISSA_BITS) | mantissa


def encode_comp_t(value: int) -> int:
    """Compress a plain integer the way the kernel does.

    Low-order bits are dropped three at a time until the value fits the
    mantissa, rounding on the last dropped group. Values too large for the
    encoding saturate at 0xffff.
    """
    if value < 0:
        raise ValueError(f"comp_t cannot encode negative values, got {value}")

    exponent = 0
    round_up = 0
    while value > MAX_MANTISSA:
        round_up = value & (1 << (EXPONENT_BITS - 1))
        value >>= EXPONENT_BITS
        exponent += 1

    if round_up:
        value += 1
        if value > MAX_MANTISSA:
            value >>= EXPONENT_BITS
            exponent += 1

    if exponent > MAX_EXPONENT:
        return COMP_T_MAX

    return (exponent << MANTISSA_BITS) + value
