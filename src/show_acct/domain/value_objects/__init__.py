"""Value objects for the accounting domain.

Exports:
    Identifiers:
        - UserId: Numeric user id
        - Ticks: Raw clock tick count
        - FormatVersion: Supported record format versions (2, 3)
        - AcctFlag: Bits of the record flag byte
        - FLAG_LETTERS: Letter codes for rendering flags

    Compressed integers (comp_t):
        - decode_comp_t, encode_comp_t, pack_comp_t
"""

from show_acct.domain.value_objects.compressed import (
    COMP_T_MAX,
    MAX_EXPONENT,
    MAX_MANTISSA,
    decode_comp_t,
    encode_comp_t,
    pack_comp_t,
)
from show_acct.domain.value_objects.identifiers import (
    FLAG_LETTERS,
    AcctFlag,
    FormatVersion,
    Ticks,
    UserId,
)

__all__ = [
    # Identifiers
    "UserId",
    "Ticks",
    "FormatVersion",
    "AcctFlag",
    "FLAG_LETTERS",
    # comp_t
    "decode_comp_t",
    "encode_comp_t",
    "pack_comp_t",
    "COMP_T_MAX",
    "MAX_MANTISSA",
    "MAX_EXPONENT",
]
