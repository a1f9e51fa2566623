"""Unit tests for the comp_t compressed integer codec."""

from __future__ import annotations

import pytest

from show_acct.domain.value_objects import (
    COMP_T_MAX,
    MAX_EXPONENT,
    MAX_MANTISSA,
    decode_comp_t,
    encode_comp_t,
    pack_comp_t,
)


pytestmark = pytest.mark.unit


class TestDecodeCompT:
    """Tests for decode_comp_t."""

    def test_zero(self) -> None:
        """Zero decodes to zero."""
        assert decode_comp_t(0) == 0

    def test_plain_mantissa(self) -> None:
        """Exponent 0 leaves the mantissa unscaled."""
        assert decode_comp_t(100) == 100
        assert decode_comp_t(MAX_MANTISSA) == 8191

    def test_exponent_scales_by_eight(self) -> None:
        """Each exponent step multiplies by 8."""
        assert decode_comp_t(pack_comp_t(1, 1)) == 8
        assert decode_comp_t(pack_comp_t(1, 2)) == 64
        assert decode_comp_t(pack_comp_t(3, 3)) == 3 * 512

    def test_largest_value(self) -> None:
        """0xffff is mantissa 8191 with exponent 7."""
        assert decode_comp_t(0xFFFF) == 8191 << 21

    @pytest.mark.parametrize("exponent", range(MAX_EXPONENT + 1))
    def test_pack_then_decode(self, exponent: int) -> None:
        """decode(pack(m, e)) == m << 3e across exponents and mantissa edges."""
        for mantissa in (0, 1, 100, 4096, MAX_MANTISSA):
            packed = pack_comp_t(mantissa, exponent)
            assert decode_comp_t(packed) == mantissa << (3 * exponent)

    def test_total_over_all_inputs(self) -> None:
        """Every 16-bit input decodes without error to a non-negative value."""
        for value in range(0x10000):
            assert decode_comp_t(value) >= 0

    def test_ignores_bits_above_sixteen(self) -> None:
        """Only the low 16 bits take part in decoding."""
        assert decode_comp_t(0x10000 | 100) == 100


class TestPackCompT:
    """Tests for pack_comp_t."""

    def test_layout(self) -> None:
        """Mantissa fills the low 13 bits, exponent the next 3."""
        assert pack_comp_t(100, 0) == 100
        assert pack_comp_t(0, 1) == 0x2000
        assert pack_comp_t(MAX_MANTISSA, MAX_EXPONENT) == 0xFFFF

    def test_rejects_large_mantissa(self) -> None:
        with pytest.raises(ValueError, match="mantissa"):
            pack_comp_t(MAX_MANTISSA + 1, 0)

    def test_rejects_large_exponent(self) -> None:
        with pytest.raises(ValueError, match="exponent"):
            pack_comp_t(1, MAX_EXPONENT + 1)


class TestEncodeCompT:
    """Tests for kernel-style encode_comp_t."""

    def test_small_values_are_exact(self) -> None:
        """Values that fit the mantissa encode losslessly."""
        for value in (0, 1, 360, MAX_MANTISSA):
            assert encode_comp_t(value) == value
            assert decode_comp_t(encode_comp_t(value)) == value

    def test_large_values_drop_low_bits(self) -> None:
        """Larger values lose precision but stay within one mantissa step."""
        value = 1_000_000
        decoded = decode_comp_t(encode_comp_t(value))
        assert abs(decoded - value) <= 8 ** 3

    def test_rounds_up(self) -> None:
        """Dropping 0b100 or more in the last group rounds up."""
        assert decode_comp_t(encode_comp_t(8196)) == 8200
        assert decode_comp_t(encode_comp_t(8195)) == 8192

    def test_saturates(self) -> None:
        """Values beyond the encodable range saturate at 0xffff."""
        assert encode_comp_t(1 << 40) == COMP_T_MAX

    def test_rejects_negative(self) -> None:
        with pytest.raises(ValueError):
            encode_comp_t(-1)
