"""Unit tests for RecordDecoder."""

from __future__ import annotations

from dataclasses import replace

import pytest

from conftest import START_TIME, sleep_v2, sleep_v3
from show_acct.domain.entities import RECORD_SIZE, RawRecordV2, RawRecordV3
from show_acct.domain.services import (
    DecodeError,
    RecordDecoder,
    RecordSizeError,
    UnsupportedVersionError,
)
from show_acct.domain.value_objects import AcctFlag, FormatVersion, pack_comp_t


pytestmark = pytest.mark.unit


@pytest.fixture
def decoder() -> RecordDecoder:
    return RecordDecoder()


class TestVersionDispatch:
    """The version byte selects exactly one layout."""

    def test_decodes_v2(self, decoder: RecordDecoder) -> None:
        record = decoder.decode(sleep_v2().to_bytes())
        assert record.format_version == FormatVersion.V2

    def test_decodes_v3(self, decoder: RecordDecoder) -> None:
        record = decoder.decode(sleep_v3().to_bytes())
        assert record.format_version == FormatVersion.V3

    @pytest.mark.parametrize("version", [0, 1, 4, 255])
    def test_unsupported_versions(self, decoder: RecordDecoder, version: int) -> None:
        buffer = bytearray(RECORD_SIZE)
        buffer[1] = version

        with pytest.raises(UnsupportedVersionError) as exc_info:
            decoder.decode(bytes(buffer))

        assert exc_info.value.version == version
        assert isinstance(exc_info.value, DecodeError)

    def test_version_four_ignores_remaining_bytes(self, decoder: RecordDecoder) -> None:
        """Garbage after the version byte does not change the outcome."""
        buffer = bytes([0xFF, 4]) + b"\xff" * (RECORD_SIZE - 2)

        with pytest.raises(UnsupportedVersionError, match="version 4"):
            decoder.decode(buffer)

    @pytest.mark.parametrize("size", [0, 1, RECORD_SIZE - 1, RECORD_SIZE + 1])
    def test_wrong_buffer_size(self, decoder: RecordDecoder, size: int) -> None:
        with pytest.raises(RecordSizeError):
            decoder.decode(b"\x03" * size)

    def test_read_version(self, decoder: RecordDecoder) -> None:
        assert decoder.read_version(sleep_v2().to_bytes()) == 2
        assert decoder.read_version(bytes([0, 9])) == 9


class TestV3Decoding:
    """Field extraction from acct_v3 records."""

    def test_sleep_scenario(self, decoder: RecordDecoder) -> None:
        """The reference v3 record decodes to the expected canonical values."""
        record = decoder.decode(sleep_v3().to_bytes())

        assert record.user_id == 1000
        assert record.flags == AcctFlag.AFORK
        assert record.exit_code == 0
        assert record.command == "sleep"
        assert record.user_time_ticks == 100
        assert record.system_time_ticks == 100
        assert record.elapsed_time_ticks == 360
        assert record.average_memory == 100
        assert record.start_time == START_TIME
        assert record.format_version == 3
        assert record.end_time is None

    def test_elapsed_time_is_plain(self, decoder: RecordDecoder) -> None:
        """The v3 elapsed time does not pass through the comp_t codec."""
        # 0x2001 would be 8 as a comp_t
        record = decoder.decode(sleep_v3(etime=float(0x2001)).to_bytes())
        assert record.elapsed_time_ticks == 0x2001

    def test_fractional_elapsed_time_truncates(self, decoder: RecordDecoder) -> None:
        record = decoder.decode(sleep_v3(etime=12.75).to_bytes())
        assert record.elapsed_time_ticks == 12

    @pytest.mark.parametrize("etime", [float("nan"), float("inf"), -5.0])
    def test_invalid_elapsed_time_is_zero(self, decoder: RecordDecoder, etime: float) -> None:
        record = decoder.decode(sleep_v3(etime=etime).to_bytes())
        assert record.elapsed_time_ticks == 0

    def test_compressed_fields_scale(self, decoder: RecordDecoder) -> None:
        record = decoder.decode(
            sleep_v3(utime=pack_comp_t(3, 2), mem=pack_comp_t(7, 1)).to_bytes()
        )
        assert record.user_time_ticks == 3 * 64
        assert record.average_memory == 56

    def test_negative_exit_code(self, decoder: RecordDecoder) -> None:
        record = decoder.decode(sleep_v3(exitcode=-9).to_bytes())
        assert record.exit_code == -9

    def test_all_flags(self, decoder: RecordDecoder) -> None:
        record = decoder.decode(sleep_v3(flag=0x1B).to_bytes())
        assert record.forked_without_exec
        assert record.used_superuser
        assert record.dumped_core
        assert record.killed_by_signal


class TestV2Decoding:
    """Field extraction from acct (v2) records."""

    def test_elapsed_time_is_compressed(self, decoder: RecordDecoder) -> None:
        record = decoder.decode(sleep_v2(etime=pack_comp_t(45, 1)).to_bytes())
        assert record.elapsed_time_ticks == 360

    def test_uses_32_bit_uid(self, decoder: RecordDecoder) -> None:
        """The 32-bit uid field wins over the legacy 16-bit one."""
        record = decoder.decode(sleep_v2(uid=70000, uid16=4464).to_bytes())
        assert record.user_id == 70000

    def test_equivalent_to_v3(self, decoder: RecordDecoder) -> None:
        """Logically equal v2 and v3 records differ only in format_version."""
        v2 = decoder.decode(sleep_v2().to_bytes())
        v3 = decoder.decode(sleep_v3().to_bytes())

        assert v2 != v3
        assert replace(v2, format_version=FormatVersion.V3) == v3


class TestCommandField:
    """Command extraction rules shared by both layouts."""

    def test_stops_at_first_nul(self, decoder: RecordDecoder) -> None:
        record = decoder.decode(sleep_v3(comm=b"cat\x00junk").to_bytes())
        assert record.command == "cat"

    def test_full_width_v3_command(self, decoder: RecordDecoder) -> None:
        """A 16-byte v3 command without terminator is kept whole."""
        record = decoder.decode(sleep_v3(comm=b"x" * 16).to_bytes())
        assert record.command == "x" * 16
        assert "\x00" not in record.command

    def test_v2_command_never_exceeds_field(self, decoder: RecordDecoder) -> None:
        record = decoder.decode(sleep_v2(comm=b"y" * 30).to_bytes())
        assert len(record.command) <= RawRecordV2.COMM_SIZE

    def test_empty_command(self, decoder: RecordDecoder) -> None:
        record = decoder.decode(RawRecordV3().to_bytes())
        assert record.command == ""

    def test_invalid_utf8_is_replaced(self, decoder: RecordDecoder) -> None:
        record = decoder.decode(sleep_v3(comm=b"a\xffb").to_bytes())
        assert record.command == "a\ufffdb"
        assert len(record.command) <= RawRecordV3.COMM_SIZE
