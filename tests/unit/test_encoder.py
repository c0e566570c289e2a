"""
Unit tests for version encoding.

Covers the packed version integer, dotted strings, hash and timestamp
literals, and the VersionNumber record.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from verstamp_generator.encoder import (
    VersionNumber,
    decode_bcd,
    encode_bcd,
    format_bcd,
    format_dotted,
    format_hash,
    format_info,
    format_timestamp,
    parse_hash,
    parse_packed,
)
from verstamp_generator.exceptions import ErrorCategory, RangeError, VersionParseError


class TestPackedVersion:
    """Test encode_bcd / decode_bcd"""

    def test_wasim_release(self):
        """1.1.2.0 packs to 0x01010200"""
        assert encode_bcd(1, 1, 2, 0) == 0x01010200

    def test_byte_order(self):
        """Major is the most significant byte"""
        assert encode_bcd(1, 2, 3, 4) == 0x01020304
        assert encode_bcd(255, 0, 0, 0) == 0xFF000000
        assert encode_bcd(0, 0, 0, 255) == 0x000000FF

    @pytest.mark.parametrize(
        "components",
        [(0, 0, 0, 0), (1, 1, 2, 0), (255, 255, 255, 255), (99, 0, 99, 7), (128, 64, 32, 16)],
    )
    def test_round_trip(self, components):
        assert decode_bcd(encode_bcd(*components)) == components

    def test_round_trip_every_value_in_each_position(self):
        """Every byte value survives in every component position"""
        for value in range(256):
            for position in range(4):
                components = [0, 0, 0, 0]
                components[position] = value
                assert decode_bcd(encode_bcd(*components)) == tuple(components)

    @pytest.mark.parametrize(
        "components",
        [(256, 0, 0, 0), (0, 256, 0, 0), (0, 0, 1000, 0), (0, 0, 0, 256), (-1, 0, 0, 0), (0, 0, 0, -5)],
    )
    def test_out_of_range_components(self, components):
        with pytest.raises(RangeError) as exc_info:
            encode_bcd(*components)
        assert exc_info.value.category == ErrorCategory.VERSION

    def test_range_error_names_component(self):
        with pytest.raises(RangeError) as exc_info:
            encode_bcd(1, 300, 0, 0)
        assert exc_info.value.component == "minor"
        assert exc_info.value.value == 300
        assert "minor" in str(exc_info.value)

    def test_non_integer_component(self):
        with pytest.raises(RangeError):
            encode_bcd(1, "2", 0, 0)
        with pytest.raises(RangeError):
            encode_bcd(True, 0, 0, 0)

    def test_decode_rejects_out_of_range(self):
        with pytest.raises(RangeError):
            decode_bcd(-1)
        with pytest.raises(RangeError):
            decode_bcd(0x100000000)


class TestStringForms:
    """Test dotted, info, hash and timestamp formatting"""

    def test_format_dotted(self):
        assert format_dotted(1, 1, 2, 0) == "1.1.2.0"
        assert format_dotted(10, 0, 255, 3) == "10.0.255.3"

    def test_format_info_without_suffix(self):
        assert format_info("1.1.2.0", "") == "1.1.2.0"
        assert format_info("1.1.2.0", None) == "1.1.2.0"

    def test_format_info_with_suffix(self):
        assert format_info("1.1.2.0", "-beta1") == "1.1.2.0-beta1"

    def test_format_hash(self):
        assert format_hash(0x0C321F25) == "0x0C321F25UL"

    def test_format_hash_absent(self):
        """Missing hash is a valid degraded state, rendered as all zeros"""
        assert format_hash(None) == "0x00000000UL"

    @pytest.mark.parametrize("value", [2**32, -1])
    def test_format_hash_out_of_range(self, value):
        with pytest.raises(RangeError):
            format_hash(value)

    def test_format_bcd_out_of_range(self):
        with pytest.raises(RangeError):
            format_bcd(2**32)

    def test_format_bcd(self):
        assert format_bcd(0x01010200) == "0x01010200UL"

    def test_format_timestamp_zulu(self):
        moment = datetime(2023, 2, 23, 9, 43, 21, 123456, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2023-02-23T09:43:21Z"

    def test_format_timestamp_converts_to_utc(self):
        cest = timezone(timedelta(hours=2))
        moment = datetime(2023, 2, 23, 11, 43, 21, tzinfo=cest)
        assert format_timestamp(moment) == "2023-02-23T09:43:21Z"

    def test_format_timestamp_naive_is_utc(self):
        assert format_timestamp(datetime(2023, 2, 23, 9, 43, 21)) == "2023-02-23T09:43:21Z"


class TestParsing:
    """Test hash and packed-value parsing"""

    def test_parse_full_commit_id(self):
        """Only the top 32 bits of a full sha are kept"""
        assert parse_hash("0c321f25a7b9e1d4c3b2a1f0e9d8c7b6a5f4e3d2") == 0x0C321F25

    def test_parse_short_hash(self):
        assert parse_hash("0C321F25") == 0x0C321F25
        assert parse_hash("0x0C321F25") == 0x0C321F25

    def test_parse_empty_hash(self):
        assert parse_hash("") is None
        assert parse_hash(None) is None
        assert parse_hash("   ") is None

    def test_parse_invalid_hash(self):
        with pytest.raises(VersionParseError):
            parse_hash("not-a-sha")

    @pytest.mark.parametrize("text", ["0x01010200", "0x01010200UL", "16843264", " 0x01010200ul "])
    def test_parse_packed(self, text):
        assert parse_packed(text) == 0x01010200

    def test_parse_packed_invalid(self):
        with pytest.raises(VersionParseError):
            parse_packed("1.1.2.0")
        with pytest.raises(RangeError):
            parse_packed("0x1FFFFFFFF")


class TestVersionNumber:
    """Test the VersionNumber record"""

    def test_derived_values(self, wasim_version):
        assert wasim_version.bcd == 0x01010200
        assert wasim_version.bcd_literal == "0x01010200UL"
        assert wasim_version.dotted == "1.1.2.0"
        assert wasim_version.info == "1.1.2.0"
        assert wasim_version.hash32 == 0x0C321F25
        assert wasim_version.hash_literal == "0x0C321F25UL"
        assert wasim_version.build_date == "2023-02-23T09:43:21Z"

    def test_hash_is_normalized_to_upper_case(self):
        assert VersionNumber(1, 0, 0, 0, vcs_hash="0c321f25").vcs_hash == "0C321F25"

    def test_no_hash(self):
        version = VersionNumber(1, 0, 0, 0)
        assert version.vcs_hash == ""
        assert version.hash32 is None
        assert version.hash_literal == "0x00000000UL"
        assert version.build_date == ""

    @pytest.mark.parametrize("bad_hash", ["0C321F", "0C321F25AA", "ZZZZZZZZ"])
    def test_hash_must_be_eight_hex_digits(self, bad_hash):
        with pytest.raises(VersionParseError):
            VersionNumber(1, 0, 0, 0, vcs_hash=bad_hash)

    def test_components_validated(self):
        with pytest.raises(RangeError):
            VersionNumber(1, 0, 256, 0)

    def test_immutable(self, wasim_version):
        with pytest.raises(AttributeError):
            wasim_version.major = 2

    def test_parse_with_suffix(self):
        version = VersionNumber.parse("1.1.2.0-beta1")
        assert version.components == (1, 1, 2, 0)
        assert version.suffix == "-beta1"
        assert version.info == "1.1.2.0-beta1"

    def test_parse_fills_missing_components(self):
        assert VersionNumber.parse("2.5").components == (2, 5, 0, 0)
        assert VersionNumber.parse("v3").components == (3, 0, 0, 0)

    def test_parse_passes_extra_fields(self):
        version = VersionNumber.parse("1.2.3.4", vcs_hash="DEADBEEF")
        assert version.vcs_hash == "DEADBEEF"

    @pytest.mark.parametrize("text", ["", "one.two", "1.2.3.4.5", "1..2", "1.2 beta"])
    def test_parse_malformed(self, text):
        with pytest.raises(VersionParseError):
            VersionNumber.parse(text)

    def test_parse_out_of_range(self):
        with pytest.raises(RangeError):
            VersionNumber.parse("1.300.0.0")

    def test_ordering_follows_packed_value(self):
        older = VersionNumber.parse("1.1.2.0")
        newer = VersionNumber.parse("1.2.0.0-beta1")
        assert older < newer
        assert newer > older
        assert older <= VersionNumber.parse("1.1.2.0-rc1")
        assert sorted([newer, older]) == [older, newer]

    def test_equality_compares_every_field(self):
        a = VersionNumber(1, 1, 2, 0, vcs_hash="0C321F25")
        b = VersionNumber(1, 1, 2, 0, vcs_hash="ABCDEF01")
        assert a <= b and b <= a
        assert a != b
        assert a == VersionNumber(1, 1, 2, 0, vcs_hash="0c321f25")

    def test_str_is_info(self):
        assert str(VersionNumber.parse("1.1.2.0-beta1")) == "1.1.2.0-beta1"
