"""
Tests for size conversion utilities used by the --min-size/--max-size filters and the report.
"""
import pytest
from dupsweep.utils.convert_utils import ConvertUtils


class TestHumanToBytes:

    def test_bytes_without_suffix(self):
        assert ConvertUtils.human_to_bytes("0") == 0
        assert ConvertUtils.human_to_bytes("1024") == 1024

    def test_binary_multiples(self):
        assert ConvertUtils.human_to_bytes("1KB") == 1024
        assert ConvertUtils.human_to_bytes("1K") == 1024
        assert ConvertUtils.human_to_bytes("1.5KB") == 1536
        assert ConvertUtils.human_to_bytes("1M") == 1024 * 1024
        assert ConvertUtils.human_to_bytes("0.5GB") == 512 * 1024 * 1024

    def test_case_and_whitespace(self):
        assert ConvertUtils.human_to_bytes(" 1kb ") == 1024
        assert ConvertUtils.human_to_bytes("\t1mb\n") == 1024 * 1024

    def test_rejects_negative_values(self):
        with pytest.raises(ValueError, match="Negative size not allowed"):
            ConvertUtils.human_to_bytes("-1")
        with pytest.raises(ValueError, match="Negative size not allowed"):
            ConvertUtils.human_to_bytes("-1K")

    @pytest.mark.parametrize("bad", ["", "invalid", "1.2.3KB", "1KB2", "1 XB", "KB"])
    def test_rejects_invalid_formats(self, bad):
        with pytest.raises(ValueError):
            ConvertUtils.human_to_bytes(bad)
        assert ConvertUtils.is_valid_size_format(bad) is False


class TestBytesToHuman:

    def test_small_values_are_plain_bytes(self):
        assert ConvertUtils.bytes_to_human(0) == "0B"
        assert ConvertUtils.bytes_to_human(5) == "5B"
        assert ConvertUtils.bytes_to_human(1023) == "1023B"

    def test_units(self):
        assert ConvertUtils.bytes_to_human(1024) == "1.00KB"
        assert ConvertUtils.bytes_to_human(1536) == "1.50KB"
        assert ConvertUtils.bytes_to_human(1024 * 1024) == "1.00MB"
        assert ConvertUtils.bytes_to_human(1024 ** 3) == "1.00GB"

    def test_negative_is_zero(self):
        assert ConvertUtils.bytes_to_human(-10) == "0B"
