"""
Amount Parsing Unit Tests
Tests for core/whitelist/amounts.py
"""
import pytest

from core.crypto.hashing import UINT256_MAX
from core.schemas.errors import ErrorCodes, InvalidAmountException
from core.whitelist.amounts import format_ether, is_valid_amount, parse_amount

from fixtures import ONE_ETHER


class TestParseAmount:
    """Tests for parse_amount()."""

    def test_int(self):
        assert parse_amount(1000) == 1000

    def test_decimal_string(self):
        assert parse_amount("1000") == 1000

    def test_decimal_string_whitespace(self):
        assert parse_amount(" 42\n") == 42

    def test_hex_string(self):
        assert parse_amount("0x3e8") == 1000
        assert parse_amount("0X3E8") == 1000

    def test_large_value_exact(self):
        """Values far above 2**53 keep full precision."""
        big = "123456789012345678901234567890"
        assert parse_amount(big) == 123456789012345678901234567890

    def test_uint256_max_accepted(self):
        assert parse_amount(UINT256_MAX) == UINT256_MAX
        assert parse_amount(str(UINT256_MAX)) == UINT256_MAX

    @pytest.mark.parametrize("value", [0, "0", "0x0", -1, "-5"])
    def test_non_positive_rejected(self, value):
        with pytest.raises(InvalidAmountException) as exc_info:
            parse_amount(value)
        assert exc_info.value.code == ErrorCodes.INVALID_AMOUNT

    def test_overflow_rejected(self):
        with pytest.raises(InvalidAmountException, match="uint256"):
            parse_amount(UINT256_MAX + 1)

    @pytest.mark.parametrize("value", ["", "abc", "1.5", "1e18", "0x", "12 34"])
    def test_unparseable_strings_rejected(self, value):
        with pytest.raises(InvalidAmountException):
            parse_amount(value)

    @pytest.mark.parametrize("value", [1.0, None, True, False, [1], b"1"])
    def test_wrong_types_rejected(self, value):
        with pytest.raises(InvalidAmountException):
            parse_amount(value)

    def test_is_valid_amount(self):
        assert is_valid_amount("5")
        assert not is_valid_amount(0)
        assert not is_valid_amount("five")


class TestFormatEther:
    """Tests for format_ether()."""

    def test_whole_ether(self):
        assert format_ether(ONE_ETHER) == "1"

    def test_fractional_ether(self):
        assert format_ether(ONE_ETHER + ONE_ETHER // 2) == "1.5"

    def test_one_wei(self):
        assert format_ether(1) == "0.000000000000000001"

    def test_large_amount(self):
        assert format_ether(1_000_000 * ONE_ETHER) == "1000000"
