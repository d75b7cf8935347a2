from decimal import Decimal

import pytest

from paygate.modules.payments import ValidationError
from paygate.modules.payments.validation import parse_price, sanitize_text, validate_amount


class TestSanitizeText:
    def test_strips_markup_and_control_characters(self):
        assert sanitize_text("<script>inv-1</script>\x00") == "scriptinv-1/script"

    def test_none_becomes_empty(self):
        assert sanitize_text(None) == ""

    def test_plain_values_pass_through(self):
        assert sanitize_text("  INV-2026-0042 ") == "INV-2026-0042"


class TestParsePrice:
    @pytest.mark.parametrize("raw, expected", [("50", Decimal("50")), ("12.34", Decimal("12.34")), (7, Decimal("7"))])
    def test_numeric_input(self, raw, expected):
        assert parse_price(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["abc", "", None, "NaN", "Infinity", "1e", True, "5'0", "<1>00", "5_0", "1\x0000", "1e2", "+5", "\u0665\u0660"],
    )
    def test_non_numeric_input_is_rejected(self, raw):
        with pytest.raises(ValidationError):
            parse_price(raw)

    @pytest.mark.parametrize("raw", ["10.009", "12.345", "0.001"])
    def test_more_than_two_decimals_is_rejected(self, raw):
        with pytest.raises(ValidationError):
            parse_price(raw)

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_price("  42.50 ") == Decimal("42.50")


class TestValidateAmount:
    def test_bounds_are_inclusive(self):
        assert validate_amount("10", Decimal("10"), Decimal("1000")) == Decimal("10")
        assert validate_amount("1000", Decimal("10"), Decimal("1000")) == Decimal("1000")

    @pytest.mark.parametrize("raw", ["9.99", "1000.01", "-5", "0"])
    def test_out_of_bounds(self, raw):
        with pytest.raises(ValidationError):
            validate_amount(raw, Decimal("10"), Decimal("1000"))
