"""
Unit tests for GST and INR price helpers.

Run with: pytest tests/test_pricing.py -v
"""

import pytest

from storefront.logic.pricing import (
    calculate_base_price,
    calculate_gst_amount,
    calculate_gst_inclusive_price,
    extract_gst_amount,
    format_price,
    format_price_with_gst,
    get_gst_percentage,
    get_gst_rate,
    get_pricing_breakdown,
    split_gst_inclusive,
)


# =============================================================================
# GST RATE
# =============================================================================

class TestGstRate:

    @pytest.mark.parametrize("value", [None, "", "abc", "NaN"])
    def test_defaults_to_18(self, value):
        assert get_gst_rate(value) == pytest.approx(0.18)
        assert get_gst_percentage(value) == pytest.approx(18)

    def test_parses_settings_string(self):
        assert get_gst_rate("12") == pytest.approx(0.12)
        assert get_gst_percentage(" 5 ") == pytest.approx(5)

    def test_zero_is_respected(self):
        assert get_gst_rate("0") == 0
        assert get_gst_percentage("0") == 0

    def test_fractional_rate(self):
        assert get_gst_rate("12.5") == pytest.approx(0.125)


# =============================================================================
# FORMATTING
# =============================================================================

class TestFormatPrice:

    @pytest.mark.parametrize("price, expected", [
        (0, "₹0"),
        (999, "₹999"),
        (5000, "₹5,000"),
        (25000, "₹25,000"),
        (100000, "₹1,00,000"),
        (1234567, "₹12,34,567"),
        (123456789, "₹12,34,56,789"),
    ])
    def test_indian_grouping(self, price, expected):
        assert format_price(price) == expected

    def test_rounds_half_up_to_whole_rupees(self):
        assert format_price(1499.5) == "₹1,500"
        assert format_price(1499.49) == "₹1,499"

    def test_negative(self):
        assert format_price(-2500) == "-₹2,500"

    def test_with_gst(self):
        assert format_price_with_gst(5000, 18) == "₹5,000 (includes 18% GST)"

    def test_with_gst_defaults_to_18(self):
        assert format_price_with_gst(5000) == "₹5,000 (includes 18% GST)"
        assert format_price_with_gst(5000, 0) == "₹5,000 (includes 18% GST)"

    def test_with_fractional_gst(self):
        assert format_price_with_gst(100000, 12.5) == "₹1,00,000 (includes 12.5% GST)"


# =============================================================================
# GST SPLITTING
# =============================================================================

class TestSplitGstInclusive:

    def test_split_at_18(self):
        result = split_gst_inclusive(11800, 0.18)
        assert result["base_price"] == pytest.approx(10000)
        assert result["gst_amount"] == pytest.approx(1800)
        assert result["total_price"] == pytest.approx(11800)

    def test_split_at_zero(self):
        result = split_gst_inclusive(5000, 0)
        assert result["base_price"] == pytest.approx(5000)
        assert result["gst_amount"] == 0

    def test_parts_add_up(self):
        result = split_gst_inclusive(47950, 0.12)
        assert result["base_price"] + result["gst_amount"] == pytest.approx(47950)


# =============================================================================
# LEGACY 18% HELPERS
# =============================================================================

class TestLegacyHelpers:

    def test_base_price(self):
        assert calculate_base_price(1180) == pytest.approx(1000)
        assert calculate_base_price(999) == pytest.approx(846.61)

    def test_inclusive_price(self):
        assert calculate_gst_inclusive_price(1000) == pytest.approx(1180)

    def test_gst_amount(self):
        assert calculate_gst_amount(1000) == pytest.approx(180)

    def test_extract_gst(self):
        assert extract_gst_amount(1180) == pytest.approx(180)
        assert extract_gst_amount(999) == pytest.approx(152.39)

    def test_breakdown(self):
        breakdown = get_pricing_breakdown(11800)
        assert breakdown == {"base_price": 10000.0, "gst_amount": 1800.0, "total_price": 11800}


class TestGstRateLeadingNumber:
    """Settings text is read like parseFloat: the leading number counts."""

    @pytest.mark.parametrize("value, expected", [("12%", 12), ("5 percent", 5), ("18.0", 18), (".5", 0.5)])
    def test_leading_number(self, value, expected):
        assert get_gst_percentage(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["%12", "GST 18", "-", "Infinity", "1e999"])
    def test_no_leading_number_defaults(self, value):
        assert get_gst_percentage(value) == pytest.approx(18)
