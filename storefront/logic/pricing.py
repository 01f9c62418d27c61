# storefront/logic/pricing.py
"""GST and INR price helpers. Catalog prices already include GST."""
import math
import re
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional, TypedDict

from .. import config

LEGACY_GST_RATE = Decimal("0.18")
LEADING_NUMBER = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class PricingBreakdown(TypedDict):
    base_price: float
    gst_amount: float
    total_price: float


def _round2(value) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _parse_percentage(tax_rate_from_settings) -> Optional[float]:
    """Leading number of the setting, so '12%' reads as 12. None when there is none."""
    if tax_rate_from_settings is None:
        return None
    match = LEADING_NUMBER.match(str(tax_rate_from_settings))
    if not match:
        return None
    try:
        rate = Decimal(match.group(0).strip())
    except InvalidOperation:
        return None
    number = float(rate)
    return number if math.isfinite(number) else None


def get_gst_percentage(tax_rate_from_settings: Optional[str] = None) -> float:
    """GST percentage for display ('18' -> 18). Defaults to 18."""
    rate = _parse_percentage(tax_rate_from_settings)
    return config.DEFAULT_GST_PERCENTAGE if rate is None else rate


def get_gst_rate(tax_rate_from_settings: Optional[str] = None) -> float:
    """GST as a decimal rate ('18' -> 0.18). Defaults to 0.18."""
    return get_gst_percentage(tax_rate_from_settings) / 100


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_price(price) -> str:
    """Format as INR with Indian digit grouping and no decimals: 100000 -> '₹1,00,000'."""
    amount = Decimal(str(price)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}₹{_group_indian(str(abs(int(amount))))}"


def format_price_with_gst(price, gst_percentage: Optional[float] = None) -> str:
    """'₹5,000 (includes 18% GST)'."""
    gst = gst_percentage or config.DEFAULT_GST_PERCENTAGE
    gst_label = f"{gst:g}"
    return f"{format_price(price)} (includes {gst_label}% GST)"


def split_gst_inclusive(gst_inclusive_price, gst_rate: float) -> PricingBreakdown:
    """Split a GST-inclusive price into base price and GST at the given rate."""
    total = Decimal(str(gst_inclusive_price))
    base_price = _round2(total / (Decimal(1) + Decimal(str(gst_rate))))
    return {
        "base_price": base_price,
        "gst_amount": _round2(total - Decimal(str(base_price))),
        "total_price": float(total),
    }


# =================================================
# DEPRECATED: fixed 18% helpers kept for old call sites.
# New code should read the rate from settings and use split_gst_inclusive.
# =================================================

def calculate_base_price(gst_inclusive_price) -> float:
    return _round2(Decimal(str(gst_inclusive_price)) / (1 + LEGACY_GST_RATE))


def calculate_gst_inclusive_price(base_price) -> float:
    return _round2(Decimal(str(base_price)) * (1 + LEGACY_GST_RATE))


def calculate_gst_amount(base_price) -> float:
    return _round2(Decimal(str(base_price)) * LEGACY_GST_RATE)


def extract_gst_amount(gst_inclusive_price) -> float:
    base_price = calculate_base_price(gst_inclusive_price)
    return _round2(Decimal(str(gst_inclusive_price)) - Decimal(str(base_price)))


def get_pricing_breakdown(gst_inclusive_price) -> PricingBreakdown:
    base_price = calculate_base_price(gst_inclusive_price)
    return {
        "base_price": base_price,
        "gst_amount": calculate_gst_amount(base_price),
        "total_price": gst_inclusive_price,
    }
