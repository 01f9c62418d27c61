# storefront/logic/shipping.py
"""
Distance-based shipping fee calculation.

Rules:
  1. Order value >= free_shipping_threshold:
     - distance <= distance_free_radius: free shipping (0)
     - distance > distance_free_radius: (distance - free_radius) * per_km_rate
  2. Order value < free_shipping_threshold:
     - base_rate, plus (distance - free_radius) * per_km_rate when the
       distance is beyond the free radius

An active shipping zone may override any of the four rates and cap the
distance with max_shipping_distance.
"""
import logging
import warnings
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .. import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShippingSettings:
    """Store-wide shipping configuration (store_settings table)."""
    free_shipping_threshold: float = config.DEFAULT_FREE_SHIPPING_THRESHOLD
    distance_free_radius: float = config.DEFAULT_DISTANCE_FREE_RADIUS
    shipping_per_km_rate: float = config.DEFAULT_SHIPPING_PER_KM_RATE
    base_shipping_rate: float = config.DEFAULT_BASE_SHIPPING_RATE


DEFAULT_SHIPPING_SETTINGS = ShippingSettings()


@dataclass(frozen=True)
class ShippingZone:
    """Admin-configured override. None on a rate means inherit from settings."""
    is_active: bool = False
    base_rate: Optional[float] = None
    free_shipping_threshold: Optional[float] = None
    distance_free_radius: Optional[float] = None
    per_km_rate: Optional[float] = None
    max_shipping_distance: Optional[float] = None
    id: Optional[str] = None
    name: Optional[str] = None
    regions: Tuple[str, ...] = field(default_factory=tuple)
    estimated_days_min: Optional[int] = None
    estimated_days_max: Optional[int] = None


@dataclass(frozen=True)
class ShippingBreakdown:
    base_rate: float
    distance_km: float
    distance_free_radius: float
    distance_charged: float
    per_km_rate: float
    distance_charge: float
    is_free_shipping: bool
    order_value: float
    free_shipping_threshold: float
    total_shipping_charge: float

    def to_dict(self) -> dict:
        return {
            "base_rate": self.base_rate,
            "distance_km": self.distance_km,
            "distance_free_radius": self.distance_free_radius,
            "distance_charged": self.distance_charged,
            "per_km_rate": self.per_km_rate,
            "distance_charge": self.distance_charge,
            "is_free_shipping": self.is_free_shipping,
            "order_value": self.order_value,
            "free_shipping_threshold": self.free_shipping_threshold,
            "total_shipping_charge": self.total_shipping_charge,
        }


@dataclass(frozen=True)
class ShippingResult:
    amount: float
    breakdown: ShippingBreakdown


def find_active_zone(shipping_zones: Optional[Sequence[ShippingZone]]) -> Optional[ShippingZone]:
    """Return the first active zone in list order, or None."""
    if not shipping_zones:
        return None
    active = [zone for zone in shipping_zones if zone.is_active]
    if not active:
        return None
    if len(active) > 1:
        names = ", ".join(zone.name or zone.id or "?" for zone in active)
        logger.warning(f"{len(active)} shipping zones are active ({names}); using the first one")
    return active[0]


def active_zone_conflict(shipping_zones: Optional[Sequence[ShippingZone]]) -> bool:
    """True when more than one zone is flagged active."""
    return sum(1 for zone in shipping_zones or () if zone.is_active) > 1


def calculate_shipping_amount(
    cart_total: float,
    distance_km: float = 0,
    shipping_zones: Optional[Sequence[ShippingZone]] = None,
    shipping_settings: Optional[ShippingSettings] = None,
) -> ShippingResult:
    """
    Calculate the shipping charge and its breakdown.

    Args:
        cart_total: Cart subtotal (INR).
        distance_km: Delivery distance in km.
        shipping_zones: Zones from admin settings; the first active one overrides the settings.
        shipping_settings: Store settings; defaults are used when omitted.

    Returns:
        ShippingResult with the amount and every resolved parameter.
    """
    settings = shipping_settings or DEFAULT_SHIPPING_SETTINGS

    free_shipping_threshold = settings.free_shipping_threshold
    distance_free_radius = settings.distance_free_radius
    per_km_rate = settings.shipping_per_km_rate
    base_rate = settings.base_shipping_rate

    actual_distance = distance_km or 0

    zone = find_active_zone(shipping_zones)
    if zone:
        if zone.free_shipping_threshold is not None:
            free_shipping_threshold = zone.free_shipping_threshold
        if zone.distance_free_radius is not None:
            distance_free_radius = zone.distance_free_radius
        if zone.per_km_rate is not None:
            per_km_rate = zone.per_km_rate
        if zone.base_rate is not None:
            base_rate = zone.base_rate
        # zero or missing max distance means "no cap"
        if zone.max_shipping_distance:
            actual_distance = min(actual_distance, zone.max_shipping_distance)

    distance_charged = max(0, actual_distance - distance_free_radius)
    distance_charge = 0

    if cart_total >= free_shipping_threshold:
        # Base rate waived; only the distance beyond the free radius is charged
        if actual_distance <= distance_free_radius:
            total_shipping_charge = 0
        else:
            distance_charge = distance_charged * per_km_rate
            total_shipping_charge = distance_charge
    else:
        total_shipping_charge = base_rate
        if actual_distance > distance_free_radius:
            distance_charge = distance_charged * per_km_rate
            total_shipping_charge += distance_charge

    breakdown = ShippingBreakdown(
        base_rate=base_rate,
        distance_km=actual_distance,
        distance_free_radius=distance_free_radius,
        distance_charged=distance_charged,
        per_km_rate=per_km_rate,
        distance_charge=distance_charge,
        is_free_shipping=cart_total >= free_shipping_threshold and actual_distance <= distance_free_radius,
        order_value=cart_total,
        free_shipping_threshold=free_shipping_threshold,
        total_shipping_charge=total_shipping_charge,
    )

    return ShippingResult(amount=total_shipping_charge, breakdown=breakdown)


def calculate_shipping_amount_legacy(
    cart_total: float,
    shipping_zones: Optional[List[ShippingZone]] = None,
    shipping_settings: Optional[ShippingSettings] = None,
) -> float:
    """DEPRECATED: returns only the amount, at distance 0."""
    warnings.warn(
        "calculate_shipping_amount_legacy is deprecated; use calculate_shipping_amount",
        DeprecationWarning,
        stacklevel=2,
    )
    return calculate_shipping_amount(cart_total, 0, shipping_zones, shipping_settings).amount
