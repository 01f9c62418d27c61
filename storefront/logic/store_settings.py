# storefront/logic/store_settings.py
"""
Reads the shipping configuration maintained by the admin settings screens.

Tables:
  - store_settings: key/value rows (values stored as text)
  - shipping_zones: one row per zone
  - products: catalog prices (GST inclusive)

Every read is best-effort: failures are logged and the caller gets "no data",
which the shipping calculator turns into its defaults.
"""
import logging
from typing import Iterable, List, Optional

from .shipping import ShippingSettings, ShippingZone, DEFAULT_SHIPPING_SETTINGS
from ..utils.helpers import to_optional_float

logger = logging.getLogger(__name__)

SHIPPING_SETTING_KEYS = (
    "free_shipping_threshold",
    "distance_free_radius",
    "shipping_per_km_rate",
    "base_shipping_rate",
)
TAX_RATE_KEY = "tax_rate"


def _to_optional_int(value) -> Optional[int]:
    number = to_optional_float(value)
    return None if number is None else int(number)


def fetch_store_settings(client) -> dict:
    """Return store_settings as a {key: value} dict; empty on failure."""
    if not client:
        logger.warning("store_settings skipped: Supabase client not available")
        return {}
    try:
        response = client.table("store_settings").select("key, value").execute()
    except Exception as e:
        logger.error(f"Failed to read store_settings: {e}", exc_info=True)
        return {}
    return {row["key"]: row.get("value") for row in response.data or [] if row.get("key")}


def shipping_settings_from_rows(rows: dict) -> Optional[ShippingSettings]:
    """Build ShippingSettings from store_settings rows. None when no shipping key is set."""
    values = {}
    for key in SHIPPING_SETTING_KEYS:
        number = to_optional_float(rows.get(key))
        if number is not None:
            values[key] = number
    if not values:
        return None
    # keys the admin never saved keep the calculator defaults
    defaults = {key: getattr(DEFAULT_SHIPPING_SETTINGS, key) for key in SHIPPING_SETTING_KEYS}
    defaults.update(values)
    return ShippingSettings(**defaults)


def zone_from_row(row: dict) -> ShippingZone:
    regions = row.get("regions") or ()
    if isinstance(regions, str):
        regions = [r.strip() for r in regions.split(",") if r.strip()]
    return ShippingZone(
        is_active=bool(row.get("is_active")),
        base_rate=to_optional_float(row.get("base_rate")),
        free_shipping_threshold=to_optional_float(row.get("free_shipping_threshold")),
        distance_free_radius=to_optional_float(row.get("distance_free_radius")),
        per_km_rate=to_optional_float(row.get("per_km_rate")),
        max_shipping_distance=to_optional_float(row.get("max_shipping_distance")),
        id=str(row["id"]) if row.get("id") is not None else None,
        name=row.get("name"),
        regions=tuple(regions),
        estimated_days_min=_to_optional_int(row.get("estimated_days_min")),
        estimated_days_max=_to_optional_int(row.get("estimated_days_max")),
    )


def fetch_shipping_zones(client) -> List[ShippingZone]:
    """Zones in creation order, so "first active zone" is stable between requests."""
    if not client:
        logger.warning("shipping_zones skipped: Supabase client not available")
        return []
    try:
        response = client.table("shipping_zones").select("*").order("created_at").execute()
    except Exception as e:
        logger.error(f"Failed to read shipping_zones: {e}", exc_info=True)
        return []
    return [zone_from_row(row) for row in response.data or []]


def fetch_products(client, product_ids: Iterable[str]) -> List[dict]:
    ids = list(dict.fromkeys(product_ids))
    if not client or not ids:
        return []
    try:
        response = (
            client.table("products")
            .select("id, name, price, in_stock")
            .in_("id", ids)
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to read products {ids}: {e}", exc_info=True)
        return []
    products = []
    for row in response.data or []:
        price = to_optional_float(row.get("price"))
        if price is None:
            logger.warning(f"Product {row.get('id')} has no usable price; skipped")
            continue
        products.append({**row, "id": str(row["id"]), "price": price})
    return products


class StoreConfiguration:
    """Snapshot of everything a quote needs, loaded once per request."""

    def __init__(self, settings: Optional[ShippingSettings], zones: List[ShippingZone], tax_rate: Optional[str]):
        self.settings = settings
        self.zones = zones
        self.tax_rate = tax_rate

    @classmethod
    def load(cls, client) -> "StoreConfiguration":
        rows = fetch_store_settings(client)
        tax_rate = rows.get(TAX_RATE_KEY)
        return cls(
            settings=shipping_settings_from_rows(rows),
            zones=fetch_shipping_zones(client),
            tax_rate=str(tax_rate) if tax_rate is not None else None,
        )

    @property
    def effective_settings(self) -> ShippingSettings:
        return self.settings or DEFAULT_SHIPPING_SETTINGS
