"""
Unit tests for reading shipping configuration from Supabase rows.

Run with: pytest tests/test_store_settings.py -v
"""

import pytest

from storefront.logic.shipping import DEFAULT_SHIPPING_SETTINGS
from storefront.logic.store_settings import (
    StoreConfiguration,
    fetch_products,
    fetch_shipping_zones,
    fetch_store_settings,
    shipping_settings_from_rows,
    zone_from_row,
)
from storefront.utils.helpers import to_optional_float
from conftest import FakeSupabase


class TestShippingSettingsFromRows:

    def test_full_rows(self):
        settings = shipping_settings_from_rows({
            "free_shipping_threshold": "40000",
            "distance_free_radius": "8",
            "shipping_per_km_rate": "30",
            "base_shipping_rate": "750",
        })
        assert settings.free_shipping_threshold == 40000
        assert settings.distance_free_radius == 8
        assert settings.shipping_per_km_rate == 30
        assert settings.base_shipping_rate == 750

    def test_missing_keys_keep_defaults(self):
        settings = shipping_settings_from_rows({"base_shipping_rate": "300"})
        assert settings.base_shipping_rate == 300
        assert settings.free_shipping_threshold == DEFAULT_SHIPPING_SETTINGS.free_shipping_threshold

    def test_no_shipping_keys_is_none(self):
        assert shipping_settings_from_rows({"tax_rate": "18"}) is None
        assert shipping_settings_from_rows({"base_shipping_rate": "   "}) is None

    def test_invalid_values_ignored(self):
        settings = shipping_settings_from_rows({"base_shipping_rate": "abc", "shipping_per_km_rate": 25})
        assert settings.base_shipping_rate == DEFAULT_SHIPPING_SETTINGS.base_shipping_rate
        assert settings.shipping_per_km_rate == 25


class TestZoneFromRow:

    def test_parses_row(self):
        zone = zone_from_row({
            "id": 7,
            "name": "Jaipur City",
            "regions": ["Jaipur", "Sanganer"],
            "base_rate": "300",
            "free_shipping_threshold": None,
            "per_km_rate": 40,
            "max_shipping_distance": "25",
            "estimated_days_min": 2,
            "estimated_days_max": "4",
            "is_active": True,
        })
        assert zone.id == "7"
        assert zone.base_rate == 300
        assert zone.free_shipping_threshold is None
        assert zone.distance_free_radius is None
        assert zone.per_km_rate == 40
        assert zone.max_shipping_distance == 25
        assert zone.regions == ("Jaipur", "Sanganer")
        assert zone.estimated_days_max == 4
        assert zone.is_active is True

    def test_comma_separated_regions(self):
        zone = zone_from_row({"regions": "Jaipur, Ajmer,", "is_active": None})
        assert zone.regions == ("Jaipur", "Ajmer")
        assert zone.is_active is False

    def test_zero_survives(self):
        zone = zone_from_row({"base_rate": 0, "free_shipping_threshold": "0"})
        assert zone.base_rate == 0
        assert zone.free_shipping_threshold == 0


class TestFetchers:

    def test_store_settings(self, fake_supabase):
        rows = fetch_store_settings(fake_supabase)
        assert rows["tax_rate"] == "18"
        assert rows["base_shipping_rate"] == "500"

    def test_no_client(self):
        assert fetch_store_settings(None) == {}
        assert fetch_shipping_zones(None) == []
        assert fetch_products(None, ["1"]) == []

    def test_read_failure_degrades(self):
        client = FakeSupabase(failing={"store_settings", "shipping_zones", "products"})
        assert fetch_store_settings(client) == {}
        assert fetch_shipping_zones(client) == []
        assert fetch_products(client, ["1"]) == []

    def test_zones_in_creation_order(self):
        client = FakeSupabase({"shipping_zones": [
            {"id": "b", "name": "Second", "is_active": True, "created_at": "2025-02-01T00:00:00"},
            {"id": "a", "name": "First", "is_active": True, "created_at": "2025-01-01T00:00:00"},
        ]})
        assert [zone.name for zone in fetch_shipping_zones(client)] == ["First", "Second"]

    def test_products_parse_price(self, fake_supabase):
        products = fetch_products(fake_supabase, ["3", "1", "3"])
        prices = {p["id"]: p["price"] for p in products}
        assert prices == {"1": 45000.0, "3": pytest.approx(1200.50)}

    def test_products_without_price_skipped(self):
        client = FakeSupabase({"products": [{"id": "1", "name": "Stool", "price": None}]})
        assert fetch_products(client, ["1"]) == []

    def test_no_product_ids_skips_query(self, fake_supabase):
        assert fetch_products(fake_supabase, []) == []
        assert fake_supabase.calls == []


class TestStoreConfiguration:

    def test_load(self, fake_supabase):
        store = StoreConfiguration.load(fake_supabase)
        assert store.settings == DEFAULT_SHIPPING_SETTINGS
        assert store.zones == []
        assert store.tax_rate == "18"

    def test_load_without_client_uses_defaults(self):
        store = StoreConfiguration.load(None)
        assert store.settings is None
        assert store.effective_settings == DEFAULT_SHIPPING_SETTINGS
        assert store.tax_rate is None


class TestToOptionalFloat:

    @pytest.mark.parametrize("value", ["inf", "-inf", "nan", "NaN", float("inf"), float("nan"), 10 ** 400])
    def test_non_finite_is_none(self, value):
        assert to_optional_float(value) is None

    @pytest.mark.parametrize("value, expected", [("12.5", 12.5), (7, 7.0), (" 3 ", 3.0)])
    def test_finite_values(self, value, expected):
        assert to_optional_float(value) == expected

    def test_non_finite_settings_row_ignored(self):
        settings = shipping_settings_from_rows({"base_shipping_rate": "inf", "shipping_per_km_rate": "40"})
        assert settings.base_shipping_rate == DEFAULT_SHIPPING_SETTINGS.base_shipping_rate
        assert settings.shipping_per_km_rate == 40
