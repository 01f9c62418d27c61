# check_shipping_settings.py
import os
from dotenv import load_dotenv
from supabase import create_client, Client

from storefront.logic.shipping import find_active_zone, active_zone_conflict, calculate_shipping_amount
from storefront.logic.store_settings import StoreConfiguration
from storefront.logic.pricing import format_price, get_gst_percentage

# Load credentials from .env
load_dotenv()


def check_shipping_settings():
    """Print the shipping configuration exactly as the calculator resolves it."""
    print("--- CHECKING SHIPPING SETTINGS ---")

    supabase_url = os.environ.get("SUPABASE_URL")
    supabase_key = os.environ.get("SUPABASE_SERVICE_KEY")
    if not supabase_url or not supabase_key:
        print("❌ ERROR: SUPABASE_URL and SUPABASE_SERVICE_KEY must be set in .env")
        return

    supabase: Client = create_client(supabase_url, supabase_key)
    print("✅ Connected to Supabase.")

    store = StoreConfiguration.load(supabase)
    settings = store.effective_settings

    if store.settings is None:
        print("⚠️  store_settings has no shipping keys; using built-in defaults.")
    print(f"  Free shipping from: {format_price(settings.free_shipping_threshold)}")
    print(f"  Free radius:        {settings.distance_free_radius:g} km")
    print(f"  Per km beyond:      {format_price(settings.shipping_per_km_rate)}")
    print(f"  Base rate:          {format_price(settings.base_shipping_rate)}")
    print(f"  GST:                {get_gst_percentage(store.tax_rate):g}%")

    print(f"\nShipping zones: {len(store.zones)}")
    for zone in store.zones:
        status = "active" if zone.is_active else "inactive"
        print(f"  - {zone.name or zone.id} ({status})")

    active = find_active_zone(store.zones)
    if active:
        print(f"\nActive zone in use: {active.name or active.id}")
    if active_zone_conflict(store.zones):
        print("⚠️  More than one zone is active; only the first one is applied. Deactivate the others.")

    print("\nSample quotes:")
    for cart_total, distance in [(5000, 3), (5000, 8), (15000, 3), (15000, 8)]:
        result = calculate_shipping_amount(cart_total, distance, store.zones, store.settings)
        print(f"  {format_price(cart_total)} at {distance} km -> {format_price(result.amount)}")

    print("\n--- CHECK FINISHED ---")


if __name__ == "__main__":
    check_shipping_settings()
