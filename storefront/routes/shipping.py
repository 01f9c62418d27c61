# storefront/routes/shipping.py
from flask import Blueprint, request, jsonify
import logging
from typing import Optional

from ..utils.helpers import supabase, serialize_data, to_optional_float
from ..logic.shipping import (
    DEFAULT_SHIPPING_SETTINGS,
    ShippingResult,
    calculate_shipping_amount,
    find_active_zone,
    active_zone_conflict,
)
from ..logic.pricing import format_price
from ..logic.store_settings import StoreConfiguration
from ..logic.delivery import resolve_distance

logger = logging.getLogger(__name__)

shipping_bp = Blueprint('shipping', __name__)


def shipping_payload(result: ShippingResult) -> dict:
    """JSON view of a ShippingResult; money and distances rounded to 2 places."""
    breakdown = {
        key: value if isinstance(value, bool) else round(value, 2)
        for key, value in result.breakdown.to_dict().items()
    }
    return {
        "amount": round(result.amount, 2),
        "formatted_amount": format_price(result.amount),
        "breakdown": breakdown,
    }


def zone_payload(zone) -> Optional[dict]:
    if zone is None:
        return None
    return {
        "id": zone.id,
        "name": zone.name,
        "regions": list(zone.regions),
        "is_active": zone.is_active,
        "base_rate": zone.base_rate,
        "free_shipping_threshold": zone.free_shipping_threshold,
        "distance_free_radius": zone.distance_free_radius,
        "per_km_rate": zone.per_km_rate,
        "max_shipping_distance": zone.max_shipping_distance,
        "estimated_days_min": zone.estimated_days_min,
        "estimated_days_max": zone.estimated_days_max,
    }


@shipping_bp.route('/calculate', methods=['POST'])
def calculate_shipping():
    """Quote the shipping charge for a cart subtotal and a destination."""
    try:
        logger.info("=== START calculate_shipping ===")
        data = request.get_json(silent=True) or {}
        logger.info(f"Received data: {data}")

        if data.get("cart_total") is None:
            return jsonify({"status": "error", "error": "cart_total is required"}), 400
        cart_total = to_optional_float(data.get("cart_total"))
        if cart_total is None:
            return jsonify({"status": "error", "error": "cart_total must be a number"}), 400

        distance_km, distance_source = resolve_distance(data)

        store = StoreConfiguration.load(supabase)
        result = calculate_shipping_amount(cart_total, distance_km, store.zones, store.settings)

        payload = shipping_payload(result)
        payload["distance_source"] = distance_source
        logger.info(f"Shipping quote: {payload['amount']} for {cart_total} at {distance_km:.2f} km")
        return jsonify({"status": "success", "data": payload}), 200

    except ValueError as e:
        logger.warning(f"Validation error: {e}")
        return jsonify({"status": "error", "error": str(e)}), 400

    except Exception as e:
        logger.error(f"Unexpected error while calculating shipping: {e}", exc_info=True)
        return jsonify({"status": "error", "error": "Internal error while calculating shipping"}), 500


@shipping_bp.route('/settings', methods=['GET'])
def get_shipping_settings():
    """Resolved shipping configuration, as the calculator will see it."""
    try:
        store = StoreConfiguration.load(supabase)
        settings = store.effective_settings
        active_zone = find_active_zone(store.zones)
        data = {
            "settings": {
                "free_shipping_threshold": settings.free_shipping_threshold,
                "distance_free_radius": settings.distance_free_radius,
                "shipping_per_km_rate": settings.shipping_per_km_rate,
                "base_shipping_rate": settings.base_shipping_rate,
            },
            "using_defaults": store.settings is None,
            "zones": [zone_payload(zone) for zone in store.zones],
            "active_zone": zone_payload(active_zone),
            "active_zone_conflict": active_zone_conflict(store.zones),
            "tax_rate": store.tax_rate,
        }
        return jsonify({"status": "success", "data": serialize_data(data)}), 200
    except Exception as e:
        logger.error(f"Unexpected error while reading shipping settings: {e}", exc_info=True)
        return jsonify({"status": "error", "error": "Internal error while reading shipping settings"}), 500


@shipping_bp.route('/test', methods=['GET'])
def test_shipping_calculator():
    """Health check for the shipping service."""
    return jsonify({
        "status": "success",
        "message": "Shipping calculator is up",
        "config": {
            "free_shipping_threshold": DEFAULT_SHIPPING_SETTINGS.free_shipping_threshold,
            "distance_free_radius": DEFAULT_SHIPPING_SETTINGS.distance_free_radius,
            "shipping_per_km_rate": DEFAULT_SHIPPING_SETTINGS.shipping_per_km_rate,
            "base_shipping_rate": DEFAULT_SHIPPING_SETTINGS.base_shipping_rate,
        }
    }), 200
