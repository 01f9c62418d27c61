# storefront/routes/checkout.py
from flask import Blueprint, request, jsonify
import logging

from ..utils.helpers import supabase
from ..logic.cart import Cart, lookup_from_products
from ..logic.shipping import calculate_shipping_amount, find_active_zone
from ..logic.pricing import (
    format_price,
    get_gst_percentage,
    get_gst_rate,
    split_gst_inclusive,
)
from ..logic.store_settings import StoreConfiguration, fetch_products
from ..logic.delivery import resolve_distance
from .shipping import shipping_payload

logger = logging.getLogger(__name__)

checkout_bp = Blueprint('checkout', __name__)


@checkout_bp.route('/quote', methods=['POST'])
def checkout_quote():
    """Price a cart: subtotal, GST included, shipping and grand total."""
    try:
        logger.info("=== START checkout_quote ===")
        data = request.get_json(silent=True) or {}

        if "items" not in data:
            return jsonify({"status": "error", "error": "items is required"}), 400
        cart = Cart.from_payload(data["items"])
        if not cart.items:
            return jsonify({"status": "error", "error": "The cart is empty"}), 400

        distance_km, distance_source = resolve_distance(data)

        products = fetch_products(supabase, [item.product_id for item in cart.items])
        lookup = lookup_from_products(products)
        missing = cart.missing_products(lookup)
        if missing:
            logger.warning(f"Products not found for quote: {missing}")
        if not cart.lines(lookup):
            return jsonify({
                "status": "error",
                "error": "None of the requested products were found",
                "missing_products": missing,
            }), 400

        lines = [
            {
                "product_id": item.product_id,
                "name": product.get("name"),
                "quantity": item.quantity,
                "unit_price": product["price"],
                "line_total": round(product["price"] * item.quantity, 2),
                "in_stock": product.get("in_stock", True),
            }
            for item, product in cart.lines(lookup)
        ]
        subtotal = round(cart.total(lookup), 2)

        store = StoreConfiguration.load(supabase)
        gst_percentage = get_gst_percentage(store.tax_rate)
        gst = split_gst_inclusive(subtotal, get_gst_rate(store.tax_rate))

        shipping = calculate_shipping_amount(subtotal, distance_km, store.zones, store.settings)
        shipping_data = shipping_payload(shipping)
        shipping_data["distance_source"] = distance_source

        active_zone = find_active_zone(store.zones)
        estimated_delivery = None
        if active_zone and active_zone.estimated_days_min is not None and active_zone.estimated_days_max is not None:
            estimated_delivery = f"{active_zone.estimated_days_min}-{active_zone.estimated_days_max} days"

        total = round(subtotal + shipping_data["amount"], 2)

        result = {
            "status": "success",
            "data": {
                "items": lines,
                "item_count": sum(line["quantity"] for line in lines),
                "missing_products": missing,
                "subtotal": subtotal,
                # label follows gst_percentage, 0% included
                "formatted_subtotal": f"{format_price(subtotal)} (includes {gst_percentage:g}% GST)",
                "gst_percentage": gst_percentage,
                "gst_included": gst["gst_amount"],
                "subtotal_before_gst": gst["base_price"],
                "shipping": shipping_data,
                "estimated_delivery": estimated_delivery,
                "total": total,
                "formatted_total": format_price(total),
            }
        }
        logger.info(f"Quote: subtotal {subtotal}, shipping {shipping_data['amount']}, total {total}")
        return jsonify(result), 200

    except ValueError as e:
        logger.warning(f"Validation error: {e}")
        return jsonify({"status": "error", "error": str(e)}), 400

    except Exception as e:
        logger.error(f"Unexpected error while building checkout quote: {e}", exc_info=True)
        return jsonify({"status": "error", "error": "Internal error while building the quote"}), 500
