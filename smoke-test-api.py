#!/usr/bin/env python3
"""Smoke test against a running server: python smoke-test-api.py [base_url]"""
import json
import sys

import requests

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://127.0.0.1:5000"


def check_endpoint(method, endpoint, data=None, expected_status=200):
    """Call one endpoint and report whether the status matches."""
    url = f"{BASE_URL}{endpoint}"
    print(f"\n🧪 {method} {url}")
    if data:
        print(f"Body: {json.dumps(data, ensure_ascii=False)}")
    try:
        response = requests.request(method, url, json=data, timeout=15)
    except requests.exceptions.RequestException as e:
        print(f"❌ Request failed: {e}")
        return None

    try:
        print(f"Response: {json.dumps(response.json(), indent=2, ensure_ascii=False)}")
    except ValueError:
        print(f"Response (not JSON): {response.text}")

    if response.status_code == expected_status:
        print(f"✅ {response.status_code}")
    else:
        print(f"⚠️ Expected {expected_status}, got {response.status_code}")
    return response


def main():
    print("🚚 STOREFRONT API SMOKE TEST")
    print("=" * 60)

    if not check_endpoint("GET", "/health"):
        print("\n❌ The API looks offline. Aborting.")
        sys.exit(1)

    check_endpoint("GET", "/api/health")
    check_endpoint("GET", "/api/shipping/settings")

    print("\n📦 Shipping quotes")
    check_endpoint("POST", "/api/shipping/calculate", {"cart_total": 5000, "distance_km": 8})
    check_endpoint("POST", "/api/shipping/calculate", {"cart_total": 15000, "distance_km": 3})
    check_endpoint("POST", "/api/shipping/calculate", {
        "cart_total": 15000,
        "address": {"street": "MI Road", "city": "Jaipur", "state": "Rajasthan", "pincode": "302001"},
    })
    check_endpoint("POST", "/api/shipping/calculate", {"distance_km": 8}, expected_status=400)

    print("\n🛒 Checkout quote")
    check_endpoint("POST", "/api/checkout/quote", {
        "items": [{"product_id": "1", "quantity": 1}],
        "distance_km": 12,
    })
    check_endpoint("POST", "/api/checkout/quote", {"items": []}, expected_status=400)

    print("\n" + "=" * 60)
    print("Smoke test finished.")


if __name__ == "__main__":
    main()
