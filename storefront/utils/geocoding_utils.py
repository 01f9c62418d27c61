# File: storefront/utils/geocoding_utils.py
import math
import logging
import requests

from .. import config

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371


def haversine_distance(lat1, lon1, lat2, lon2):
    """Great-circle distance in km between two coordinates (Haversine formula)."""
    lat1_rad = math.radians(lat1)
    lon1_rad = math.radians(lon1)
    lat2_rad = math.radians(lat2)
    lon2_rad = math.radians(lon2)

    dlon = lon2_rad - lon1_rad
    dlat = lat2_rad - lat1_rad

    a = math.sin(dlat / 2)**2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2)**2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def geocode_address(street, city, state, pincode, country="India"):
    """
    Geocode a delivery address to latitude and longitude using Nominatim (OpenStreetMap).

    Args:
        street (str): Street line, house number included.
        city (str): City.
        state (str): State, e.g. "Rajasthan".
        pincode (str): Six-digit PIN code.
        country (str): Country name.

    Returns:
        tuple: (latitude, longitude) as floats, or (None, None) if geocoding fails.
    """
    address_parts = [street, city, state, pincode]
    # Drop None and empty strings
    full_address = ", ".join(part.strip() for part in address_parts if part and part.strip())

    if not full_address:
        logger.info("Geocoding: empty address, returning None, None.")
        return None, None

    full_address = f"{full_address}, {country}"

    # Nominatim rejects requests without an identifying User-Agent
    headers = {
        'User-Agent': config.GEOCODING_USER_AGENT
    }
    params = {
        'q': full_address,
        'format': 'json',
        'limit': 1,
        'addressdetails': 0
    }

    try:
        response = requests.get(
            config.NOMINATIM_URL, params=params, headers=headers, timeout=config.GEOCODING_TIMEOUT_SECONDS
        )
        response.raise_for_status()

        results = response.json()

        if results:
            lat = float(results[0].get('lat'))
            lon = float(results[0].get('lon'))
            logger.info(f"Geocoded '{full_address}': lat={lat}, lon={lon}")
            return lat, lon
        logger.warning(f"Geocoding found no result for '{full_address}'")
        return None, None
    except requests.exceptions.RequestException as e:
        logger.error(f"Geocoding HTTP request failed for '{full_address}': {e}")
        return None, None
    except (TypeError, ValueError) as e:
        logger.error(f"Could not parse geocoding response for '{full_address}': {e}")
        return None, None


if __name__ == "__main__":
    print("Testing geocoding...")
    lat, lon = geocode_address("MI Road", "Jaipur", "Rajasthan", "302001")
    if lat and lon:
        km = haversine_distance(config.STORE_LATITUDE, config.STORE_LONGITUDE, lat, lon)
        print(f"MI Road, Jaipur: lat={lat}, lon={lon}, {km:.2f} km from the store")
    else:
        print("Geocoding MI Road failed.")
