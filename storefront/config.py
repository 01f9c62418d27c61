# storefront/config.py

"""
Central configuration file for the Gupta Traders storefront API.
Keep every business rule that may change over time here.
"""

import os

# =================================================
# Shipping defaults
# =================================================
# Used when the store_settings table is empty or unreachable.

# Order value (INR) at or above which the base delivery fee is waived.
DEFAULT_FREE_SHIPPING_THRESHOLD = 10000.0

# Distance (km) within which no per-km charge applies.
DEFAULT_DISTANCE_FREE_RADIUS = 5.0

# Charge per km beyond the free radius.
DEFAULT_SHIPPING_PER_KM_RATE = 50.0

# Flat delivery fee for orders below the free-shipping threshold.
DEFAULT_BASE_SHIPPING_RATE = 500.0


# =================================================
# Tax
# =================================================
# Catalog prices are GST inclusive. 18 means 18%.
DEFAULT_GST_PERCENTAGE = 18.0


# =================================================
# Store location (origin of every delivery)
# =================================================
STORE_LATITUDE = float(os.environ.get("STORE_LATITUDE", "26.9124"))
STORE_LONGITUDE = float(os.environ.get("STORE_LONGITUDE", "75.7873"))


# =================================================
# Geocoding (Nominatim / OpenStreetMap)
# =================================================
NOMINATIM_URL = os.environ.get("NOMINATIM_URL", "https://nominatim.openstreetmap.org/search")
GEOCODING_USER_AGENT = os.environ.get("GEOCODING_USER_AGENT", "GuptaTradersStorefront/1.0 (support@guptatraders.in)")
GEOCODING_TIMEOUT_SECONDS = 10
