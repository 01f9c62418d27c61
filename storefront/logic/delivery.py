# storefront/logic/delivery.py
import logging
from typing import Tuple

from .. import config
from ..utils.helpers import to_optional_float
from ..utils.geocoding_utils import haversine_distance, geocode_address

logger = logging.getLogger(__name__)

SOURCE_EXPLICIT = "distance_km"
SOURCE_COORDINATES = "coordinates"
SOURCE_ADDRESS = "address"
SOURCE_NONE = "none"


def _required_float(data: dict, key: str) -> float:
    number = to_optional_float(data.get(key))
    if number is None:
        raise ValueError(f"{key} must be a number")
    return number


def resolve_distance(data: dict) -> Tuple[float, str]:
    """
    Work out the delivery distance (km) for a quote request.

    Precedence: explicit distance_km, then customer_latitude/customer_longitude,
    then an address to geocode. With none of them the distance is 0.

    Raises:
        ValueError: a field is present but not numeric.
    """
    if data.get("distance_km") is not None:
        return _required_float(data, "distance_km"), SOURCE_EXPLICIT

    if data.get("customer_latitude") is not None or data.get("customer_longitude") is not None:
        latitude = _required_float(data, "customer_latitude")
        longitude = _required_float(data, "customer_longitude")
        distance = haversine_distance(config.STORE_LATITUDE, config.STORE_LONGITUDE, latitude, longitude)
        logger.info(f"Distance from coordinates: {distance:.2f} km")
        return distance, SOURCE_COORDINATES

    address = data.get("address")
    if isinstance(address, dict):
        latitude, longitude = geocode_address(
            address.get("street"), address.get("city"), address.get("state"), address.get("pincode")
        )
        if latitude is not None and longitude is not None:
            distance = haversine_distance(config.STORE_LATITUDE, config.STORE_LONGITUDE, latitude, longitude)
            logger.info(f"Distance from geocoded address: {distance:.2f} km")
            return distance, SOURCE_ADDRESS
        logger.warning("Address could not be geocoded; quoting at distance 0")

    return 0.0, SOURCE_NONE
