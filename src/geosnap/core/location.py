"""
Location provider for GeoSnap.

Desktop machines have no GPS receiver, so the position fix comes from
configuration. Reverse geocoding goes through OpenStreetMap Nominatim via
geopy.
"""

import asyncio
import logging
from typing import Any

from geopy.exc import GeopyError
from geopy.geocoders import Nominatim

from .errors import GeocodingFailed, LocationUnavailable
from .metadata import Placemark, PositionFix

logger = logging.getLogger(__name__)

# Nominatim reports the settlement under the most specific key it knows
CITY_KEYS = ("city", "town", "village", "hamlet", "municipality")


def placemark_from_raw(raw: dict[str, Any]) -> Placemark:
    """
    Map a Nominatim result onto a Placemark.

    Args:
        raw: The `raw` dict of a geopy Location from Nominatim.

    Returns:
        Placemark with missing fields left as None.
    """
    address = raw.get("address") or {}

    name = raw.get("name")
    if not name:
        street = " ".join(
            part for part in (address.get("house_number"), address.get("road")) if part
        )
        name = street or None

    city = next((address[key] for key in CITY_KEYS if address.get(key)), None)

    return Placemark(
        name=name,
        city=city,
        region=address.get("state"),
        postal_code=address.get("postcode"),
        country=address.get("country"),
    )


class ConfiguredLocationProvider:
    """
    Location provider backed by a configured fix and Nominatim.

    Usage:
        provider = ConfiguredLocationProvider(config['location'])
        fix = await provider.get_current_fix()
        places = await provider.reverse_geocode(fix.latitude, fix.longitude)
    """

    def __init__(self, config: dict[str, Any], geocoder: Any = None):
        """
        Initialize the location provider.

        Args:
            config: Location configuration dict with keys:
                - latitude, longitude: Fixed device position
                - geocoder.user_agent: User-Agent sent to Nominatim
                - geocoder.domain: Nominatim host
                - geocoder.timeout: HTTP timeout in seconds
            geocoder: Object with a geopy-style reverse(); defaults to Nominatim.
        """
        self.latitude = config.get("latitude")
        self.longitude = config.get("longitude")

        geocoder_config = config.get("geocoder") or {}
        if geocoder is None:
            geocoder = Nominatim(
                user_agent=geocoder_config.get("user_agent", "geosnap"),
                domain=geocoder_config.get("domain", "nominatim.openstreetmap.org"),
                timeout=geocoder_config.get("timeout", 10),
            )
        self.geocoder = geocoder

    @property
    def has_fix(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    async def request_permission(self) -> bool:
        """Location counts as granted once a position is configured."""
        if not self.has_fix:
            logger.warning("No location configured (location.latitude / location.longitude)")
        return self.has_fix

    async def get_current_fix(self) -> PositionFix:
        if not self.has_fix:
            raise LocationUnavailable("No position fix available")
        return PositionFix(latitude=float(self.latitude), longitude=float(self.longitude))

    async def reverse_geocode(self, latitude: float, longitude: float) -> list[Placemark]:
        return await asyncio.to_thread(self._reverse, latitude, longitude)

    def _reverse(self, latitude: float, longitude: float) -> list[Placemark]:
        try:
            locations = self.geocoder.reverse((latitude, longitude), exactly_one=False)
        except GeopyError as e:
            raise GeocodingFailed(f"Reverse geocoding failed for {latitude}, {longitude}: {e}") from e

        places = [placemark_from_raw(location.raw) for location in locations or []]
        logger.debug(f"Reverse geocode {latitude}, {longitude}: {len(places)} candidate(s)")
        return places
