"""
Unit tests for the configured location provider.
"""

import asyncio
from types import SimpleNamespace

import pytest
from geopy.exc import GeocoderTimedOut

from geosnap.core.errors import GeocodingFailed, LocationUnavailable
from geosnap.core.location import ConfiguredLocationProvider, placemark_from_raw
from geosnap.core.metadata import Placemark, PositionFix


class FakeGeocoder:
    """Stands in for geopy's Nominatim."""

    def __init__(self, raws=None, error=None):
        self.raws = raws
        self.error = error
        self.queries = []

    def reverse(self, query, exactly_one=True):
        self.queries.append((query, exactly_one))
        if self.error is not None:
            raise self.error
        if self.raws is None:
            return None
        return [SimpleNamespace(raw=raw) for raw in self.raws]


SPRINGFIELD_RAW = {
    "name": "",
    "display_name": "1, Main Street, Springfield, Illinois, 62701, United States",
    "address": {
        "house_number": "1",
        "road": "Main Street",
        "city": "Springfield",
        "state": "Illinois",
        "postcode": "62701",
        "country": "United States",
    },
}


class TestPlacemarkFromRaw:
    """Tests for mapping Nominatim results."""

    def test_street_used_when_no_name(self):
        assert placemark_from_raw(SPRINGFIELD_RAW) == Placemark(
            name="1 Main Street",
            city="Springfield",
            region="Illinois",
            postal_code="62701",
            country="United States",
        )

    def test_named_place(self):
        raw = {"name": "Golden Gate Park", "address": {"city": "San Francisco"}}
        place = placemark_from_raw(raw)
        assert place.name == "Golden Gate Park"
        assert place.city == "San Francisco"

    @pytest.mark.parametrize("key", ["town", "village", "hamlet"])
    def test_smaller_settlements(self, key):
        place = placemark_from_raw({"address": {key: "Smallville"}})
        assert place.city == "Smallville"

    def test_empty_result(self):
        assert placemark_from_raw({}) == Placemark()


class TestConfiguredLocationProvider:
    """Tests for the configured fix and reverse geocoding."""

    def test_fix_from_config(self, test_config):
        provider = ConfiguredLocationProvider(test_config["location"], geocoder=FakeGeocoder())

        assert asyncio.run(provider.request_permission())
        assert asyncio.run(provider.get_current_fix()) == PositionFix(37.77, -122.41)

    def test_no_fix_configured(self):
        provider = ConfiguredLocationProvider({}, geocoder=FakeGeocoder())

        assert not asyncio.run(provider.request_permission())
        with pytest.raises(LocationUnavailable):
            asyncio.run(provider.get_current_fix())

    def test_reverse_geocode(self, test_config):
        geocoder = FakeGeocoder([SPRINGFIELD_RAW])
        provider = ConfiguredLocationProvider(test_config["location"], geocoder=geocoder)

        places = asyncio.run(provider.reverse_geocode(37.77, -122.41))

        assert [p.city for p in places] == ["Springfield"]
        assert geocoder.queries == [((37.77, -122.41), False)]

    def test_no_results(self, test_config):
        provider = ConfiguredLocationProvider(test_config["location"], geocoder=FakeGeocoder(None))
        assert asyncio.run(provider.reverse_geocode(0.0, 0.0)) == []

    def test_geocoder_error(self, test_config):
        geocoder = FakeGeocoder(error=GeocoderTimedOut("timed out"))
        provider = ConfiguredLocationProvider(test_config["location"], geocoder=geocoder)

        with pytest.raises(GeocodingFailed):
            asyncio.run(provider.reverse_geocode(37.77, -122.41))

    def test_default_geocoder_is_nominatim(self, test_config):
        from geopy.geocoders import Nominatim

        provider = ConfiguredLocationProvider(test_config["location"])
        assert isinstance(provider.geocoder, Nominatim)
