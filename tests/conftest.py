"""
Pytest fixtures for GeoSnap tests.

Provides common test fixtures including:
- Fake camera and location providers
- Test configuration
- JPEG files with and without embedded capture time
"""

import asyncio
from datetime import datetime, timezone

import pytest
from PIL import ExifTags, Image

from geosnap.core.metadata import Placemark, PositionFix
from geosnap.core.providers import CaptureOutcome


class FakeCamera:
    """Camera provider returning a scripted outcome."""

    def __init__(self, outcome=None, error=None, granted=True, gate=None, events=None):
        self.outcome = outcome or CaptureOutcome(image_ref="img1")
        self.error = error
        self.granted = granted
        self.gate = gate
        self.events = events if events is not None else []
        self.calls = 0
        self.last_options = None

    async def request_permission(self):
        return self.granted

    async def capture(self, options):
        self.calls += 1
        self.last_options = options
        self.events.append("capture")
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.outcome


class FakeLocation:
    """Location provider returning a scripted fix and placemarks."""

    def __init__(
        self,
        fix=None,
        placemarks=None,
        fix_error=None,
        geocode_error=None,
        granted=True,
        events=None,
    ):
        self.fix = fix or PositionFix(latitude=37.77, longitude=-122.41)
        self.placemarks = placemarks if placemarks is not None else []
        self.fix_error = fix_error
        self.geocode_error = geocode_error
        self.granted = granted
        self.events = events if events is not None else []
        self.fix_cancelled = False
        self.geocode_calls = []

    async def request_permission(self):
        return self.granted

    async def get_current_fix(self):
        self.events.append("fix")
        try:
            await asyncio.sleep(0)
        except asyncio.CancelledError:
            self.fix_cancelled = True
            raise
        if self.fix_error is not None:
            raise self.fix_error
        return self.fix

    async def reverse_geocode(self, latitude, longitude):
        self.geocode_calls.append((latitude, longitude))
        if self.geocode_error is not None:
            raise self.geocode_error
        return self.placemarks


@pytest.fixture
def springfield():
    """Single fully-populated placemark."""
    return Placemark(
        name="1 Main St",
        city="Springfield",
        region="IL",
        postal_code="62701",
        country="USA",
    )


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2024-05-01 17:30:05 UTC."""
    moment = datetime(2024, 5, 1, 17, 30, 5, tzinfo=timezone.utc)
    return lambda: moment


@pytest.fixture
def test_config():
    """Test configuration dictionary."""
    return {
        "camera": {
            "source": 0,
            "width": 640,
            "height": 480,
            "backend": "CAP_ANY",
        },
        "capture": {
            "quality": 0.8,
            "exif": True,
            "timezone": "UTC",
        },
        "location": {
            "latitude": 37.77,
            "longitude": -122.41,
            "geocoder": {
                "user_agent": "geosnap-tests",
                "timeout": 5,
            },
        },
    }


def write_jpeg(path, capture_time: str | None = None):
    """
    Write a small JPEG, optionally with an embedded DateTimeOriginal.

    Args:
        path: Output file path.
        capture_time: EXIF-formatted capture time (YYYY:MM:DD HH:MM:SS).

    Returns:
        The path written.
    """
    image = Image.new("RGB", (16, 16), (200, 120, 40))
    if capture_time is None:
        image.save(path, format="JPEG")
    else:
        exif = Image.Exif()
        exif[ExifTags.Base.DateTimeOriginal] = capture_time
        image.save(path, format="JPEG", exif=exif)
    return path


@pytest.fixture
def photo_with_exif(tmp_path):
    return write_jpeg(tmp_path / "with_exif.jpg", "2024:05:01 10:00:00")


@pytest.fixture
def photo_without_exif(tmp_path):
    return write_jpeg(tmp_path / "plain.jpg")
