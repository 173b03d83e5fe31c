"""
Capture metadata data structures and formatting rules.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

ADDRESS_NOT_AVAILABLE = "Address not available"

# MM/DD/YYYY, HH:mm:ss on a 24-hour clock
TIMESTAMP_FORMAT = "%m/%d/%Y, %H:%M:%S"


@dataclass(frozen=True)
class PositionFix:
    """Device position in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class Placemark:
    """One reverse geocoding candidate. Any field may be missing."""

    name: str | None = None
    city: str | None = None
    region: str | None = None
    postal_code: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class CaptureMetadata:
    """
    Metadata attached to a single captured photo.

    Attributes:
        captured_at: Embedded capture time of the image, or the formatted
            wall-clock time when the image carries none
        latitude: Latitude of the position fix taken at capture time
        longitude: Longitude of the position fix taken at capture time
        address: Comma-joined locality fields or ADDRESS_NOT_AVAILABLE
    """

    captured_at: str
    latitude: float
    longitude: float
    address: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "captured_at": self.captured_at,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "address": self.address,
        }


@dataclass(frozen=True)
class CaptureResult:
    """A captured image reference paired with its metadata."""

    image_ref: str
    metadata: CaptureMetadata

    def to_dict(self) -> dict[str, Any]:
        return {"image_ref": self.image_ref, "metadata": self.metadata.to_dict()}


def format_address(placemarks: list[Placemark]) -> str:
    """
    Build the address string from reverse geocoding candidates.

    Only the first candidate is used. Missing fields become empty segments so
    the result always has five comma-separated parts.
    """
    if not placemarks:
        return ADDRESS_NOT_AVAILABLE

    place = placemarks[0]
    fields = (place.name, place.city, place.region, place.postal_code, place.country)
    return ", ".join(field or "" for field in fields)


def format_timestamp(moment: datetime, timezone: str) -> str:
    """Format a moment as MM/DD/YYYY, HH:mm:ss in the given IANA time zone."""
    return moment.astimezone(ZoneInfo(timezone)).strftime(TIMESTAMP_FORMAT)


def resolve_captured_at(embedded: str | None, moment: datetime, timezone: str) -> str:
    """Prefer the embedded capture time; fall back to the formatted moment."""
    if embedded:
        return embedded
    return format_timestamp(moment, timezone)


def metadata_lines(metadata: CaptureMetadata) -> list[str]:
    """Labeled display lines for the result screen."""
    return [
        f"Timestamp: {metadata.captured_at}",
        f"Latitude: {metadata.latitude}",
        f"Longitude: {metadata.longitude}",
        f"Address: {metadata.address}",
    ]
