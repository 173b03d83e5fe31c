"""
Capability provider interfaces.

The capture pipeline only talks to these protocols, so desktop, mobile and
test implementations are interchangeable.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .metadata import Placemark, PositionFix


@dataclass(frozen=True)
class CaptureOptions:
    """
    Options passed to a camera capture.

    Attributes:
        quality: JPEG quality from 0.0 to 1.0
        wants_embedded_metadata: Read the embedded capture time from the image
    """

    quality: float = 0.8
    wants_embedded_metadata: bool = True

    @property
    def jpeg_quality(self) -> int:
        """Quality mapped to the 0-100 scale used by JPEG encoders."""
        return int(round(min(max(self.quality, 0.0), 1.0) * 100))


@dataclass(frozen=True)
class CaptureOutcome:
    """Result of a camera capture: either cancelled or an image reference."""

    cancelled: bool = False
    image_ref: str | None = None
    embedded_capture_time: str | None = None

    @classmethod
    def cancelled_by_user(cls) -> "CaptureOutcome":
        return cls(cancelled=True)

    @property
    def has_image(self) -> bool:
        return not self.cancelled and bool(self.image_ref)


@runtime_checkable
class CameraProvider(Protocol):
    """Protocol for camera capability providers."""

    async def request_permission(self) -> bool:
        """Ask for camera access. Returns True when granted."""
        ...

    async def capture(self, options: CaptureOptions) -> CaptureOutcome:
        """Capture one still image, or report that the user cancelled."""
        ...


@runtime_checkable
class LocationProvider(Protocol):
    """Protocol for location capability providers."""

    async def request_permission(self) -> bool:
        """Ask for foreground location access. Returns True when granted."""
        ...

    async def get_current_fix(self) -> PositionFix:
        """Get the current device position."""
        ...

    async def reverse_geocode(self, latitude: float, longitude: float) -> list[Placemark]:
        """Translate a position into zero or more locality candidates."""
        ...
