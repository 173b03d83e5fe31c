"""
Exception types raised by capture and location providers.
"""


class GeoSnapError(Exception):
    """Base class for GeoSnap errors."""


class PermissionDenied(GeoSnapError):
    """A camera or location capability was not granted."""


class UserCancelled(GeoSnapError):
    """The user dismissed the camera surface without taking a shot."""


class CaptureOrFetchFailure(GeoSnapError):
    """Capture, position fix, or reverse geocoding failed."""


class CameraUnavailable(CaptureOrFetchFailure):
    """The camera could not be opened or returned no frame."""


class LocationUnavailable(CaptureOrFetchFailure):
    """No position fix could be obtained."""


class GeocodingFailed(CaptureOrFetchFailure):
    """The reverse geocoding service raised an error."""


class ConfigurationError(GeoSnapError):
    """A configuration value is present but unusable."""
