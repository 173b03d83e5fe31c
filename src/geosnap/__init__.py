"""
GeoSnap - Geotagged Photo Capture

Cross-platform Kivy app that takes a photo and attaches the capture time,
device position and reverse-geocoded address.
"""

__version__ = "0.1.0"
__author__ = "GeoSnap Team"

from .core.metadata import CaptureMetadata, CaptureResult
from .core.pipeline import CaptureEnrichmentPipeline

__all__ = ["CaptureEnrichmentPipeline", "CaptureMetadata", "CaptureResult", "__version__"]
