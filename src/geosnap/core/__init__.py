"""Core components for GeoSnap."""

from .config import Config
from .metadata import ADDRESS_NOT_AVAILABLE, CaptureMetadata, CaptureResult
from .permissions import CapabilityGrant, PermissionGate
from .pipeline import CaptureEnrichmentPipeline, PipelineState
from .providers import CaptureOptions, CaptureOutcome

__all__ = [
    "Config",
    "ADDRESS_NOT_AVAILABLE",
    "CaptureMetadata",
    "CaptureResult",
    "CapabilityGrant",
    "PermissionGate",
    "CaptureEnrichmentPipeline",
    "PipelineState",
    "CaptureOptions",
    "CaptureOutcome",
]
