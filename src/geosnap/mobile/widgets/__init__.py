"""Widget modules for GeoSnap mobile UI."""

from .camera_preview import CameraPreview
from .camera_surface import CameraSurface
from .capture_button import CaptureButton
from .metadata_panel import MetadataPanel
from .notice import show_notice

__all__ = ["CameraPreview", "CameraSurface", "CaptureButton", "MetadataPanel", "show_notice"]
