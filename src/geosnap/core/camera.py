"""
Camera providers for GeoSnap.

Provides still-image capture for desktop platforms:
- OpenCVCameraProvider: USB webcams and video files via OpenCV
- StillImageProvider: an existing photo on disk used as the capture
"""

import asyncio
import logging
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any

import cv2
import numpy as np
from PIL import ExifTags, Image

from .errors import CameraUnavailable, PermissionDenied
from .providers import CaptureOptions, CaptureOutcome

logger = logging.getLogger(__name__)


def default_capture_directory() -> Path:
    """Platform temp directory used for transient captures."""
    return Path(tempfile.gettempdir()) / "geosnap"


def read_embedded_capture_time(path: str | Path) -> str | None:
    """
    Read the original capture time stored in an image's EXIF block.

    Args:
        path: Image file path.

    Returns:
        The DateTimeOriginal value exactly as stored, or None if absent.
    """
    try:
        with Image.open(path) as image:
            exif = image.getexif()
    except OSError as e:
        logger.warning(f"Could not read EXIF from {path}: {e}")
        return None

    tag = ExifTags.Base.DateTimeOriginal
    value = exif.get_ifd(ExifTags.IFD.Exif).get(tag) or exif.get(tag)
    if value is None:
        return None

    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    value = str(value).strip("\x00 ")
    return value or None


class OpenCVCameraProvider:
    """
    Desktop camera provider using OpenCV VideoCapture.

    Works on Windows, macOS, and Linux with USB cameras. Every capture is
    written as a JPEG into the capture directory.

    Usage:
        provider = OpenCVCameraProvider(config['camera'])
        if await provider.request_permission():
            outcome = await provider.capture(CaptureOptions(quality=0.8))
    """

    BACKENDS = {
        "CAP_ANY": cv2.CAP_ANY,
        "CAP_MSMF": cv2.CAP_MSMF,
        "CAP_DSHOW": cv2.CAP_DSHOW,
        "CAP_V4L2": cv2.CAP_V4L2,
        "CAP_AVFOUNDATION": cv2.CAP_AVFOUNDATION,
    }

    def __init__(self, config: dict[str, Any]):
        """
        Initialize OpenCV camera provider.

        Args:
            config: Camera configuration dict with keys:
                - source: Camera index (int) or video file path (str)
                - width: Desired frame width
                - height: Desired frame height
                - backend: OpenCV backend (CAP_MSMF, CAP_DSHOW, etc.)
                - directory: Where captured stills are written
        """
        self.source = config.get("source", 0)
        self.width = config.get("width", 1280)
        self.height = config.get("height", 720)
        self.backend_name = config.get("backend", "CAP_ANY")
        directory = config.get("directory")
        self.directory = Path(directory) if directory else default_capture_directory()

        self._cap: cv2.VideoCapture | None = None
        self._is_open = False

    @property
    def backend(self) -> int:
        """Get OpenCV backend constant."""
        return self.BACKENDS.get(self.backend_name, cv2.CAP_ANY)

    @property
    def is_open(self) -> bool:
        """Check if camera is open and ready."""
        return self._is_open and self._cap is not None and self._cap.isOpened()

    def open(self) -> bool:
        """
        Open the camera for capture.

        Returns:
            True if camera opened successfully, False otherwise.
        """
        if self.is_open:
            return True

        try:
            if isinstance(self.source, str):
                self._cap = cv2.VideoCapture(self.source)
            else:
                self._cap = cv2.VideoCapture(self.source, self.backend)

            if not self._cap.isOpened():
                logger.error(f"Failed to open camera source: {self.source}")
                return False

            self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
            self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
            self._cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)

            actual_width = int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))
            actual_height = int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
            if actual_width != self.width or actual_height != self.height:
                logger.warning(
                    f"Camera resolution mismatch: requested {self.width}x{self.height}, "
                    f"got {actual_width}x{actual_height}"
                )

            self._is_open = True
            logger.info(f"Camera opened: source={self.source}, resolution={actual_width}x{actual_height}")
            return True

        except Exception as e:
            logger.error(f"Error opening camera: {e}")
            return False

    def read(self) -> np.ndarray | None:
        """
        Read a frame from the camera.

        Returns:
            BGR image as numpy array, or None if read failed.
        """
        if not self.is_open:
            return None

        ret, frame = self._cap.read()  # type: ignore
        if not ret:
            logger.warning("Failed to read frame from camera")
            return None

        return frame

    def release(self) -> None:
        """Release camera resources."""
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        self._is_open = False
        logger.info("Camera released")

    def save_frame(self, frame: np.ndarray, options: CaptureOptions) -> CaptureOutcome:
        """
        Encode a frame as JPEG and build the capture outcome.

        Args:
            frame: BGR numpy array.
            options: Capture options (quality, embedded metadata).

        Returns:
            CaptureOutcome pointing at the written file.
        """
        self.directory.mkdir(parents=True, exist_ok=True)
        filename = f"GeoSnap_{datetime.now().strftime('%Y-%m-%d_%H-%M-%S_%f')}.jpg"
        path = self.directory / filename

        if not cv2.imwrite(str(path), frame, [cv2.IMWRITE_JPEG_QUALITY, options.jpeg_quality]):
            raise CameraUnavailable(f"Failed to write capture to {path}")

        logger.info(f"Captured still: {path}")
        embedded = read_embedded_capture_time(path) if options.wants_embedded_metadata else None
        return CaptureOutcome(image_ref=str(path), embedded_capture_time=embedded)

    def _probe(self) -> bool:
        was_open = self.is_open
        opened = self.open()
        if opened and not was_open:
            self.release()
        return opened

    def _grab(self, options: CaptureOptions) -> CaptureOutcome:
        was_open = self.is_open
        if not self.open():
            raise PermissionDenied(f"Camera source {self.source} is not accessible")
        try:
            frame = self.read()
            if frame is None:
                raise CameraUnavailable(f"No frame from camera source {self.source}")
            return self.save_frame(frame, options)
        finally:
            if not was_open:
                self.release()

    async def request_permission(self) -> bool:
        """Desktop platforms have no camera prompt; access means the device opens."""
        return await asyncio.to_thread(self._probe)

    async def capture(self, options: CaptureOptions) -> CaptureOutcome:
        """Grab a single frame without user interaction."""
        return await asyncio.to_thread(self._grab, options)

    def __enter__(self) -> "OpenCVCameraProvider":
        self.open()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.release()


class StillImageProvider:
    """
    Camera provider that hands back an existing photo.

    Useful on desktop and in headless runs where a photo was taken by
    another device and only needs enriching.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def request_permission(self) -> bool:
        return self.path.is_file()

    async def capture(self, options: CaptureOptions) -> CaptureOutcome:
        if not self.path.is_file():
            raise CameraUnavailable(f"Image not found: {self.path}")

        embedded = None
        if options.wants_embedded_metadata:
            embedded = await asyncio.to_thread(read_embedded_capture_time, self.path)
        logger.info(f"Using still image: {self.path} (embedded time: {embedded})")
        return CaptureOutcome(image_ref=str(self.path), embedded_capture_time=embedded)


def get_camera_provider(config: dict[str, Any], image_path: str | None = None):
    """
    Factory function for the desktop camera provider.

    Args:
        config: Camera configuration dictionary.
        image_path: Use this photo instead of a live camera.

    Returns:
        A CameraProvider instance.
    """
    if image_path:
        logger.info("Using StillImageProvider")
        return StillImageProvider(image_path)

    logger.info("Using OpenCVCameraProvider")
    return OpenCVCameraProvider(config)
