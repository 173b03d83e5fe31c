"""
Unit tests for camera providers and EXIF reading.
"""

import asyncio

import cv2
import numpy as np
import pytest

from geosnap.core.camera import (
    OpenCVCameraProvider,
    StillImageProvider,
    get_camera_provider,
    read_embedded_capture_time,
)
from geosnap.core.errors import CameraUnavailable
from geosnap.core.providers import CaptureOptions, CaptureOutcome


class TestEmbeddedCaptureTime:
    """Tests for reading DateTimeOriginal."""

    def test_reads_exif_time(self, photo_with_exif):
        assert read_embedded_capture_time(photo_with_exif) == "2024:05:01 10:00:00"

    def test_missing_exif_time(self, photo_without_exif):
        assert read_embedded_capture_time(photo_without_exif) is None

    def test_unreadable_file(self, tmp_path):
        bogus = tmp_path / "not_an_image.jpg"
        bogus.write_bytes(b"definitely not a jpeg")
        assert read_embedded_capture_time(bogus) is None


class TestCaptureOptions:
    """Tests for quality mapping."""

    @pytest.mark.parametrize(
        "quality,expected",
        [(0.8, 80), (1.0, 100), (0.0, 0), (1.7, 100), (-0.2, 0)],
    )
    def test_jpeg_quality(self, quality, expected):
        assert CaptureOptions(quality=quality).jpeg_quality == expected

    def test_outcome_has_image(self):
        assert CaptureOutcome(image_ref="a.jpg").has_image
        assert not CaptureOutcome.cancelled_by_user().has_image
        assert not CaptureOutcome(cancelled=True, image_ref="a.jpg").has_image


class TestStillImageProvider:
    """Tests for using an existing photo as the capture."""

    def test_capture_with_embedded_time(self, photo_with_exif):
        provider = StillImageProvider(photo_with_exif)

        assert asyncio.run(provider.request_permission())
        outcome = asyncio.run(provider.capture(CaptureOptions()))

        assert outcome.image_ref == str(photo_with_exif)
        assert outcome.embedded_capture_time == "2024:05:01 10:00:00"

    def test_embedded_time_not_requested(self, photo_with_exif):
        provider = StillImageProvider(photo_with_exif)

        outcome = asyncio.run(provider.capture(CaptureOptions(wants_embedded_metadata=False)))

        assert outcome.embedded_capture_time is None

    def test_missing_file(self, tmp_path):
        provider = StillImageProvider(tmp_path / "gone.jpg")

        assert not asyncio.run(provider.request_permission())
        with pytest.raises(CameraUnavailable):
            asyncio.run(provider.capture(CaptureOptions()))


class TestOpenCVCameraProvider:
    """Tests that do not need a physical camera."""

    @pytest.fixture
    def provider(self, tmp_path, test_config):
        camera_config = dict(test_config["camera"], directory=str(tmp_path / "captures"))
        return OpenCVCameraProvider(camera_config)

    def test_save_frame_writes_jpeg(self, provider):
        frame = np.zeros((48, 64, 3), dtype=np.uint8)
        cv2.rectangle(frame, (10, 10), (40, 30), (0, 0, 255), -1)

        outcome = provider.save_frame(frame, CaptureOptions(quality=0.9))

        saved = cv2.imread(outcome.image_ref)
        assert saved is not None
        assert saved.shape == (48, 64, 3)
        assert outcome.image_ref.endswith(".jpg")
        assert outcome.embedded_capture_time is None

    def test_read_before_open(self, provider):
        assert provider.read() is None
        assert not provider.is_open

    def test_release_is_idempotent(self, provider):
        provider.release()
        provider.release()
        assert not provider.is_open

    def test_unknown_backend_falls_back(self, test_config):
        provider = OpenCVCameraProvider(dict(test_config["camera"], backend="CAP_NOPE"))
        assert provider.backend == cv2.CAP_ANY

    def test_default_directory(self, test_config):
        provider = OpenCVCameraProvider(test_config["camera"])
        assert provider.directory.name == "geosnap"


class TestProviderFactory:
    def test_image_path_selects_still_provider(self, photo_with_exif, test_config):
        provider = get_camera_provider(test_config["camera"], image_path=str(photo_with_exif))
        assert isinstance(provider, StillImageProvider)

    def test_default_is_opencv(self, test_config):
        assert isinstance(get_camera_provider(test_config["camera"]), OpenCVCameraProvider)
