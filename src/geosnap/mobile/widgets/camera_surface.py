"""
Interactive camera surface for GeoSnap.

A full-screen popup with a live preview and Shoot / Cancel buttons. It wraps
an OpenCVCameraProvider and implements the CameraProvider protocol, so the
capture pipeline awaits the user's decision like any other capture.
"""

import asyncio
import logging

from kivy.clock import Clock
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.popup import Popup

from ...core.camera import OpenCVCameraProvider
from ...core.errors import CameraUnavailable
from ...core.providers import CaptureOptions, CaptureOutcome
from .camera_preview import CameraPreview

logger = logging.getLogger(__name__)

PREVIEW_FPS = 30


class CameraSurface(Popup):
    """
    Camera dialog that resolves to a CaptureOutcome.

    Shoot saves the current frame; Cancel or dismissing the popup resolves
    as a cancelled outcome.
    """

    def __init__(self, provider: OpenCVCameraProvider, **kwargs):
        kwargs.setdefault("title", "Camera")
        kwargs.setdefault("size_hint", (0.95, 0.95))
        kwargs.setdefault("auto_dismiss", False)
        super().__init__(**kwargs)

        self.provider = provider
        self._future: asyncio.Future | None = None
        self._options = CaptureOptions()
        self._refresh_event = None
        self._last_frame = None

        layout = BoxLayout(orientation="vertical", spacing=10)

        self.preview = CameraPreview(size_hint=(1, 1))
        layout.add_widget(self.preview)

        buttons = BoxLayout(orientation="horizontal", size_hint=(1, None), height=60, spacing=20)
        cancel_btn = Button(text="Cancel", font_size="16sp")
        cancel_btn.bind(on_press=self._on_cancel)
        buttons.add_widget(cancel_btn)

        shoot_btn = Button(text="Shoot", font_size="16sp", bold=True)
        shoot_btn.bind(on_press=self._on_shoot)
        buttons.add_widget(shoot_btn)

        layout.add_widget(buttons)
        self.content = layout

    async def request_permission(self) -> bool:
        return await self.provider.request_permission()

    async def capture(self, options: CaptureOptions) -> CaptureOutcome:
        """Show the camera and wait for Shoot or Cancel."""
        self._future = asyncio.get_running_loop().create_future()
        self._options = options
        self._last_frame = None

        if not await asyncio.to_thread(self.provider.open):
            raise CameraUnavailable(f"Failed to open camera source: {self.provider.source}")

        self._refresh_event = Clock.schedule_interval(self._refresh, 1.0 / PREVIEW_FPS)
        self.open()

        try:
            return await self._future
        finally:
            self._refresh_event.cancel()
            self._refresh_event = None
            self.dismiss()
            self.provider.release()

    def _refresh(self, dt):
        frame = self.provider.read()
        if frame is not None:
            self._last_frame = frame
            self.preview.update_frame(frame)

    def _on_shoot(self, instance):
        if self._future is None or self._future.done():
            return

        frame = self._last_frame if self._last_frame is not None else self.provider.read()
        if frame is None:
            self._future.set_exception(CameraUnavailable("Camera returned no frame"))
            return

        try:
            outcome = self.provider.save_frame(frame, self._options)
        except Exception as e:
            self._future.set_exception(e)
            return

        self._future.set_result(outcome)

    def _on_cancel(self, instance):
        self._resolve_cancelled()

    def on_dismiss(self):
        self._resolve_cancelled()

    def _resolve_cancelled(self):
        if self._future is not None and not self._future.done():
            logger.info("Camera dismissed without a shot")
            self._future.set_result(CaptureOutcome.cancelled_by_user())
