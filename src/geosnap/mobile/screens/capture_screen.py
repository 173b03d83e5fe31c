"""
Capture panel for GeoSnap.

Hosts the shutter button, runs the permission gate whenever the panel is
activated, and drives the capture enrichment pipeline.
"""

import asyncio
import logging
from typing import Callable

from kivy.uix.anchorlayout import AnchorLayout
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label

from ...core.metadata import CaptureResult
from ...core.permissions import CapabilityGrant, PermissionGate
from ...core.pipeline import CaptureEnrichmentPipeline, PipelineState
from ...core.providers import CameraProvider, CaptureOptions, LocationProvider
from ..widgets.capture_button import CaptureButton
from ..widgets.notice import show_notice

logger = logging.getLogger(__name__)

STATUS_TEXT = {
    PipelineState.IDLE: "Tap to take a geotagged photo",
    PipelineState.CAPTURING: "Taking photo...",
    PipelineState.ENRICHING: "Fetching location...",
}


class CapturePanel(BoxLayout):
    """
    Capture tab content.

    Layout:
    ┌─────────────────────────────────────┐
    │  Tap to take a geotagged photo      │
    │                                     │
    │               ( SNAP )              │
    └─────────────────────────────────────┘
    """

    def __init__(
        self,
        camera: CameraProvider,
        location: LocationProvider,
        options: CaptureOptions,
        timezone: str = "UTC",
        on_result: Callable[[CaptureResult], None] | None = None,
        **kwargs,
    ):
        """
        Initialize the capture panel.

        Args:
            camera: Camera provider (usually a CameraSurface).
            location: Location provider.
            options: Initial capture options.
            timezone: Zone for the fallback timestamp.
            on_result: Receives the result of each successful capture.
        """
        kwargs.setdefault("orientation", "vertical")
        kwargs.setdefault("padding", [20, 20, 20, 20])
        kwargs.setdefault("spacing", 20)
        super().__init__(**kwargs)

        self.gate = PermissionGate(camera, location, on_notice=show_notice)
        self.pipeline = CaptureEnrichmentPipeline(
            camera,
            location,
            options=options,
            timezone=timezone,
            on_state_change=self._on_state_change,
            on_busy_change=self._on_busy_change,
            on_alert=show_notice,
            on_result=on_result,
        )

        self.grant: CapabilityGrant | None = None
        self._tasks: set[asyncio.Task] = set()

        self.status_label = Label(text=STATUS_TEXT[PipelineState.IDLE], font_size="18sp")
        self.add_widget(self.status_label)

        anchor = AnchorLayout(anchor_x="center", anchor_y="center")
        self.capture_button = CaptureButton(on_trigger=self._on_trigger)
        anchor.add_widget(self.capture_button)
        self.add_widget(anchor)

    def activate(self) -> None:
        """Run the permission gate once for this activation."""
        self.grant = None
        self._spawn(self._check_permissions())

    async def _check_permissions(self) -> None:
        self.grant = await self.gate.request()

    def _on_trigger(self) -> None:
        if self.pipeline.busy:
            return
        grant = self.grant or CapabilityGrant(camera=False, location=False)
        self._spawn(self.pipeline.run(grant))

    def _spawn(self, coro) -> None:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Capture task failed: {task.exception()!r}")

    def _on_state_change(self, state: PipelineState) -> None:
        if state in STATUS_TEXT:
            self.status_label.text = STATUS_TEXT[state]

    def _on_busy_change(self, busy: bool) -> None:
        self.capture_button.set_busy(busy)
