"""
Capture enrichment pipeline.

Turns a capture trigger into a photo plus geolocation metadata:

    IDLE -> CAPTURING -> ENRICHING -> DONE -> IDLE
                      -> CANCELLED -> IDLE
                      -> FAILED -> IDLE

The position fix is started before the camera is opened, so the two waits
overlap; the fix is only consumed once a photo was actually taken.
"""

import asyncio
import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from .errors import UserCancelled
from .metadata import CaptureMetadata, CaptureResult, format_address, resolve_captured_at
from .permissions import CapabilityGrant
from .providers import CameraProvider, CaptureOptions, CaptureOutcome, LocationProvider

logger = logging.getLogger(__name__)

ALERT_TITLE = "Error"
ALERT_MESSAGE = "Unable to take photo or fetch location"


class PipelineState(Enum):
    """Capture pipeline state machine states."""

    IDLE = "idle"
    CAPTURING = "capturing"
    ENRICHING = "enriching"
    DONE = "done"
    CANCELLED = "cancelled"
    FAILED = "failed"


def _local_now() -> datetime:
    return datetime.now().astimezone()


class CaptureEnrichmentPipeline:
    """
    Runs one capture, fetches the position, and packages the metadata.

    Failures are caught once at the run() boundary and reported through a
    single on_alert call; cancellation is silent. Only one run may be in
    flight; extra triggers are rejected.
    """

    def __init__(
        self,
        camera: CameraProvider,
        location: LocationProvider,
        options: CaptureOptions | None = None,
        timezone: str = "UTC",
        on_state_change: Callable[[PipelineState], None] | None = None,
        on_busy_change: Callable[[bool], None] | None = None,
        on_alert: Callable[[str, str], None] | None = None,
        on_result: Callable[[CaptureResult], None] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            camera: Camera capability provider.
            location: Location capability provider.
            options: Capture options (quality, embedded metadata).
            timezone: IANA zone used for the fallback timestamp.
            on_state_change: Called on every state transition.
            on_busy_change: Called when the busy indicator flips.
            on_alert: Called with (title, message) when a run fails.
            on_result: Receives the CaptureResult of a successful run.
            clock: Returns the current aware datetime.
        """
        self.camera = camera
        self.location = location
        self.options = options or CaptureOptions()
        self.timezone = timezone
        self.on_state_change = on_state_change
        self.on_busy_change = on_busy_change
        self.on_alert = on_alert
        self.on_result = on_result
        self.clock = clock or _local_now

        self._state = PipelineState.IDLE
        self._busy = False

    @property
    def state(self) -> PipelineState:
        """Get current pipeline state."""
        return self._state

    @property
    def busy(self) -> bool:
        """True while a capture or enrichment is in progress."""
        return self._busy

    @property
    def is_idle(self) -> bool:
        return self._state == PipelineState.IDLE

    async def run(self, grant: CapabilityGrant) -> CaptureResult | None:
        """
        Capture a photo and attach location metadata.

        Args:
            grant: Capability grant from the permission gate.

        Returns:
            CaptureResult on success, None on cancellation, failure, or when
            another run is already in progress.
        """
        if not self.is_idle:
            logger.warning(f"Capture already in progress (state: {self._state.value}), ignoring trigger")
            return None

        if not grant.all_granted:
            logger.warning(
                f"Capturing without full permissions: camera={grant.camera}, location={grant.location}"
            )

        self._set_busy(True)
        self._set_state(PipelineState.CAPTURING)
        fix_task: asyncio.Future | None = None

        try:
            fix_task = asyncio.ensure_future(self.location.get_current_fix())

            try:
                outcome = await self.camera.capture(self.options)
            except UserCancelled:
                outcome = CaptureOutcome.cancelled_by_user()

            if not outcome.has_image:
                logger.info("Capture cancelled, no photo taken")
                self._finish(PipelineState.CANCELLED)
                return None

            self._set_state(PipelineState.ENRICHING)

            fix = await fix_task
            places = await self.location.reverse_geocode(fix.latitude, fix.longitude)

            metadata = CaptureMetadata(
                captured_at=resolve_captured_at(
                    outcome.embedded_capture_time, self.clock(), self.timezone
                ),
                latitude=fix.latitude,
                longitude=fix.longitude,
                address=format_address(places),
            )
            result = CaptureResult(image_ref=outcome.image_ref, metadata=metadata)

        except asyncio.CancelledError:
            self._finish(PipelineState.CANCELLED)
            raise

        except Exception as e:
            logger.error(f"Error taking photo or fetching location: {e}", exc_info=True)
            self._finish(PipelineState.FAILED)
            if self.on_alert:
                self.on_alert(ALERT_TITLE, ALERT_MESSAGE)
            return None

        finally:
            self._discard(fix_task)
            self._set_busy(False)

        logger.info(
            f"Capture complete: {result.image_ref} at {metadata.latitude}, {metadata.longitude} "
            f"({metadata.address})"
        )
        self._set_state(PipelineState.DONE)
        try:
            if self.on_result:
                self.on_result(result)
        except Exception as e:
            logger.error(f"Error presenting capture result: {e}", exc_info=True)
        finally:
            self._set_state(PipelineState.IDLE)

        return result

    def _finish(self, terminal: PipelineState) -> None:
        """Clear busy, then pass through a terminal state back to IDLE."""
        self._set_busy(False)
        self._set_state(terminal)
        self._set_state(PipelineState.IDLE)

    def _discard(self, task: asyncio.Future | None) -> None:
        """Cancel an unconsumed fix request, or collect its exception."""
        if task is None:
            return
        if not task.done():
            task.cancel()
        elif not task.cancelled() and task.exception() is not None:
            logger.debug(f"Position fix failed: {task.exception()}")

    def _set_state(self, state: PipelineState) -> None:
        if state == self._state:
            return
        logger.debug(f"Pipeline state: {self._state.value} -> {state.value}")
        self._state = state
        if self.on_state_change:
            self.on_state_change(state)

    def _set_busy(self, busy: bool) -> None:
        if busy == self._busy:
            return
        self._busy = busy
        if self.on_busy_change:
            self.on_busy_change(busy)
