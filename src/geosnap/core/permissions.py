"""
Camera and location permission gate.

Requests both capabilities once per screen activation and returns an
explicit grant token that is passed to the capture pipeline.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from .providers import CameraProvider, LocationProvider

logger = logging.getLogger(__name__)

PERMISSION_NOTICE_TITLE = "Permission required"
PERMISSION_NOTICE_MESSAGE = "Camera and location permissions are required to take geotagged photos."


@dataclass(frozen=True)
class CapabilityGrant:
    """Outcome of one round of permission requests."""

    camera: bool
    location: bool

    @property
    def all_granted(self) -> bool:
        return self.camera and self.location


class PermissionGate:
    """
    Requests camera and foreground location access.

    A denial is reported through on_notice but does not block the caller;
    a denied capability fails later at the point of use.
    """

    def __init__(
        self,
        camera: CameraProvider,
        location: LocationProvider,
        on_notice: Callable[[str, str], None] | None = None,
    ):
        self.camera = camera
        self.location = location
        self.on_notice = on_notice

    async def request(self) -> CapabilityGrant:
        """Issue both permission requests and report a combined grant."""
        camera_granted = await self._ask("camera", self.camera.request_permission)
        location_granted = await self._ask("location", self.location.request_permission)

        grant = CapabilityGrant(camera=camera_granted, location=location_granted)
        logger.info(f"Permissions: camera={camera_granted}, location={location_granted}")

        if not grant.all_granted and self.on_notice:
            self.on_notice(PERMISSION_NOTICE_TITLE, PERMISSION_NOTICE_MESSAGE)

        return grant

    async def _ask(self, name: str, request) -> bool:
        try:
            return bool(await request())
        except Exception as e:
            logger.warning(f"{name} permission request failed: {e}")
            return False
