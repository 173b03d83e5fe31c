"""
Unit tests for PermissionGate.
"""

import asyncio

import pytest

from conftest import FakeCamera, FakeLocation
from geosnap.core.permissions import (
    PERMISSION_NOTICE_MESSAGE,
    PERMISSION_NOTICE_TITLE,
    CapabilityGrant,
    PermissionGate,
)


class TestPermissionGate:
    """Tests for the camera + location permission check."""

    @pytest.fixture
    def notices(self):
        return []

    def _gate(self, notices, camera_granted=True, location_granted=True):
        return PermissionGate(
            FakeCamera(granted=camera_granted),
            FakeLocation(granted=location_granted),
            on_notice=lambda title, message: notices.append((title, message)),
        )

    def test_all_granted(self, notices):
        grant = asyncio.run(self._gate(notices).request())

        assert grant == CapabilityGrant(camera=True, location=True)
        assert grant.all_granted
        assert notices == []

    @pytest.mark.parametrize(
        "camera_granted,location_granted",
        [(False, True), (True, False), (False, False)],
    )
    def test_denial_reports_one_notice(self, notices, camera_granted, location_granted):
        grant = asyncio.run(self._gate(notices, camera_granted, location_granted).request())

        assert grant.camera is camera_granted
        assert grant.location is location_granted
        assert not grant.all_granted
        assert notices == [(PERMISSION_NOTICE_TITLE, PERMISSION_NOTICE_MESSAGE)]

    def test_failing_request_counts_as_denied(self, notices):
        camera = FakeCamera()

        async def broken():
            raise RuntimeError("permission service crashed")

        camera.request_permission = broken
        gate = PermissionGate(
            camera,
            FakeLocation(),
            on_notice=lambda title, message: notices.append((title, message)),
        )

        grant = asyncio.run(gate.request())

        assert grant == CapabilityGrant(camera=False, location=True)
        assert len(notices) == 1

    def test_no_notice_handler(self):
        gate = PermissionGate(FakeCamera(granted=False), FakeLocation())
        assert asyncio.run(gate.request()).camera is False
