"""
GeoSnap Kivy Application - Geotagged photo capture.

Main entry point for the Kivy-based mobile/desktop application.
"""

import asyncio
import logging
import os
import platform as sys_platform

# Prevent Kivy from consuming command-line arguments
os.environ["KIVY_NO_ARGS"] = "1"

from kivy.app import App
from kivy.logger import Logger
from kivy.uix.screenmanager import ScreenManager

from ..core.auth import credentials_verifier
from ..core.camera import OpenCVCameraProvider, StillImageProvider
from ..core.config import Config
from ..core.location import ConfiguredLocationProvider
from ..core.metadata import CaptureResult
from ..core.providers import CaptureOptions
from .screens import (
    CapturePanel,
    HomeScreen,
    LandingScreen,
    LoginScreen,
    ProfileScreen,
    ResultScreen,
)
from .widgets.camera_surface import CameraSurface

logger = logging.getLogger(__name__)


class GeoSnapApp(App):
    """
    Main GeoSnap Kivy application.

    Coordinates:
    - Navigation (landing -> login -> home tabs, profile, result)
    - Camera capture (via CameraSurface or StillImageProvider)
    - Location fix and reverse geocoding (via ConfiguredLocationProvider)
    """

    def __init__(self, app_config: Config | None = None, image_path: str | None = None, **kwargs):
        """
        Initialize the GeoSnap app.

        Args:
            app_config: Optional Config object. If not provided, loads from default location.
            image_path: Enrich this photo instead of opening the camera.
        """
        super().__init__(**kwargs)

        # app_config avoids clashing with Kivy's own App.config
        if app_config is None:
            app_config = Config()
        self.app_config = app_config
        self.image_path = image_path

        self.platform_type = self._detect_platform()
        self.camera_provider = None
        self.screen_manager: ScreenManager | None = None
        self.result_screen: ResultScreen | None = None

        Logger.info(f"GeoSnap: Initialized on {sys_platform.system()} ({self.platform_type})")

    def _detect_platform(self) -> str:
        """Detect current platform type."""
        if sys_platform.system() == "Linux":
            try:
                import android  # noqa: F401
                return "android"
            except ImportError:
                return "desktop"
        return "desktop"

    def build(self):
        """Build the application UI."""
        from kivy.core.window import Window

        if self.platform_type == "desktop":
            Window.size = (540, 960)
        self.title = self.app_config.get("app.title", "GeoSnap")

        if self.image_path:
            self.camera_provider = StillImageProvider(self.image_path)
        else:
            self.camera_provider = CameraSurface(OpenCVCameraProvider(self.app_config["camera"]))
        location_provider = ConfiguredLocationProvider(self.app_config["location"])
        Logger.info(f"GeoSnap: Camera provider initialized ({type(self.camera_provider).__name__})")

        options = CaptureOptions(
            quality=self.app_config.get("capture.quality", 0.8),
            wants_embedded_metadata=self.app_config.get("capture.exif", True),
        )
        capture_panel = CapturePanel(
            camera=self.camera_provider,
            location=location_provider,
            options=options,
            timezone=self.app_config.get("capture.timezone", "UTC"),
            on_result=self._on_capture_result,
        )

        verify = credentials_verifier(
            str(self.app_config.get("auth.username", "")),
            str(self.app_config.get("auth.password", "")),
        )

        # Only captures written by the camera are transient
        self.result_screen = ResultScreen(discard_on_leave=self.image_path is None)

        self.screen_manager = ScreenManager()
        self.screen_manager.add_widget(
            LandingScreen(title=self.title, delay=self.app_config.get("landing.delay", 4))
        )
        self.screen_manager.add_widget(LoginScreen(verify=verify))
        self.screen_manager.add_widget(HomeScreen(capture_panel=capture_panel))
        self.screen_manager.add_widget(ProfileScreen())
        self.screen_manager.add_widget(self.result_screen)
        self.screen_manager.current = "landing"

        return self.screen_manager

    def on_stop(self):
        """Called when the application stops."""
        Logger.info("GeoSnap: Application stopping")
        if isinstance(self.camera_provider, CameraSurface):
            self.camera_provider.provider.release()

    def _on_capture_result(self, result: CaptureResult):
        """Hand a finished capture to the result screen."""
        self.result_screen.present(result)
        self.screen_manager.current = self.result_screen.name


def run_mobile_app(config: Config | None = None, image_path: str | None = None):
    """
    Run the GeoSnap mobile/desktop Kivy application.

    Args:
        config: Optional Config object.
        image_path: Enrich this photo instead of opening the camera.
    """
    app = GeoSnapApp(app_config=config, image_path=image_path)
    asyncio.run(app.async_run(async_lib="asyncio"))
