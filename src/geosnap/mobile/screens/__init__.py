"""Screen modules for GeoSnap mobile UI."""

from .capture_screen import CapturePanel
from .home_screen import HomeScreen
from .landing_screen import LandingScreen
from .login_screen import LoginScreen
from .profile_screen import ProfileScreen
from .result_screen import ResultScreen
from .settings_screen import SettingsPanel

__all__ = [
    "CapturePanel",
    "HomeScreen",
    "LandingScreen",
    "LoginScreen",
    "ProfileScreen",
    "ResultScreen",
    "SettingsPanel",
]
