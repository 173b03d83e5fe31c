"""
GeoSnap Mobile - Cross-platform Kivy UI for geotagged photo capture.

This module provides a Kivy-based user interface that works on:
- Desktop (Windows, macOS, Linux)
- Mobile (Android, iOS)

Features:
- Landing, login, tabbed home/settings and profile screens
- Camera surface with live preview
- Capture result view with timestamp, coordinates and address
"""

from .app import GeoSnapApp

__all__ = ["GeoSnapApp"]
