"""
Landing splash screen for GeoSnap.
"""

import logging

from kivy.clock import Clock
from kivy.uix.label import Label
from kivy.uix.screenmanager import Screen

logger = logging.getLogger(__name__)


class LandingScreen(Screen):
    """Splash that advances to the next screen after a fixed delay."""

    def __init__(self, title: str = "GeoSnap", delay: float = 4.0, next_screen: str = "login", **kwargs):
        kwargs.setdefault("name", "landing")
        super().__init__(**kwargs)

        self.delay = delay
        self.next_screen = next_screen
        self._timer = None

        self.add_widget(Label(text=title, font_size="48sp", bold=True))

    def on_enter(self, *args):
        self._timer = Clock.schedule_once(self._advance, self.delay)

    def on_leave(self, *args):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _advance(self, dt):
        self._timer = None
        if self.manager:
            self.manager.current = self.next_screen
