"""
Capture button widget for GeoSnap.

Round shutter button that doubles as the busy indicator: it pulses and is
disabled while a capture is in progress.
"""

import logging
from enum import Enum
from typing import Callable

from kivy.animation import Animation
from kivy.graphics import Color, Ellipse
from kivy.uix.button import Button

logger = logging.getLogger(__name__)


class CaptureButtonState(Enum):
    """Capture button states."""

    IDLE = "idle"
    BUSY = "busy"


class CaptureButton(Button):
    """
    Shutter button with animated busy state.

    States:
    - IDLE: White circle with "SNAP" text, accepts presses
    - BUSY: Blue pulsing circle with "..." text, presses ignored
    """

    def __init__(self, on_trigger: Callable[[], None] | None = None, **kwargs):
        """
        Initialize the capture button.

        Args:
            on_trigger: Called when the button is pressed while idle.
        """
        kwargs.setdefault("size_hint", (None, None))
        kwargs.setdefault("size", (100, 100))
        kwargs.setdefault("text", "SNAP")
        kwargs.setdefault("font_size", "16sp")
        kwargs.setdefault("bold", True)
        super().__init__(**kwargs)

        self._state = CaptureButtonState.IDLE
        self._on_trigger = on_trigger
        self._pulse_animation: Animation | None = None

        self._idle_color = (0.95, 0.95, 0.95, 1.0)
        self._busy_color = (0.2, 0.5, 0.9, 1.0)

        self.background_color = (0, 0, 0, 0)
        self.color = (0.1, 0.1, 0.1, 1)

        self._draw_background()
        self.bind(pos=self._draw_background, size=self._draw_background)
        self.bind(on_press=self._on_press)

    def _draw_background(self, *args):
        """Draw the circular shutter."""
        self.canvas.before.clear()
        with self.canvas.before:
            Color(*(self._busy_color if self.is_busy else self._idle_color))
            radius = min(self.width, self.height) / 2 - 4
            Ellipse(
                pos=(self.center_x - radius, self.center_y - radius),
                size=(radius * 2, radius * 2),
            )

    def _on_press(self, instance):
        if self.is_busy:
            return
        if self._on_trigger:
            self._on_trigger()

    @property
    def is_busy(self) -> bool:
        return self._state == CaptureButtonState.BUSY

    def set_busy(self, busy: bool) -> None:
        """Show or clear the busy state."""
        if busy == self.is_busy:
            return

        if busy:
            self._state = CaptureButtonState.BUSY
            self.text = "..."
            self.disabled = True
            self._start_pulse()
        else:
            self._state = CaptureButtonState.IDLE
            self.text = "SNAP"
            self.disabled = False
            self._stop_pulse()

        self._draw_background()

    def _start_pulse(self):
        self._stop_pulse()
        self._pulse_animation = Animation(opacity=0.5, duration=0.5) + Animation(
            opacity=1.0, duration=0.5
        )
        self._pulse_animation.repeat = True
        self._pulse_animation.start(self)

    def _stop_pulse(self):
        if self._pulse_animation:
            self._pulse_animation.cancel(self)
            self._pulse_animation = None
        self.opacity = 1.0
