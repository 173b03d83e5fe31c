"""
Metadata panel widget for GeoSnap.

Shows the four capture metadata fields as labeled lines on a
semi-transparent rounded background.
"""

from kivy.graphics import Color, RoundedRectangle
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label

from ...core.metadata import CaptureMetadata, metadata_lines


class MetadataPanel(BoxLayout):
    """
    Read-only panel for a CaptureMetadata record.

    Layout:
    ┌──────────────────────────────────┐
    │  Timestamp: 2024:05:01 10:00:00  │
    │  Latitude: 37.77                 │
    │  Longitude: -122.41              │
    │  Address: 1 Main St, ...         │
    └──────────────────────────────────┘
    """

    def __init__(self, **kwargs):
        kwargs.setdefault("orientation", "vertical")
        kwargs.setdefault("size_hint", (1, None))
        kwargs.setdefault("height", 180)
        kwargs.setdefault("padding", [15, 10, 15, 10])
        kwargs.setdefault("spacing", 5)
        super().__init__(**kwargs)

        self._labels: list[Label] = []
        for _ in range(4):
            label = Label(text="", font_size="15sp", halign="left", valign="middle")
            label.bind(size=label.setter("text_size"))
            self._labels.append(label)
            self.add_widget(label)

        with self.canvas.before:
            Color(0, 0, 0, 0.7)
            self._bg_rect = RoundedRectangle(pos=self.pos, size=self.size, radius=[10])
        self.bind(pos=self._update_background, size=self._update_background)

    def _update_background(self, *args):
        self._bg_rect.pos = self.pos
        self._bg_rect.size = self.size

    def show(self, metadata: CaptureMetadata | None) -> None:
        """Show the metadata lines, or hide the panel when there is none."""
        lines = metadata_lines(metadata) if metadata is not None else [""] * len(self._labels)
        for label, text in zip(self._labels, lines):
            label.text = text
        self.opacity = 1.0 if metadata is not None else 0.0
