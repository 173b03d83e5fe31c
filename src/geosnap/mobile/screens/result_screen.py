"""
Result screen for GeoSnap.

Displays the captured photo and its metadata. The photo is a transient file
and is removed when the screen is left.
"""

import logging
from pathlib import Path

from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.image import Image
from kivy.uix.label import Label
from kivy.uix.screenmanager import Screen

from ...core.metadata import CaptureResult
from ..widgets.metadata_panel import MetadataPanel

logger = logging.getLogger(__name__)

NO_PHOTO_TEXT = "No photo captured"


class ResultScreen(Screen):
    """Shows one CaptureResult."""

    def __init__(self, back_screen: str = "home", discard_on_leave: bool = True, **kwargs):
        kwargs.setdefault("name", "result")
        super().__init__(**kwargs)

        self.back_screen = back_screen
        self.discard_on_leave = discard_on_leave
        self.result: CaptureResult | None = None

        layout = BoxLayout(orientation="vertical", padding=10, spacing=10)

        back_btn = Button(text="Back", size_hint=(None, None), size=(100, 44))
        back_btn.bind(on_press=self._on_back)
        layout.add_widget(back_btn)

        self.image_area = BoxLayout()
        layout.add_widget(self.image_area)

        self.metadata_panel = MetadataPanel()
        layout.add_widget(self.metadata_panel)

        self.add_widget(layout)
        self.present(None)

    def present(self, result: CaptureResult | None) -> None:
        """Render the photo (or placeholder) and the metadata lines."""
        self.result = result
        self.image_area.clear_widgets()

        if result is not None and result.image_ref:
            self.image_area.add_widget(Image(source=result.image_ref, fit_mode="contain", nocache=True))
        else:
            self.image_area.add_widget(Label(text=NO_PHOTO_TEXT, font_size="18sp"))

        self.metadata_panel.show(result.metadata if result is not None else None)

    def on_leave(self, *args):
        if self.discard_on_leave and self.result is not None:
            self._discard(Path(self.result.image_ref))
        self.present(None)

    def _discard(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
            logger.debug(f"Discarded capture: {path}")
        except OSError as e:
            logger.warning(f"Failed to discard capture {path}: {e}")

    def _on_back(self, instance):
        if self.manager:
            self.manager.current = self.back_screen
