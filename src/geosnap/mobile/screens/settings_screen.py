"""
Settings panel for GeoSnap.

Capture options that apply to the next photo taken.
"""

import logging
from dataclasses import replace
from typing import Callable

from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label
from kivy.uix.scrollview import ScrollView
from kivy.uix.slider import Slider
from kivy.uix.switch import Switch

from ...core.pipeline import CaptureEnrichmentPipeline

logger = logging.getLogger(__name__)


class SettingRow(BoxLayout):
    """A single setting row with label and control."""

    def __init__(self, label: str, **kwargs):
        kwargs.setdefault("orientation", "horizontal")
        kwargs.setdefault("size_hint_y", None)
        kwargs.setdefault("height", 50)
        kwargs.setdefault("padding", [10, 5, 10, 5])
        super().__init__(**kwargs)

        self.label = Label(text=label, font_size="14sp", size_hint=(0.5, 1), halign="left", valign="middle")
        self.label.bind(size=self.label.setter("text_size"))
        self.add_widget(self.label)


class SwitchSetting(SettingRow):
    """Toggle switch setting."""

    def __init__(
        self,
        label: str,
        initial_value: bool = False,
        on_change: Callable[[bool], None] | None = None,
        **kwargs,
    ):
        super().__init__(label, **kwargs)
        self.on_change = on_change
        self.switch = Switch(active=initial_value, size_hint=(0.5, 1))
        self.switch.bind(active=self._on_active)
        self.add_widget(self.switch)

    def _on_active(self, instance, value):
        if self.on_change:
            self.on_change(value)


class SliderSetting(SettingRow):
    """Numeric slider setting with a formatted value readout."""

    def __init__(
        self,
        label: str,
        min_value: float = 0,
        max_value: float = 100,
        initial_value: float = 50,
        step: float = 1,
        value_format: str = "{:.0f}",
        on_change: Callable[[float], None] | None = None,
        **kwargs,
    ):
        kwargs.setdefault("height", 70)
        super().__init__(label, **kwargs)

        self.on_change = on_change
        self.value_format = value_format

        control_layout = BoxLayout(orientation="vertical", size_hint=(0.5, 1))
        self.value_label = Label(text=value_format.format(initial_value), font_size="12sp", size_hint_y=0.3)
        control_layout.add_widget(self.value_label)

        self.slider = Slider(min=min_value, max=max_value, value=initial_value, step=step, size_hint_y=0.7)
        self.slider.bind(value=self._on_value)
        control_layout.add_widget(self.slider)

        self.add_widget(control_layout)

    def _on_value(self, instance, value):
        self.value_label.text = self.value_format.format(value)
        if self.on_change:
            self.on_change(value)


class SettingsPanel(BoxLayout):
    """
    Settings tab content.

    Sections:
    - Capture (JPEG quality, embedded timestamp)
    - Location (time zone, read-only)
    """

    def __init__(self, pipeline: CaptureEnrichmentPipeline, **kwargs):
        kwargs.setdefault("orientation", "vertical")
        kwargs.setdefault("padding", [10, 10, 10, 10])
        super().__init__(**kwargs)

        self.pipeline = pipeline

        scroll_view = ScrollView(size_hint=(1, 1))
        settings_layout = BoxLayout(orientation="vertical", size_hint_y=None, spacing=5, padding=[0, 10, 0, 10])
        settings_layout.bind(minimum_height=settings_layout.setter("height"))

        settings_layout.add_widget(self._create_section_header("Capture"))
        settings_layout.add_widget(
            SliderSetting(
                label="JPEG Quality (%)",
                min_value=10,
                max_value=100,
                initial_value=pipeline.options.quality * 100,
                step=5,
                on_change=self._on_quality_change,
            )
        )
        settings_layout.add_widget(
            SwitchSetting(
                label="Use Embedded Timestamp",
                initial_value=pipeline.options.wants_embedded_metadata,
                on_change=self._on_exif_change,
            )
        )

        settings_layout.add_widget(self._create_section_header("Location"))
        timezone_row = SettingRow("Time Zone")
        timezone_row.add_widget(Label(text=pipeline.timezone, font_size="14sp", size_hint=(0.5, 1)))
        settings_layout.add_widget(timezone_row)

        scroll_view.add_widget(settings_layout)
        self.add_widget(scroll_view)

    def _create_section_header(self, text: str) -> Label:
        """Create a section header label."""
        header = Label(
            text=text,
            font_size="16sp",
            bold=True,
            color=(0.4, 0.7, 1.0, 1),
            size_hint_y=None,
            height=40,
            halign="left",
            valign="bottom",
        )
        header.bind(size=header.setter("text_size"))
        return header

    def _on_quality_change(self, value: float):
        self.pipeline.options = replace(self.pipeline.options, quality=value / 100)
        logger.info(f"Capture quality: {value / 100:.2f}")

    def _on_exif_change(self, value: bool):
        self.pipeline.options = replace(self.pipeline.options, wants_embedded_metadata=value)
        logger.info(f"Use embedded timestamp: {value}")
