"""
Home screen for GeoSnap.

Tabbed layout with Home, Capture and Settings tabs. Switching to the
Capture tab activates the permission gate.
"""

import logging

from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.label import Label
from kivy.uix.screenmanager import Screen
from kivy.uix.tabbedpanel import TabbedPanel, TabbedPanelItem

from .capture_screen import CapturePanel
from .settings_screen import SettingsPanel

logger = logging.getLogger(__name__)


class HomeScreen(Screen):
    """
    Main screen after login.

    Layout:
    ┌─────────────────────────────────────┐
    │ [Home] [Capture] [Settings]         │
    │  Home                   [Profile]   │
    │                                     │
    │   Welcome to the Home Screen!       │
    └─────────────────────────────────────┘
    """

    def __init__(self, capture_panel: CapturePanel, profile_screen: str = "profile", **kwargs):
        kwargs.setdefault("name", "home")
        super().__init__(**kwargs)

        self.capture_panel = capture_panel
        self.profile_screen = profile_screen

        self.tabs = TabbedPanel(do_default_tab=False, tab_width=140)

        self.home_tab = TabbedPanelItem(text="Home")
        self.home_tab.add_widget(self._create_home_content())
        self.tabs.add_widget(self.home_tab)

        self.capture_tab = TabbedPanelItem(text="Capture")
        self.capture_tab.add_widget(capture_panel)
        self.tabs.add_widget(self.capture_tab)

        self.settings_tab = TabbedPanelItem(text="Settings")
        self.settings_tab.add_widget(SettingsPanel(pipeline=capture_panel.pipeline))
        self.tabs.add_widget(self.settings_tab)

        self.tabs.default_tab = self.home_tab
        self.tabs.bind(current_tab=self._on_tab_change)
        self.add_widget(self.tabs)

    def _create_home_content(self) -> BoxLayout:
        content = BoxLayout(orientation="vertical", padding=[20, 10, 20, 10])

        header = BoxLayout(orientation="horizontal", size_hint_y=None, height=60)
        title = Label(text="Home", font_size="24sp", bold=True, halign="left", valign="middle")
        title.bind(size=title.setter("text_size"))
        header.add_widget(title)

        profile_btn = Button(text="Profile", size_hint=(None, 1), width=100)
        profile_btn.bind(on_press=self._on_profile_press)
        header.add_widget(profile_btn)
        content.add_widget(header)

        content.add_widget(Label(text="Welcome to the Home Screen!", font_size="16sp"))
        return content

    def _on_tab_change(self, instance, tab):
        if tab is self.capture_tab:
            logger.info("Capture tab activated")
            self.capture_panel.activate()

    def _on_profile_press(self, instance):
        if self.manager:
            self.manager.current = self.profile_screen
