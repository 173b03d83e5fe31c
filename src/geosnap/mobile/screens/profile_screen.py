"""Profile screen for GeoSnap."""

from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.label import Label
from kivy.uix.screenmanager import Screen


class ProfileScreen(Screen):
    """Static profile page with a back button."""

    def __init__(self, back_screen: str = "home", **kwargs):
        kwargs.setdefault("name", "profile")
        super().__init__(**kwargs)
        self.back_screen = back_screen

        layout = BoxLayout(orientation="vertical", padding=20, spacing=10)

        back_btn = Button(text="Back", size_hint=(None, None), size=(100, 44))
        back_btn.bind(on_press=self._on_back)
        layout.add_widget(back_btn)

        layout.add_widget(Label(text="This is the Profile Screen", font_size="18sp", bold=True))
        self.add_widget(layout)

    def _on_back(self, instance):
        if self.manager:
            self.manager.current = self.back_screen
