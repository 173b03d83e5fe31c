"""
Login screen for GeoSnap.

The verifier is supplied by the app (see core.auth).
"""

import logging
from typing import Callable

from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.label import Label
from kivy.uix.screenmanager import Screen
from kivy.uix.textinput import TextInput

from ..widgets.notice import show_notice

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Incorrect username or password."


class LoginScreen(Screen):
    """Username / password form."""

    def __init__(
        self,
        verify: Callable[[str, str], bool],
        next_screen: str = "home",
        **kwargs,
    ):
        kwargs.setdefault("name", "login")
        super().__init__(**kwargs)

        self.verify = verify
        self.next_screen = next_screen

        form = BoxLayout(orientation="vertical", padding=[40, 20, 40, 20], spacing=10)
        form.add_widget(BoxLayout())

        form.add_widget(self._field_label("Username:"))
        self.username_input = TextInput(
            hint_text="Enter username", multiline=False, size_hint_y=None, height=44
        )
        form.add_widget(self.username_input)

        form.add_widget(self._field_label("Password:"))
        self.password_input = TextInput(
            hint_text="Enter password", password=True, multiline=False, size_hint_y=None, height=44
        )
        self.password_input.bind(on_text_validate=self._on_login)
        form.add_widget(self.password_input)

        login_btn = Button(text="Login", size_hint_y=None, height=50, font_size="16sp")
        login_btn.bind(on_press=self._on_login)
        form.add_widget(login_btn)

        form.add_widget(BoxLayout())
        self.add_widget(form)

    def _field_label(self, text: str) -> Label:
        label = Label(text=text, font_size="18sp", size_hint_y=None, height=30, halign="left")
        label.bind(size=label.setter("text_size"))
        return label

    def _on_login(self, instance):
        if self.verify(self.username_input.text, self.password_input.text):
            logger.info("Login succeeded")
            self.password_input.text = ""
            if self.manager:
                self.manager.current = self.next_screen
        else:
            logger.info("Login rejected")
            show_notice("Error", LOGIN_FAILED_MESSAGE)
