"""
Non-blocking notice popup for GeoSnap.
"""

import logging

from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.label import Label
from kivy.uix.popup import Popup

logger = logging.getLogger(__name__)


def show_notice(title: str, message: str) -> Popup:
    """
    Show a dismissible popup with a message and an OK button.

    Args:
        title: Popup title.
        message: Body text.

    Returns:
        The opened popup.
    """
    logger.info(f"Notice: {title}: {message}")

    layout = BoxLayout(orientation="vertical", padding=10, spacing=10)
    body = Label(text=message, halign="center", valign="middle")
    body.bind(size=body.setter("text_size"))
    layout.add_widget(body)

    ok_btn = Button(text="OK", size_hint=(1, None), height=48)
    layout.add_widget(ok_btn)

    popup = Popup(title=title, content=layout, size_hint=(0.8, 0.4))
    ok_btn.bind(on_press=popup.dismiss)
    popup.open()
    return popup
