"""
Camera preview widget for GeoSnap.

Shows the live viewfinder inside the camera surface as a Kivy Image.
"""

import logging

import cv2
import numpy as np
from kivy.graphics.texture import Texture
from kivy.uix.image import Image

logger = logging.getLogger(__name__)


class CameraPreview(Image):
    """
    Kivy Image widget for displaying camera frames.

    Converts OpenCV BGR frames to Kivy textures, reusing the texture while
    the frame size stays the same.
    """

    def __init__(self, **kwargs):
        kwargs.setdefault("fit_mode", "contain")
        super().__init__(**kwargs)
        self._show_placeholder()

    def _show_placeholder(self):
        """Dark frame with a hint until the first camera frame arrives."""
        placeholder = np.full((480, 640, 3), 40, dtype=np.uint8)
        cv2.putText(
            placeholder,
            "Opening camera...",
            (170, 240),
            cv2.FONT_HERSHEY_SIMPLEX,
            1.0,
            (160, 160, 160),
            2,
        )
        self.update_frame(placeholder)

    def update_frame(self, frame: np.ndarray | None) -> None:
        """
        Show a frame. Must be called from the main thread.

        Args:
            frame: BGR numpy array from the camera.
        """
        if frame is None:
            return

        try:
            height, width = frame.shape[:2]

            # Kivy textures are RGB and bottom-up
            frame_rgb = cv2.flip(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB), 0)

            if self.texture is None or self.texture.size != (width, height):
                self.texture = Texture.create(size=(width, height), colorfmt="rgb")

            self.texture.blit_buffer(frame_rgb.tobytes(), colorfmt="rgb", bufferfmt="ubyte")
            self.canvas.ask_update()

        except Exception as e:
            logger.error(f"Error updating camera preview texture: {e}")
