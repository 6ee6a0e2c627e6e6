"""Chrome state - title bar, caption, buttons, fullscreen."""

from __future__ import annotations
from dataclasses import dataclass

from ..types import ChromeSnapshot


@dataclass
class ChromeState:
    """Visibility of the widgets surrounding the image."""
    with_title_bar: bool = True
    caption_visible: bool = True
    buttons_visible: bool = False
    fullscreen: bool = False

    @property
    def is_chromeless(self) -> bool:
        """True when nothing but the image is shown, full screen."""
        return self.fullscreen and not self.with_title_bar and not self.buttons_visible

    @property
    def needs_padding(self) -> bool:
        """Whether the image box keeps a margin around the image."""
        return self.with_title_bar or self.buttons_visible

    def snapshot(self) -> ChromeSnapshot:
        return ChromeSnapshot(
            with_title_bar=self.with_title_bar,
            buttons_visible=self.buttons_visible,
            fullscreen=self.fullscreen,
        )

    def restore(self, snap: ChromeSnapshot) -> None:
        self.with_title_bar = snap.with_title_bar
        self.buttons_visible = snap.buttons_visible
        self.fullscreen = snap.fullscreen

    def go_chromeless(self) -> None:
        self.with_title_bar = False
        self.buttons_visible = False
        self.fullscreen = True
