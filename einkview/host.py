"""Interfaces of the host application the viewer is shown in.

The host owns the widget framework, the gesture recognizer, the display
refresh scheduler and the screenshot writer. The viewer only talks to it
through the methods below.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, List, Optional

if TYPE_CHECKING:
    from .viewer import ImageViewer

from .types import ButtonSpec, DeviceInfo, PaintRequest


class ChromeWidget(ABC):
    """A widget drawn around the image (title bar, button row, progress bar)."""

    @abstractmethod
    def get_height(self) -> int:
        """Height the widget takes in the viewer frame."""
        pass

    @abstractmethod
    def free(self) -> None:
        """Release the widget's resources."""
        pass


class ProgressIndicator(ChromeWidget):
    """Position indicator for image sequences."""

    @abstractmethod
    def set_percentage(self, percentage: float) -> None:
        pass


class ButtonRow(ChromeWidget):
    """Row of buttons at the bottom of the viewer."""

    @abstractmethod
    def set_button_text(self, button_id: str, text: str) -> None:
        pass


class Host(ABC):
    """Everything the viewer consumes from its host application."""

    @property
    @abstractmethod
    def device(self) -> DeviceInfo:
        """Current screen and input capabilities."""
        pass

    @abstractmethod
    def create_title_bar(
        self,
        width: int,
        title: str,
        subtitle: Optional[str],
        on_toggle_caption: Optional[Callable[[], None]],
        on_close: Callable[[], None],
    ) -> ChromeWidget:
        """Build a title bar; on_toggle_caption is None when there is no caption toggler."""
        pass

    @abstractmethod
    def create_button_row(self, width: int, buttons: List[ButtonSpec]) -> ButtonRow:
        pass

    @abstractmethod
    def create_progress_bar(self, width: int, height: int) -> ProgressIndicator:
        pass

    @abstractmethod
    def paint(self, request: PaintRequest) -> None:
        """Schedule a repaint. Must return without waiting for it."""
        pass

    @abstractmethod
    def force_repaint(self) -> None:
        """Flush pending repaints immediately."""
        pass

    @abstractmethod
    def save_screenshot(self, path: str, callback: Optional[Callable[[], None]]) -> None:
        """Capture the screen to path, then call callback (if any) once."""
        pass

    @abstractmethod
    def close(self, viewer: "ImageViewer") -> None:
        """Remove the viewer from the screen."""
        pass
