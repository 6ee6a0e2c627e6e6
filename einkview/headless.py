"""Headless host - records what the viewer asks for instead of drawing it.

Used to drive an ImageViewer from scripts and tests: paint requests,
screenshot requests and close requests are kept in lists, and chrome widgets
are fixed-height placeholders remembering their texts.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from .viewer import ImageViewer

from .host import ButtonRow, ChromeWidget, Host, ProgressIndicator
from .types import ButtonSpec, DeviceInfo, PaintRequest
from .logging import dbg

TITLE_BAR_HEIGHT = 60
CAPTIONED_TITLE_BAR_HEIGHT = 100
BUTTON_ROW_HEIGHT = 50


@dataclass
class PlaceholderWidget(ChromeWidget):
    """Chrome widget with a fixed height."""
    kind: str
    height: int
    width: int = 0
    text: str = ""
    freed: bool = False
    on_toggle_caption: Optional[Callable[[], None]] = None
    on_close: Optional[Callable[[], None]] = None

    def get_height(self) -> int:
        return self.height

    def free(self) -> None:
        self.freed = True


@dataclass
class PlaceholderProgress(PlaceholderWidget, ProgressIndicator):
    percentage: float = 0.0

    def set_percentage(self, percentage: float) -> None:
        self.percentage = percentage


@dataclass
class PlaceholderButtonRow(PlaceholderWidget, ButtonRow):
    buttons: List[ButtonSpec] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)

    def set_button_text(self, button_id: str, text: str) -> None:
        self.labels[button_id] = text

    def press(self, button_id: str) -> None:
        """Simulate a tap on a button."""
        for b in self.buttons:
            if b.id == button_id:
                b.callback()
                return
        raise KeyError(button_id)


@dataclass
class HeadlessHost(Host):
    """Recording host."""
    device_info: DeviceInfo = field(default_factory=DeviceInfo)
    paints: List[PaintRequest] = field(default_factory=list)
    screenshots: List[str] = field(default_factory=list)
    pending_captures: List[Tuple[str, Optional[Callable[[], None]]]] = field(default_factory=list)
    closed: List["ImageViewer"] = field(default_factory=list)
    widgets: List[PlaceholderWidget] = field(default_factory=list)
    force_repaints: int = 0

    @property
    def device(self) -> DeviceInfo:
        return self.device_info

    def create_title_bar(self, width, title, subtitle, on_toggle_caption, on_close) -> ChromeWidget:
        height = CAPTIONED_TITLE_BAR_HEIGHT if subtitle else TITLE_BAR_HEIGHT
        kind = "captioned_title_bar" if subtitle else "title_bar"
        w = PlaceholderWidget(kind=kind, height=height, width=width, text=title,
                              on_toggle_caption=on_toggle_caption, on_close=on_close)
        self.widgets.append(w)
        return w

    def create_button_row(self, width: int, buttons: List[ButtonSpec]) -> ButtonRow:
        w = PlaceholderButtonRow(kind="button_row", height=BUTTON_ROW_HEIGHT, width=width,
                                 buttons=list(buttons), labels={b.id: b.text for b in buttons})
        self.widgets.append(w)
        return w

    def create_progress_bar(self, width: int, height: int) -> ProgressIndicator:
        w = PlaceholderProgress(kind="progress_bar", height=height, width=width)
        self.widgets.append(w)
        return w

    def paint(self, request: PaintRequest) -> None:
        dbg(f"[HOST] paint {request}")
        self.paints.append(request)

    def force_repaint(self) -> None:
        self.force_repaints += 1

    def save_screenshot(self, path: str, callback: Optional[Callable[[], None]]) -> None:
        self.screenshots.append(path)
        self.pending_captures.append((path, callback))

    def close(self, viewer: "ImageViewer") -> None:
        self.closed.append(viewer)

    def finish_screenshots(self) -> int:
        """Complete pending captures by running their callbacks. Returns how many ran."""
        pending = self.pending_captures
        self.pending_captures = []
        ran = 0
        for _path, callback in pending:
            if callback is not None:
                callback()
                ran += 1
        return ran

    @property
    def last_paint(self) -> Optional[PaintRequest]:
        return self.paints[-1] if self.paints else None

    def widget(self, kind: str) -> Optional[PlaceholderWidget]:
        """Most recently created widget of a kind."""
        for w in reversed(self.widgets):
            if w.kind == kind:
                return w
        return None
