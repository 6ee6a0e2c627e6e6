"""Command Pattern for gesture handling.

Commands encapsulate actions that can be triggered by various gestures.
Each command has an execute() method and optional can_execute() for guards.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .viewer import ImageViewer

from .logging import log, dbg


class Command(ABC):
    """Base class for all commands."""

    @abstractmethod
    def execute(self, viewer: "ImageViewer") -> bool:
        """Execute the command. Returns True if action was taken."""
        pass

    def can_execute(self, viewer: "ImageViewer") -> bool:
        """Check if command can be executed. Override for guards."""
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Lifecycle Commands
# ═══════════════════════════════════════════════════════════════════════════

class Close(Command):
    """Close the viewer."""

    def can_execute(self, viewer: "ImageViewer") -> bool:
        return not viewer.closed

    def execute(self, viewer: "ImageViewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log("[CMD] Close")
        viewer.close()
        return True


class SaveView(Command):
    """Save the currently displayed image as a screenshot."""

    def execute(self, viewer: "ImageViewer") -> bool:
        log("[CMD] SaveView")
        return viewer.save_view()


class FullRefresh(Command):
    """Request a flashing full screen refresh."""

    def execute(self, viewer: "ImageViewer") -> bool:
        dbg("[CMD] FullRefresh")
        viewer.request_full_refresh()
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Navigation Commands
# ═══════════════════════════════════════════════════════════════════════════

class NavigateNext(Command):
    """Navigate to next frame of a sequence."""

    def can_execute(self, viewer: "ImageViewer") -> bool:
        return viewer.sequence is not None and viewer.sequence.has_next

    def execute(self, viewer: "ImageViewer") -> bool:
        if not self.can_execute(viewer):
            return False
        cur = viewer.sequence.index
        log(f"[CMD] NavigateNext: {cur} -> {cur + 1}")
        return viewer.navigate_to(cur + 1)


class NavigatePrev(Command):
    """Navigate to previous frame of a sequence."""

    def can_execute(self, viewer: "ImageViewer") -> bool:
        return viewer.sequence is not None and viewer.sequence.has_prev

    def execute(self, viewer: "ImageViewer") -> bool:
        if not self.can_execute(viewer):
            return False
        cur = viewer.sequence.index
        log(f"[CMD] NavigatePrev: {cur} -> {cur - 1}")
        return viewer.navigate_to(cur - 1)


# ═══════════════════════════════════════════════════════════════════════════
# Zoom Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class ZoomIn(Command):
    """Zoom in by step amount (None = key step)."""
    step: Optional[float] = None

    def execute(self, viewer: "ImageViewer") -> bool:
        dbg(f"[CMD] ZoomIn: step={self.step}")
        return viewer.zoom_in(self.step)


@dataclass
class ZoomOut(Command):
    """Zoom out by step amount (None = key step)."""
    step: Optional[float] = None

    def execute(self, viewer: "ImageViewer") -> bool:
        dbg(f"[CMD] ZoomOut: step={self.step}")
        return viewer.zoom_out(self.step)


@dataclass
class RecenterBy(Command):
    """Move the focal point without rebuilding (used before a spread zoom)."""
    dx: float
    dy: float

    def execute(self, viewer: "ImageViewer") -> bool:
        dbg(f"[CMD] RecenterBy: ({self.dx:.0f}, {self.dy:.0f})")
        viewer.recenter_by(self.dx, self.dy)
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Pan Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class PanBy(Command):
    """Move the visible window by a pixel offset."""
    dx: float
    dy: float

    def execute(self, viewer: "ImageViewer") -> bool:
        dbg(f"[CMD] PanBy: ({self.dx:.0f}, {self.dy:.0f})")
        return viewer.pan_by(self.dx, self.dy)


@dataclass
class StartHold(Command):
    """Start of a hold: anchor a pan."""
    x: float
    y: float

    def execute(self, viewer: "ImageViewer") -> bool:
        viewer.pan_state.start_hold(self.x, self.y)
        dbg(f"[CMD] StartHold: pos=({self.x:.0f}, {self.y:.0f})")
        return True


@dataclass
class EndHold(Command):
    """End of a hold: pan by the movement, or refresh when barely moved."""
    x: float
    y: float

    def can_execute(self, viewer: "ImageViewer") -> bool:
        return viewer.pan_state.panning and viewer.pan_state.anchor is not None

    def execute(self, viewer: "ImageViewer") -> bool:
        if not self.can_execute(viewer):
            return False
        moved = viewer.pan_state.release_hold(self.x, self.y)
        if moved is None:
            return False
        dx, dy = moved
        threshold = viewer.pan_threshold
        if abs(dx) < threshold and abs(dy) < threshold:
            return FullRefresh().execute(viewer)
        return PanBy(-dx, -dy).execute(viewer)


@dataclass
class UpdatePan(Command):
    """Track a pan gesture in progress."""
    rel_x: float
    rel_y: float

    def execute(self, viewer: "ImageViewer") -> bool:
        viewer.pan_state.update_pan(self.rel_x, self.rel_y)
        return True


class EndPan(Command):
    """End of a pan gesture: apply the cumulative movement."""

    def can_execute(self, viewer: "ImageViewer") -> bool:
        return viewer.pan_state.panning

    def execute(self, viewer: "ImageViewer") -> bool:
        if not self.can_execute(viewer):
            return False
        dx, dy = viewer.pan_state.end_pan()
        return PanBy(-dx, -dy).execute(viewer)


# ═══════════════════════════════════════════════════════════════════════════
# Toggle Commands
# ═══════════════════════════════════════════════════════════════════════════

class ToggleButtons(Command):
    """Show or hide the bottom button row."""

    def execute(self, viewer: "ImageViewer") -> bool:
        dbg(f"[CMD] ToggleButtons: {viewer.chrome.buttons_visible} -> {not viewer.chrome.buttons_visible}")
        viewer.toggle_buttons()
        return True


class ToggleScale(Command):
    """Switch between scale to fit and original size."""

    def execute(self, viewer: "ImageViewer") -> bool:
        dbg("[CMD] ToggleScale")
        viewer.toggle_scale()
        return True


class ToggleRotation(Command):
    """Rotate or unrotate the image."""

    def execute(self, viewer: "ImageViewer") -> bool:
        dbg("[CMD] ToggleRotation")
        viewer.toggle_rotation()
        return True


class ToggleCaption(Command):
    """Show or hide the caption under the title."""

    def can_execute(self, viewer: "ImageViewer") -> bool:
        return viewer.caption is not None

    def execute(self, viewer: "ImageViewer") -> bool:
        if not self.can_execute(viewer):
            return False
        dbg("[CMD] ToggleCaption")
        viewer.toggle_caption()
        return True
