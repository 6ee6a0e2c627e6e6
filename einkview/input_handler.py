"""Input Handler - maps recognized gestures and key presses to commands.

This module bridges the host's gesture recognizer and the command pattern.
Each event is matched by type, in priority order tap > hold > pan > swipe >
multi-touch > key, and turned into a list of commands to execute.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .viewer import ImageViewer

from .commands import (
    Command,
    Close, SaveView,
    NavigateNext, NavigatePrev,
    ZoomIn, ZoomOut, RecenterBy,
    PanBy, StartHold, EndHold, UpdatePan, EndPan,
    ToggleButtons,
)
from .gestures import (
    GestureEvent, TOUCH_EVENTS, Direction,
    Tap, Hold, HoldRelease, Pan, PanRelease, Swipe, MultiSwipe,
    Spread, Pinch, TwoFingerTap, KeyPress,
)
from .config import (
    SWIPE_EDGE_FRAC, NAV_ZONE_FRAC, SAVE_CORNER_FRAC, TWO_FINGER_TAP_SLACK,
    KEY_BACK, KEY_PAGE_BACK, KEY_PAGE_FORWARD,
)
from .math_utils import diagonal, half_diagonal_step
from .logging import dbg


@dataclass
class GestureDispatcher:
    """Turns gesture events into commands for one viewer."""

    viewer: "ImageViewer"

    @property
    def screen_w(self) -> int:
        return self.viewer.device.screen_w

    @property
    def screen_h(self) -> int:
        return self.viewer.device.screen_h

    def is_near_side_edge(self, x: float) -> bool:
        """Check if x is within the left or right 1/16 of the screen."""
        return x < self.screen_w * SWIPE_EDGE_FRAC or x > self.screen_w * (1.0 - SWIPE_EDGE_FRAC)

    def is_in_save_corner(self, x: float, y: float) -> bool:
        """Bottom left corner used to save on devices without multitouch."""
        return x < self.screen_w * SAVE_CORNER_FRAC and y > self.screen_h * (1.0 - SAVE_CORNER_FRAC)

    def nav_zone(self, x: float) -> int:
        """-1 for previous, 1 for next, 0 for the middle third (mirrored for RTL layouts)."""
        zone = 0
        if x < self.screen_w * NAV_ZONE_FRAC:
            zone = -1
        elif x > self.screen_w * (1.0 - NAV_ZONE_FRAC):
            zone = 1
        if self.viewer.device.mirrored_ui:
            zone = -zone
        return zone

    # ─── Per gesture handlers ───────────────────────────────────────────────

    def on_tap(self, ev: Tap) -> List[Command]:
        v = self.viewer
        if not v.frame_rect.contains(ev.x, ev.y):
            return [Close()]
        if not v.device.has_multitouch:
            if not v.chrome.buttons_visible and self.is_in_save_corner(ev.x, ev.y):
                return [SaveView()]
        if v.chrome.with_title_bar and ev.y < v.frame_rect.y + v.title_bar_height:
            # Taps in the title area belong to the title bar widgets
            return []
        if v.sequence is not None:
            zone = self.nav_zone(ev.x)
            if zone < 0:
                return [NavigatePrev()]
            if zone > 0:
                return [NavigateNext()]
        return [ToggleButtons()]

    def on_swipe(self, ev: Swipe) -> List[Command]:
        # Swipes only give a start point and a direction, so panning with
        # them is coarse
        d = ev.distance
        sq = half_diagonal_step(d)
        direction = ev.direction
        if direction == Direction.NORTH:
            if self.is_near_side_edge(ev.x):
                return [ZoomIn(d / self.screen_h)]
            return [PanBy(0, d)]
        if direction == Direction.SOUTH:
            if self.is_near_side_edge(ev.x):
                return [ZoomOut(d / self.screen_h)]
            if self.viewer.view.scale_factor == 0:
                # Nothing to pan when scaled to fit
                return [Close()]
            return [PanBy(0, -d)]
        if direction == Direction.EAST:
            return [PanBy(-d, 0)]
        if direction == Direction.WEST:
            return [PanBy(d, 0)]
        if direction == Direction.NORTHEAST:
            return [PanBy(-sq, sq)]
        if direction == Direction.NORTHWEST:
            return [PanBy(sq, sq)]
        if direction == Direction.SOUTHEAST:
            return [PanBy(-sq, -sq)]
        if direction == Direction.SOUTHWEST:
            return [PanBy(sq, -sq)]
        return []

    def on_spread(self, ev: Spread) -> List[Command]:
        # Zoom towards where the spread happened
        return [
            RecenterBy(ev.x - self.screen_w / 2, ev.y - self.screen_h / 2),
            ZoomIn(ev.distance / self.screen_w),
        ]

    def on_pinch(self, ev: Pinch) -> List[Command]:
        # Keep the same center point when zooming out
        return [ZoomOut(ev.distance / self.screen_w)]

    def on_two_finger_tap(self, ev: TwoFingerTap) -> List[Command]:
        diag = diagonal(self.screen_w, self.screen_h)
        slack = self.viewer.device.scale_by_size(TWO_FINGER_TAP_SLACK)
        if ev.span >= diag - slack:
            return [SaveView()]
        return []

    def on_key(self, ev: KeyPress) -> List[Command]:
        if ev.key == KEY_BACK:
            return [Close()]
        if ev.key == KEY_PAGE_BACK:
            return [ZoomIn()]
        if ev.key == KEY_PAGE_FORWARD:
            return [ZoomOut()]
        # Any other key closes too
        return [Close()]

    # ─── Dispatch ──────────────────────────────────────────────────────────

    def dispatch(self, ev: GestureEvent) -> List[Command]:
        """Return the commands for one event."""
        device = self.viewer.device
        if isinstance(ev, TOUCH_EVENTS) and not device.is_touch:
            dbg(f"[INPUT] Ignoring touch event on non touch device: {ev!r}")
            return []
        if isinstance(ev, KeyPress) and not device.has_keys:
            dbg(f"[INPUT] Ignoring key event on device without keys: {ev!r}")
            return []

        if isinstance(ev, Tap):
            return self.on_tap(ev)
        if isinstance(ev, Hold):
            return [StartHold(ev.x, ev.y)]
        if isinstance(ev, HoldRelease):
            return [EndHold(ev.x, ev.y)]
        if isinstance(ev, Pan):
            return [UpdatePan(ev.relative[0], ev.relative[1])]
        if isinstance(ev, PanRelease):
            return [EndPan()]
        if isinstance(ev, Swipe):
            return self.on_swipe(ev)
        if isinstance(ev, MultiSwipe):
            # Swipe south only closes when scaled to fit; any multiswipe always does
            return [Close()]
        if isinstance(ev, Spread):
            return self.on_spread(ev)
        if isinstance(ev, Pinch):
            return self.on_pinch(ev)
        if isinstance(ev, TwoFingerTap):
            return self.on_two_finger_tap(ev)
        if isinstance(ev, KeyPress):
            return self.on_key(ev)
        return []

