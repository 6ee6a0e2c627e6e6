"""Pure layout and view calculation functions - no side effects, no state mutation."""

from __future__ import annotations
from typing import Optional, Tuple

from .types import DeviceInfo, Rect, Rotation
from .math_utils import clamp
from .config import WINDOW_MARGIN


def compute_frame_size(
    device: DeviceInfo,
    fullscreen: bool,
    width: Optional[int] = None,
    height: Optional[int] = None
) -> Tuple[int, int]:
    """Compute the viewer frame size.

    Args:
        device: Screen properties.
        fullscreen: Whether the viewer covers the whole screen.
        width: Explicit width for windowed mode, or None.
        height: Explicit height for windowed mode, or None.

    Returns:
        (width, height) of the frame.
    """
    if fullscreen:
        return (device.screen_w, device.screen_h)
    margin = device.scale_by_size(WINDOW_MARGIN)
    w = width if width else device.screen_w - margin
    h = height if height else device.screen_h - margin
    return (min(w, device.screen_w), min(h, device.screen_h))


def center_rect(outer: Rect, w: int, h: int) -> Rect:
    """Place a w x h rectangle centered inside outer."""
    return Rect(outer.x + (outer.w - w) // 2, outer.y + (outer.h - h) // 2, w, h)


def compute_image_box(container: Rect, padding: int) -> Rect:
    """Shrink the image container by padding on every side."""
    w = max(1, container.w - padding * 2)
    h = max(1, container.h - padding * 2)
    return center_rect(container, w, h)


def effective_rotation(rotated: bool, landscape_clockwise: bool, screen_landscape: bool) -> Rotation:
    """Rotation to apply to the displayed bitmap.

    In portrait the device landscape convention is followed so that the
    image looks as in landscape mode; in landscape the convention is reversed
    to get back to a portrait-like view.
    """
    if not rotated:
        return Rotation.NONE
    clockwise = landscape_clockwise
    if screen_landscape:
        clockwise = not clockwise
    return Rotation.CLOCKWISE_90 if clockwise else Rotation.COUNTER_CLOCKWISE_90


def rotated_size(w: int, h: int, rotation: Rotation) -> Tuple[int, int]:
    """Dimensions after rotation (they swap on quarter turns)."""
    if rotation == Rotation.NONE:
        return (w, h)
    return (h, w)


def compute_fit_scale(img_w: int, img_h: int, box_w: int, box_h: int) -> float:
    """Largest scale <= 1 that fits the image within the box."""
    if img_w <= 0 or img_h <= 0:
        return 1.0
    return min(1.0, box_w / img_w, box_h / img_h)


def scaled_size(w: int, h: int, scale: float) -> Tuple[int, int]:
    """Image dimensions at the given scale, at least 1x1."""
    return (max(1, int(w * scale + 0.5)), max(1, int(h * scale + 0.5)))


def center_ratio_bounds(full: int, visible: int) -> Tuple[float, float]:
    """Range of center ratios keeping the visible window inside the image."""
    if full <= visible or full <= 0:
        return (0.5, 0.5)
    half = visible / 2.0 / full
    return (half, 1.0 - half)


def compute_crop_window(
    full_w: int,
    full_h: int,
    box_w: int,
    box_h: int,
    center_x_ratio: float,
    center_y_ratio: float
) -> Rect:
    """Select the visible window of a scaled image.

    Args:
        full_w: Scaled image width.
        full_h: Scaled image height.
        box_w: Available width.
        box_h: Available height.
        center_x_ratio: Horizontal focal point in [0, 1].
        center_y_ratio: Vertical focal point in [0, 1].

    Returns:
        Window in scaled image coordinates.
    """
    vis_w = min(full_w, box_w)
    vis_h = min(full_h, box_h)
    left = int(center_x_ratio * full_w - vis_w / 2.0 + 0.5)
    top = int(center_y_ratio * full_h - vis_h / 2.0 + 0.5)
    left = int(clamp(left, 0, full_w - vis_w))
    top = int(clamp(top, 0, full_h - vis_h))
    return Rect(left, top, vis_w, vis_h)


def pan_center_ratio(ratio: float, delta: float, full: int, visible: int) -> float:
    """Center ratio after moving the visible window by delta pixels."""
    lo, hi = center_ratio_bounds(full, visible)
    if full <= 0:
        return 0.5
    return clamp(ratio + delta / full, lo, hi)
