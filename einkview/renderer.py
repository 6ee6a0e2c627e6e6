"""Renderer - turns the current frame and view state into a RenderedView.

The source bitmap is never modified. Every transform produces a new handle
owned by the RenderedView; when no transform is needed the source is
displayed as is and the view does not own it.
"""

from __future__ import annotations

from . import bitmap as bm
from .types import Bitmap, Rect, RenderedView, Rotation
from .state import ViewState
from .view_math import (
    compute_crop_window,
    compute_fit_scale,
    center_rect,
    rotated_size,
    scaled_size,
)
from .logging import dbg


def render_view(source: Bitmap, view: ViewState, rotation: Rotation, box: Rect) -> RenderedView:
    """Build the displayed bitmap: rotate, scale, then crop around the center ratio.

    Args:
        source: Current frame bitmap.
        view: Scale and pan parameters.
        rotation: Effective rotation.
        box: Available area in screen coordinates.

    Returns:
        RenderedView placed centered within box.
    """
    work = source
    owned = False
    if rotation != Rotation.NONE:
        work = bm.rotate(source, rotation)
        owned = True

    img_w, img_h = rotated_size(source.width, source.height, rotation)
    if view.scale_factor == 0:
        scale = compute_fit_scale(img_w, img_h, box.w, box.h)
    else:
        scale = view.scale_factor
    full_w, full_h = scaled_size(img_w, img_h, scale)
    crop = compute_crop_window(full_w, full_h, box.w, box.h,
                               view.center_x_ratio, view.center_y_ratio)

    if (full_w, full_h) != (img_w, img_h):
        # Scale only the visible window, in source coordinates
        sx = img_w / full_w
        sy = img_h / full_h
        src_box = (crop.x * sx, crop.y * sy, crop.right * sx, crop.bottom * sy)
        scaled = bm.scale(work, (crop.w, crop.h), box=src_box)
        if owned:
            work.release()
        work = scaled
        owned = True
    elif (crop.w, crop.h) != (full_w, full_h):
        cropped = bm.crop(work, (crop.x, crop.y, crop.right, crop.bottom))
        if owned:
            work.release()
        work = cropped
        owned = True

    rect = center_rect(box, crop.w, crop.h)
    dbg(f"[RENDER] {source.width}x{source.height} rot={int(rotation)} scale={scale:.3f} "
        f"full={full_w}x{full_h} crop=({crop.x},{crop.y} {crop.w}x{crop.h}) owned={owned}")
    return RenderedView(
        bitmap=work,
        rect=rect,
        scale=scale,
        full_w=full_w,
        full_h=full_h,
        crop=crop,
        rotation=rotation,
        owns_bitmap=owned,
    )
