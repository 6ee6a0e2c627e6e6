"""Pillow-backed bitmap handles and the transforms producing derived ones."""

from __future__ import annotations
import os
from typing import Optional, Tuple

from PIL import Image

from .types import Bitmap, Rotation
from .logging import log


def from_image(image: Image.Image, releasable: bool = True) -> Bitmap:
    """Wrap a PIL image into a handle.

    Args:
        image: Pixel data.
        releasable: Whether the handle gets a release capability (closing the image).

    Returns:
        A Bitmap handle.
    """
    return Bitmap(image=image, release_fn=image.close if releasable else None)


def new_bitmap(width: int, height: int, color: int = 255, mode: str = "L") -> Bitmap:
    """Create a blank releasable bitmap."""
    return from_image(Image.new(mode, (width, height), color))


def load_bitmap(path: str) -> Optional[Bitmap]:
    """Load an image file into a releasable handle.

    Args:
        path: Image file path.

    Returns:
        Bitmap or None if the file cannot be decoded.
    """
    try:
        with Image.open(path) as img:
            img.load()
            # Convert palette images so that scaling interpolates colors
            if img.mode == "P":
                loaded = img.convert("RGBA")
            else:
                loaded = img.copy()
    except Exception as e:
        log(f"[LOAD][ERR] {os.path.basename(path)}: {e!r}")
        return None
    log(f"[LOAD] {os.path.basename(path)} {loaded.width}x{loaded.height} {loaded.mode}")
    return from_image(loaded)


def rotate(bitmap: Bitmap, rotation: Rotation) -> Bitmap:
    """Return a new handle rotated by 90 degrees steps."""
    # PIL uses counter-clockwise angles
    if rotation == Rotation.CLOCKWISE_90:
        return from_image(bitmap.image.transpose(Image.Transpose.ROTATE_270))
    return from_image(bitmap.image.transpose(Image.Transpose.ROTATE_90))


def scale(
    bitmap: Bitmap,
    size: Tuple[int, int],
    box: Optional[Tuple[float, float, float, float]] = None
) -> Bitmap:
    """Return a new handle resized to the given (width, height).

    Args:
        bitmap: Source handle (left untouched).
        size: Target (width, height).
        box: Optional (left, top, right, bottom) source region to scale.

    Returns:
        A new releasable Bitmap.
    """
    w = max(1, int(size[0]))
    h = max(1, int(size[1]))
    return from_image(bitmap.image.resize((w, h), Image.Resampling.LANCZOS, box=box))


def crop(bitmap: Bitmap, box: Tuple[int, int, int, int]) -> Bitmap:
    """Return a new handle holding the (left, top, right, bottom) window."""
    return from_image(bitmap.image.crop(box))
