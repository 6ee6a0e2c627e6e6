"""Core data types for einkview."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple, Union
from enum import Enum, IntEnum, auto

from .logging import log, dbg


class ScaleMode(Enum):
    """How the image is scaled into the viewport."""
    FIT = auto()       # largest scale <= 1 fitting the image box
    EXPLICIT = auto()  # stored factor applied verbatim


class Rotation(IntEnum):
    """Effective rotation applied to the displayed bitmap, in degrees."""
    NONE = 0
    CLOCKWISE_90 = 90
    COUNTER_CLOCKWISE_90 = 270


class RefreshPolicy(Enum):
    """Refresh modes understood by the host's paint scheduler."""
    PARTIAL = auto()   # host default
    UI = auto()        # high quality, no color reduction
    FULL = auto()      # full flashing refresh
    FLASH_UI = auto()  # flashing refresh of a region


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in screen coordinates."""
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    def contains(self, px: float, py: float) -> bool:
        """Check if point lies inside the rectangle (edges included)."""
        return self.x <= px <= self.right and self.y <= py <= self.bottom

    def union(self, other: Optional[Rect]) -> Rect:
        """Smallest rectangle covering both."""
        if other is None or (other.w <= 0 and other.h <= 0):
            return self
        if self.w <= 0 and self.h <= 0:
            return other
        x = min(self.x, other.x)
        y = min(self.y, other.y)
        return Rect(x, y, max(self.right, other.right) - x, max(self.bottom, other.bottom) - y)


@dataclass(frozen=True)
class PaintRequest:
    """A repaint request handed to the host.

    A ``region`` of None means the whole screen.
    """
    region: Optional[Rect]
    policy: RefreshPolicy = RefreshPolicy.PARTIAL
    dither: bool = False


@dataclass
class Bitmap:
    """A bitmap handle: pixel data plus an optional release capability."""
    image: Any  # PIL.Image.Image
    release_fn: Optional[Callable[[], None]] = None
    released: bool = False

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> Tuple[int, int]:
        return (self.image.width, self.image.height)

    @property
    def can_release(self) -> bool:
        """True if this handle carries a release capability."""
        return self.release_fn is not None

    def release(self) -> bool:
        """Release the handle. Returns True if a release actually happened."""
        if self.released or self.release_fn is None:
            return False
        self.released = True
        try:
            self.release_fn()
        except Exception as e:
            log(f"[BITMAP][ERR] Release failed: {e!r}")
        dbg(f"[BITMAP] Released {self.size[0]}x{self.size[1]}")
        return True


@dataclass
class Materialized:
    """A sequence frame whose bitmap already exists."""
    bitmap: Bitmap


@dataclass
class Pending:
    """A sequence frame produced lazily on navigation."""
    producer: Callable[[], Bitmap]


Frame = Union[Materialized, Pending]


@dataclass(frozen=True)
class DeviceInfo:
    """Device and screen properties injected by the host."""
    screen_w: int = 600
    screen_h: int = 800
    is_touch: bool = True
    has_multitouch: bool = True
    has_keys: bool = False
    landscape_clockwise: bool = False
    mirrored_ui: bool = False
    dpi_scale: float = 1.0

    @property
    def is_landscape(self) -> bool:
        return self.screen_w > self.screen_h

    @property
    def screen_rect(self) -> Rect:
        return Rect(0, 0, self.screen_w, self.screen_h)

    def scale_by_size(self, px: float) -> int:
        """Convert a device-independent size to device pixels."""
        return int(px * self.dpi_scale)


@dataclass(frozen=True)
class ChromeSnapshot:
    """Saved chrome visibility, restored after a screenshot."""
    with_title_bar: bool
    buttons_visible: bool
    fullscreen: bool


@dataclass(frozen=True)
class ButtonSpec:
    """A button of the bottom button row."""
    id: str
    text: str
    callback: Callable[[], Any]


@dataclass
class RenderedView:
    """The materialized on-screen bitmap and where it goes."""
    bitmap: Bitmap
    rect: Rect
    scale: float
    full_w: int   # scaled (uncropped) image width
    full_h: int   # scaled (uncropped) image height
    crop: Rect = field(default_factory=Rect)
    rotation: Rotation = Rotation.NONE
    owns_bitmap: bool = True

    def release(self) -> bool:
        """Release the derived bitmap, unless it is the source bitmap."""
        if not self.owns_bitmap:
            return False
        return self.bitmap.release()
