"""einkview - image viewer overlay for e-reader style hosts."""

from .types import (
    Bitmap, DeviceInfo, Materialized, PaintRequest, Pending, Rect,
    RefreshPolicy, RenderedView, Rotation, ScaleMode,
)
from .state import ImageSequence, SingleImage
from .host import ButtonRow, ChromeWidget, Host, ProgressIndicator
from .viewer import ImageViewer

__version__ = "0.1.0"

__all__ = [
    'Bitmap',
    'DeviceInfo',
    'Materialized',
    'PaintRequest',
    'Pending',
    'Rect',
    'RefreshPolicy',
    'RenderedView',
    'Rotation',
    'ScaleMode',
    'ImageSequence',
    'SingleImage',
    'ButtonRow',
    'ChromeWidget',
    'Host',
    'ProgressIndicator',
    'ImageViewer',
]
