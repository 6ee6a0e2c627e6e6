"""State management submodules for einkview."""

from .view import ViewState
from .chrome import ChromeState
from .input import PanState
from .images import SingleImage, ImageSequence, ImageSource, as_frame

__all__ = [
    'ViewState',
    'ChromeState',
    'PanState',
    'SingleImage',
    'ImageSequence',
    'ImageSource',
    'as_frame',
]
