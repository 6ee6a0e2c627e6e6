"""Image sources - a single bitmap or a navigable sequence of frames."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Union

from ..types import Bitmap, Frame, Materialized, Pending
from ..logging import log, dbg


@dataclass
class SingleImage:
    """One bitmap, released on close when disposable."""
    bitmap: Bitmap
    disposable: bool = True

    @classmethod
    def owned(cls, bitmap: Bitmap) -> SingleImage:
        return cls(bitmap, disposable=True)

    @classmethod
    def borrowed(cls, bitmap: Bitmap) -> SingleImage:
        return cls(bitmap, disposable=False)


FrameLike = Union[Frame, Bitmap, Callable[[], Bitmap]]


def as_frame(item: FrameLike) -> Frame:
    """Wrap a bitmap or producer into its frame variant."""
    if isinstance(item, (Materialized, Pending)):
        return item
    if isinstance(item, Bitmap):
        return Materialized(item)
    if callable(item):
        return Pending(item)
    raise TypeError(f"not a bitmap or bitmap producer: {item!r}")


@dataclass
class ImageSequence:
    """Ordered frames with a 1-based cursor.

    ``disposable`` says whether the viewer owns the sequence itself (its
    ``release_fn`` is called on close); ``frames_disposable`` says whether
    the viewer owns each frame it displays.
    """
    frames: List[Frame] = field(default_factory=list)
    disposable: bool = True
    frames_disposable: bool = True
    release_fn: Optional[Callable[[], None]] = None
    index: int = 1

    def __post_init__(self) -> None:
        self.frames = [as_frame(f) for f in self.frames]

    @classmethod
    def of(cls, items: Sequence[FrameLike], **kwargs) -> ImageSequence:
        return cls(frames=list(items), **kwargs)

    @property
    def count(self) -> int:
        """Total number of frames."""
        return len(self.frames)

    @property
    def has_prev(self) -> bool:
        return self.index > 1

    @property
    def has_next(self) -> bool:
        return self.index < len(self.frames)

    @property
    def progress(self) -> float:
        """Position of the cursor as a fraction in [0, 1]."""
        if len(self.frames) > 1:
            return (self.index - 1) / (len(self.frames) - 1)
        return 1.0

    def in_range(self, num: int) -> bool:
        return 1 <= num <= len(self.frames)

    def materialize(self, num: int) -> Bitmap:
        """Get the bitmap of frame ``num``, invoking its producer if lazy."""
        frame = self.frames[num - 1]
        if isinstance(frame, Pending):
            dbg(f"[NAV] Producing frame {num}/{self.count}")
            return frame.producer()
        return frame.bitmap

    def is_stale(self, num: int) -> bool:
        """True if frame ``num`` is an already loaded bitmap that has been released."""
        frame = self.frames[num - 1]
        return isinstance(frame, Materialized) and frame.bitmap.released

    def release(self) -> bool:
        """Run the aggregate release capability, if any."""
        if self.release_fn is None:
            return False
        try:
            self.release_fn()
        except Exception as e:
            log(f"[BITMAP][ERR] Sequence release failed: {e!r}")
        dbg(f"[BITMAP] Released sequence of {self.count}")
        return True


ImageSource = Union[SingleImage, ImageSequence]
