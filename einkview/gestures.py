"""Typed input events delivered by the host's gesture recognizer."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class Direction(Enum):
    """Swipe directions, with 45 degree granularity."""
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    NORTHEAST = "northeast"
    NORTHWEST = "northwest"
    SOUTHEAST = "southeast"
    SOUTHWEST = "southwest"


@dataclass(frozen=True)
class Tap:
    x: float
    y: float


@dataclass(frozen=True)
class Hold:
    x: float
    y: float


@dataclass(frozen=True)
class HoldRelease:
    x: float
    y: float


@dataclass(frozen=True)
class Pan:
    """A pan in progress; relative is the movement since the pan started."""
    x: float
    y: float
    relative: Tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True)
class PanRelease:
    x: float
    y: float


@dataclass(frozen=True)
class Swipe:
    x: float
    y: float
    direction: Direction
    distance: float


@dataclass(frozen=True)
class MultiSwipe:
    x: float
    y: float


@dataclass(frozen=True)
class Spread:
    x: float
    y: float
    distance: float


@dataclass(frozen=True)
class Pinch:
    x: float
    y: float
    distance: float


@dataclass(frozen=True)
class TwoFingerTap:
    """Two fingers tapping; span is the distance between them."""
    x: float
    y: float
    span: float


@dataclass(frozen=True)
class KeyPress:
    key: str


GestureEvent = Union[
    Tap, Hold, HoldRelease, Pan, PanRelease, Swipe, MultiSwipe,
    Spread, Pinch, TwoFingerTap, KeyPress,
]

TOUCH_EVENTS = (Tap, Hold, HoldRelease, Pan, PanRelease, Swipe, MultiSwipe,
                Spread, Pinch, TwoFingerTap)
