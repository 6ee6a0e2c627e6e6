"""Input state - hold/pan tracking."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class PanState:
    """State for an in-progress hold or pan gesture."""
    panning: bool = False
    anchor: Optional[Tuple[float, float]] = None
    relative: Tuple[float, float] = (0.0, 0.0)

    def start_hold(self, x: float, y: float) -> None:
        """Start of a hold: remember where the finger went down."""
        self.panning = True
        self.anchor = (x, y)
        self.relative = (0.0, 0.0)

    def release_hold(self, x: float, y: float) -> Optional[Tuple[float, float]]:
        """End of a hold. Returns the movement since the anchor, or None if not holding."""
        if not self.panning or self.anchor is None:
            self.panning = False
            return None
        self.panning = False
        dx = x - self.anchor[0]
        dy = y - self.anchor[1]
        self.anchor = None
        self.relative = (dx, dy)
        return (dx, dy)

    def update_pan(self, rel_x: float, rel_y: float) -> None:
        """Record the cumulative movement of a pan gesture."""
        self.panning = True
        self.relative = (rel_x, rel_y)

    def end_pan(self) -> Optional[Tuple[float, float]]:
        """End of a pan. Returns the cumulative movement, or None if not panning."""
        if not self.panning:
            return None
        self.panning = False
        self.anchor = None
        return self.relative
