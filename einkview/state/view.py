"""View state - scale, rotation flag, pan center."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from ..types import ScaleMode


@dataclass
class ViewState:
    """State for zoom, rotation and pan parameters."""
    scale_factor: float = 0.0  # 0 = fit to container
    rotated: bool = False
    center_x_ratio: float = 0.5
    center_y_ratio: float = 0.5
    scale_to_fit: bool = True  # state of the scale/original size toggle

    @classmethod
    def initial(cls, scale_factor: float = 0.0, rotated: bool = False) -> ViewState:
        return cls(scale_factor=scale_factor, rotated=rotated, scale_to_fit=scale_factor == 0)

    @property
    def scale_mode(self) -> ScaleMode:
        return ScaleMode.FIT if self.scale_factor == 0 else ScaleMode.EXPLICIT

    @property
    def center_ratio(self) -> Tuple[float, float]:
        return (self.center_x_ratio, self.center_y_ratio)

    def set_center(self, x_ratio: float, y_ratio: float) -> None:
        self.center_x_ratio = x_ratio
        self.center_y_ratio = y_ratio

    def reset_center(self) -> None:
        """Center on the middle of the image."""
        self.center_x_ratio = 0.5
        self.center_y_ratio = 0.5

    def toggle_scale(self) -> None:
        """Switch between scale to fit and original size, recentering."""
        self.scale_factor = 1.0 if self.scale_to_fit else 0.0
        self.scale_to_fit = not self.scale_to_fit
        self.reset_center()
