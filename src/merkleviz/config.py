"""
Viewer Parameters

Bounds and defaults for the externally supplied scalars (height, zoom).
All parameters are immutable.
"""

from dataclasses import dataclass


def clamp(n, lo, hi):
    return min(hi, max(lo, n))


@dataclass(frozen=True)
class ViewerConfig:
    """Public parameters of a viewing session."""

    # ==========================================================================
    # Tree Height
    # ==========================================================================

    min_height: int = 1
    """Smallest height the height control allows."""

    max_height: int = 48
    """Largest height the height control allows."""

    default_height: int = 6
    """Height of a fresh session."""

    zero_height: int = 48
    """Height used by the blank (all-zero) input."""

    # ==========================================================================
    # Zoom
    # ==========================================================================

    min_zoom: float = 0.5
    max_zoom: float = 2.0
    zoom_step: float = 0.1
    default_zoom: float = 1.0

    def __post_init__(self):
        if not 0 <= self.min_height <= self.max_height:
            raise ValueError(f"Invalid height bounds [{self.min_height}, {self.max_height}]")
        if not 0 < self.min_zoom <= self.max_zoom:
            raise ValueError(f"Invalid zoom bounds [{self.min_zoom}, {self.max_zoom}]")

    def clamp_height(self, height: int) -> int:
        return clamp(int(height), self.min_height, self.max_height)

    def clamp_zoom(self, zoom: float) -> float:
        """Clamp and snap to the zoom step."""
        z = clamp(float(zoom), self.min_zoom, self.max_zoom)
        return round(round(z / self.zoom_step) * self.zoom_step, 10)
