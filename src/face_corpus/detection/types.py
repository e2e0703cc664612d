"""Detected face data type."""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class DetectedFace:
    """Axis-aligned face rectangle in the coordinates of the detector input."""

    x: int
    y: int
    width: int
    height: int
    confidence: float = 1.0

    @property
    def bbox(self) -> Tuple[int, int, int, int]:
        """Return bounding box as (x, y, w, h)."""
        return (self.x, self.y, self.width, self.height)

    @property
    def area(self) -> int:
        """Return area of bounding box."""
        return self.width * self.height
