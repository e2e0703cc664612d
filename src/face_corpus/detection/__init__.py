"""Face detection backends."""

from .types import DetectedFace
from .base import BaseFaceDetector
from .haar import HaarCascadeDetector, default_cascade_path

__all__ = [
    "DetectedFace",
    "BaseFaceDetector",
    "HaarCascadeDetector",
    "default_cascade_path",
]
