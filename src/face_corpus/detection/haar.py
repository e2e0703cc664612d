"""Haar Cascade face detector."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

import cv2
import numpy as np

from ..constants import get_detection_config
from ..utils import to_grayscale
from .base import BaseFaceDetector
from .types import DetectedFace

logger = logging.getLogger(__name__)

DEFAULT_CASCADE = "haarcascade_frontalface_default.xml"


def default_cascade_path() -> str:
    """Path of the frontal face cascade bundled with OpenCV."""
    return cv2.data.haarcascades + DEFAULT_CASCADE  # type: ignore


class HaarCascadeDetector(BaseFaceDetector):
    """Face detector using OpenCV Haar Cascades."""

    def __init__(
        self,
        cascade_path: Optional[Union[str, Path]] = None,
        scale_factor: Optional[float] = None,
        min_neighbors: Optional[int] = None,
        min_size: Optional[Tuple[int, int]] = None,
    ):
        """Initialize Haar Cascade detector.

        Args:
            cascade_path: Cascade XML file (OpenCV's frontal face cascade if None)
            scale_factor: Scale factor for multi-scale detection
            min_neighbors: Minimum neighbors for detection
            min_size: Minimum face size to detect

        Unset parameters come from the detection config.
        """
        config = get_detection_config()
        self.scale_factor = scale_factor if scale_factor is not None else config.scale_factor
        self.min_neighbors = min_neighbors if min_neighbors is not None else config.min_neighbors
        self.min_size = tuple(min_size if min_size is not None else config.min_size)

        cascade_path = str(cascade_path) if cascade_path else default_cascade_path()
        self.cascade = cv2.CascadeClassifier(cascade_path)

        if self.cascade.empty():
            raise RuntimeError(f"Failed to load cascade from {cascade_path}")
        logger.info(f"Face Haar-like cascade loaded from {cascade_path}")

    def detect(self, image: np.ndarray) -> List[DetectedFace]:
        """Detect faces using Haar Cascade."""
        gray = to_grayscale(image)

        faces = self.cascade.detectMultiScale(
            gray,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            minSize=self.min_size,
        )

        return [
            DetectedFace(x=int(x), y=int(y), width=int(w), height=int(h))
            for (x, y, w, h) in faces
        ]
