"""Frame sources: a live capture device or a single image file."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generator, Optional, Union

import cv2
import numpy as np

from .exceptions import DeviceError

logger = logging.getLogger(__name__)


class BaseFrameSource(ABC):
    """Abstract base class for frame sources."""

    def open(self) -> None:
        """Acquire the underlying resource."""

    def close(self) -> None:
        """Release the underlying resource."""

    @abstractmethod
    def read(self) -> Optional[np.ndarray]:
        """Return the next BGR frame, or None when the source is exhausted."""
        pass

    def frames(self) -> Generator[np.ndarray, None, None]:
        """Yield frames until the source is exhausted."""
        while True:
            frame = self.read()
            if frame is None:
                break
            yield frame

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class CameraFrameSource(BaseFrameSource):
    """Blocking frame source over an OpenCV capture device."""

    def __init__(self, device: Union[int, str] = 0):
        """Initialize camera source.

        Args:
            device: Camera index, or a stream URL / video file path
        """
        if isinstance(device, str) and device.isdigit():
            device = int(device)
        self.device = device
        self._capture = None
        self._frame_count = 0

    def open(self) -> None:
        """Open the capture device.

        Raises:
            DeviceError: If the device cannot be opened
        """
        if self._capture is not None:
            return

        capture = cv2.VideoCapture(self.device)
        if not capture.isOpened():
            capture.release()
            raise DeviceError(f"Capture device {self.device} cannot be opened")

        self._capture = capture
        width = int(capture.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(capture.get(cv2.CAP_PROP_FRAME_HEIGHT))
        logger.info(f"Opened capture device {self.device} ({width}x{height})")

    def close(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info(f"Capture device {self.device} closed after {self._frame_count} frame(s)")

    def read(self) -> Optional[np.ndarray]:
        if self._capture is None:
            self.open()

        ret, frame = self._capture.read()
        if not ret or frame is None:
            logger.warning(f"No frame from capture device {self.device}")
            return None

        self._frame_count += 1
        return frame

    @property
    def frame_count(self) -> int:
        """Get total frames captured."""
        return self._frame_count


class ImageFileSource(BaseFrameSource):
    """Yields one image loaded from disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._consumed = False

    def read(self) -> Optional[np.ndarray]:
        """Load the image on first call, None afterwards.

        Raises:
            OSError: If the image cannot be read
        """
        if self._consumed:
            return None

        image = cv2.imread(str(self.path), cv2.IMREAD_COLOR)
        if image is None:
            raise OSError(f"Cannot read the image {self.path}")

        self._consumed = True
        logger.info(f"Loaded input image \"{self.path}\" ({image.shape[1]}x{image.shape[0]})")
        return image
