"""Face image processing utilities."""

from typing import Tuple

import cv2
import numpy as np


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Return a single-channel copy of a BGR/BGRA image (grayscale passes through)."""
    if image.ndim == 2:
        return image
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    if image.shape[2] == 1:
        return image[:, :, 0]
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def resize_to(image: np.ndarray, size: Tuple[int, int]) -> np.ndarray:
    """Resize an image to exactly ``size`` (width, height) with bicubic interpolation."""
    width, height = size
    return cv2.resize(image, (int(width), int(height)), interpolation=cv2.INTER_CUBIC)


def normalize_face(face_image: np.ndarray, size: Tuple[int, int]) -> np.ndarray:
    """Normalize a face crop for recognition.

    Args:
        face_image: Face crop, grayscale or BGR
        size: Standard size (width, height)

    Returns:
        Grayscale image of exactly ``size``
    """
    return resize_to(to_grayscale(face_image), size)


def clip_rect(
    rect: Tuple[int, int, int, int],
    image_shape: Tuple[int, ...],
) -> Tuple[int, int, int, int]:
    """Clip a (x, y, w, h) rectangle to the image bounds.

    The result may have zero width or height when the rectangle lies
    outside the image.
    """
    frame_h, frame_w = image_shape[:2]
    x, y, w, h = rect
    x1 = min(max(0, x), frame_w)
    y1 = min(max(0, y), frame_h)
    x2 = min(max(0, x + w), frame_w)
    y2 = min(max(0, y + h), frame_h)
    return x1, y1, x2 - x1, y2 - y1


def crop(image: np.ndarray, rect: Tuple[int, int, int, int]) -> np.ndarray:
    """Crop a (x, y, w, h) rectangle, clipped to the image."""
    x, y, w, h = clip_rect(rect, image.shape)
    return image[y:y + h, x:x + w]


def scale_rect(
    rect: Tuple[int, int, int, int],
    scale: Tuple[float, float],
) -> Tuple[int, int, int, int]:
    """Scale a rectangle by (sx, sy), truncating to integer pixels."""
    sx, sy = scale
    x, y, w, h = rect
    return int(x * sx), int(y * sy), int(w * sx), int(h * sy)


def image_size(image: np.ndarray) -> Tuple[int, int]:
    """Return (width, height) of an image."""
    return int(image.shape[1]), int(image.shape[0])
