"""Face classifier backends.

Every backend trains on fixed-size grayscale images with integer labels and
predicts ``(label, confidence)`` where a lower confidence means a closer
match.

Available backends:
- eigen: OpenCV Eigenfaces (opencv-contrib)
- fisher: OpenCV Fisherfaces, needs at least two people (opencv-contrib)
- lbph: OpenCV Local Binary Pattern Histograms (opencv-contrib, default)
- nearest: Euclidean nearest neighbour on raw pixels (NumPy only)
"""

import logging
from abc import ABC, abstractmethod
from typing import Sequence, Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class BaseFaceClassifier(ABC):
    """Abstract base class for face classifiers."""

    name: str = "base"
    # Fewest distinct labels the backend can train on
    min_classes: int = 1

    @abstractmethod
    def train(self, images: Sequence[np.ndarray], labels: Sequence[int]) -> None:
        """Train from scratch, replacing any previous state."""
        pass

    @abstractmethod
    def predict(self, image: np.ndarray) -> Tuple[int, float]:
        """Predict the label of an image.

        Returns:
            Tuple of (label, confidence), lower confidence is closer
        """
        pass


class OpenCVFaceClassifier(BaseFaceClassifier):
    """Classifier backed by OpenCV's ``cv2.face`` recognizers."""

    FACTORIES = {
        "eigen": "EigenFaceRecognizer_create",
        "fisher": "FisherFaceRecognizer_create",
        "lbph": "LBPHFaceRecognizer_create",
    }

    def __init__(self, method: str = "lbph", **params):
        """Initialize the OpenCV recognizer.

        Args:
            method: One of "eigen", "fisher", "lbph"
            **params: Passed to the OpenCV factory function
        """
        if method not in self.FACTORIES:
            raise ValueError(
                f"Unknown OpenCV method: {method}. "
                f"Available: {list(self.FACTORIES.keys())}"
            )

        if not hasattr(cv2, "face"):
            raise ImportError(
                "cv2.face not available. Install with:\n"
                "  pip install opencv-contrib-python"
            )

        self.name = method
        self.min_classes = 2 if method == "fisher" else 1
        self._params = params
        self._model = None

    def train(self, images: Sequence[np.ndarray], labels: Sequence[int]) -> None:
        # A fresh model per call keeps training a full replacement
        self._model = getattr(cv2.face, self.FACTORIES[self.name])(**self._params)
        self._model.train(list(images), np.asarray(labels, dtype=np.int32))

    def predict(self, image: np.ndarray) -> Tuple[int, float]:
        if self._model is None:
            raise RuntimeError("Classifier has not been trained")
        label, confidence = self._model.predict(image)
        return int(label), float(confidence)


class NearestNeighborClassifier(BaseFaceClassifier):
    """Euclidean nearest neighbour over flattened pixels.

    Confidence is the distance to the closest training image.
    """

    name = "nearest"

    def __init__(self):
        self._matrix = None
        self._labels = None

    def train(self, images: Sequence[np.ndarray], labels: Sequence[int]) -> None:
        self._matrix = np.stack([np.asarray(img, dtype=np.float32).ravel() for img in images])
        self._labels = np.asarray(labels, dtype=np.int64)

    def predict(self, image: np.ndarray) -> Tuple[int, float]:
        if self._matrix is None:
            raise RuntimeError("Classifier has not been trained")
        query = np.asarray(image, dtype=np.float32).ravel()
        distances = np.linalg.norm(self._matrix - query, axis=1)
        best = int(np.argmin(distances))
        return int(self._labels[best]), float(distances[best])


CLASSIFIER_BACKENDS = {
    "eigen": lambda **kwargs: OpenCVFaceClassifier("eigen", **kwargs),
    "fisher": lambda **kwargs: OpenCVFaceClassifier("fisher", **kwargs),
    "lbph": lambda **kwargs: OpenCVFaceClassifier("lbph", **kwargs),
    "nearest": lambda **kwargs: NearestNeighborClassifier(**kwargs),
}


def create_classifier(backend: str = "lbph", **kwargs) -> BaseFaceClassifier:
    """Create a classifier by backend name.

    Raises:
        ValueError: If the backend is unknown
    """
    backend = backend.lower()
    if backend not in CLASSIFIER_BACKENDS:
        raise ValueError(
            f"Unknown backend: {backend}. "
            f"Available: {list(CLASSIFIER_BACKENDS.keys())}"
        )
    logger.debug(f"Creating {backend} classifier")
    return CLASSIFIER_BACKENDS[backend](**kwargs)
