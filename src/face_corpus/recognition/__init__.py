"""Face recognition module.

Contains:
- RecognitionSession: trains on a corpus, predicts, retrains on append
- Classifier backends (eigen, fisher, lbph, nearest)
"""

from .types import Prediction
from .classifiers import (
    BaseFaceClassifier,
    OpenCVFaceClassifier,
    NearestNeighborClassifier,
    CLASSIFIER_BACKENDS,
    create_classifier,
)
from .session import RecognitionSession

__all__ = [
    "Prediction",
    "BaseFaceClassifier",
    "OpenCVFaceClassifier",
    "NearestNeighborClassifier",
    "CLASSIFIER_BACKENDS",
    "create_classifier",
    "RecognitionSession",
]
