"""Face Corpus - labeled face collection and incremental recognition.

Quick Start:
    # Collect faces from webcam 0
    python -m face_corpus collect cascade.xml ./data 0 --name alice

    # As library
    from face_corpus import FilesystemCorpusStore, RecognitionSession, create_classifier

    store = FilesystemCorpusStore("./data")
    session = RecognitionSession(store.load(), create_classifier("lbph"))
    session.train()
    prediction = session.predict(face_64x64)
"""

__version__ = "0.1.0"

from .exceptions import CorpusLoadError, DeviceError, DimensionMismatchError, FaceCorpusError
from .catalog import DirectoryItem, ItemKind, list_directory
from .corpus import UNKNOWN_NAME, BaseCorpusStore, Corpus, FilesystemCorpusStore, LabeledSample
from .recognition import (
    BaseFaceClassifier,
    NearestNeighborClassifier,
    OpenCVFaceClassifier,
    Prediction,
    RecognitionSession,
    create_classifier,
)
from .detection import BaseFaceDetector, DetectedFace, HaarCascadeDetector, default_cascade_path
from .signals import OperatorSignals
from .pipeline import FaceRecord, FrameDecisionPipeline
from .serialization import portraits_to_json, records_to_json, write_json
from .utils import normalize_face

__all__ = [
    # Errors
    "FaceCorpusError", "CorpusLoadError", "DimensionMismatchError", "DeviceError",
    # Catalog
    "DirectoryItem", "ItemKind", "list_directory",
    # Corpus
    "UNKNOWN_NAME", "Corpus", "LabeledSample", "BaseCorpusStore", "FilesystemCorpusStore",
    # Recognition
    "BaseFaceClassifier", "OpenCVFaceClassifier", "NearestNeighborClassifier",
    "Prediction", "RecognitionSession", "create_classifier",
    # Detection
    "BaseFaceDetector", "DetectedFace", "HaarCascadeDetector", "default_cascade_path",
    # Pipeline
    "OperatorSignals", "FaceRecord", "FrameDecisionPipeline",
    # Serialization
    "records_to_json", "portraits_to_json", "write_json",
    "normalize_face",
]
