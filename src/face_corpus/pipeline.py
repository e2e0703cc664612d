"""Per-frame face decision pipeline.

For each frame: detect faces on a (possibly downscaled) grayscale copy,
map the rectangles back to frame coordinates, normalize each face crop,
classify it, run any pending save actions and emit one FaceRecord per face.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .corpus.store import BaseCorpusStore
from .detection import BaseFaceDetector
from .recognition import RecognitionSession
from .signals import OperatorSignals
from .utils import crop, image_size, normalize_face, resize_to, scale_rect, to_grayscale

logger = logging.getLogger(__name__)


@dataclass
class FaceRecord:
    """Recognition result for one detected face, in frame coordinates."""

    x: int
    y: int
    width: int
    height: int
    label: int
    name: str
    confidence: float

    @property
    def bbox(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)

    def to_dict(self) -> dict:
        """Convert to the result file representation."""
        return {
            "prediction": self.name,
            "confidence": float(self.confidence),
            "position": {"x": int(self.x), "y": int(self.y)},
            "size": {"width": int(self.width), "height": int(self.height)},
        }


class FrameDecisionPipeline:
    """Turns frames into FaceRecords and applies operator-triggered saves.

    The ratio between frame size and detector input size is computed from
    the first processed frame and reused afterwards; a source that changes
    resolution mid-stream gets misplaced rectangles.
    """

    def __init__(
        self,
        detector: BaseFaceDetector,
        session: RecognitionSession,
        store: Optional[BaseCorpusStore] = None,
        person_name: Optional[str] = None,
        signals: Optional[OperatorSignals] = None,
        detect_size: Optional[Tuple[int, int]] = None,
    ):
        """Initialize the pipeline.

        Args:
            detector: Face detector run on the grayscale detector input
            session: Trained recognition session
            store: Corpus store for saving faces and portraits
            person_name: Name saved faces and portraits are filed under
            signals: Operator signals; None disables saving
            detect_size: (width, height) frames are resized to before
                detection, or None to detect at full resolution
        """
        self._detector = detector
        self._session = session
        self._store = store
        self._person_name = person_name
        self._signals = signals
        self.detect_size = tuple(detect_size) if detect_size else None

        self._scale: Optional[Tuple[float, float]] = None
        self._stats = {
            "frames_processed": 0,
            "faces_detected": 0,
            "faces_saved": 0,
            "portraits_saved": 0,
        }

    @property
    def scale(self) -> Optional[Tuple[float, float]]:
        """Frame-to-detector ratio (sx, sy), None until the first frame."""
        return self._scale

    def _compute_scale(self, frame: np.ndarray) -> Tuple[float, float]:
        if self.detect_size is None:
            return (1.0, 1.0)
        frame_w, frame_h = image_size(frame)
        det_w, det_h = self.detect_size
        return (frame_w / det_w, frame_h / det_h)

    def process_frame(self, frame: np.ndarray) -> List[FaceRecord]:
        """Detect, classify and record every face in a frame.

        Args:
            frame: BGR or grayscale frame

        Returns:
            One FaceRecord per detected face
        """
        if self._scale is None:
            self._scale = self._compute_scale(frame)
            logger.debug(f"Detection scale fixed at {self._scale[0]:.3f}x{self._scale[1]:.3f}")

        detect_input = resize_to(frame, self.detect_size) if self.detect_size else frame
        faces = self._detector.detect(to_grayscale(detect_input))
        gray = to_grayscale(frame)

        records = []
        for face in faces:
            rect = scale_rect(face.bbox, self._scale)
            face_crop = crop(gray, rect)
            if face_crop.size == 0:
                logger.warning(f"Face rectangle {rect} lies outside the frame, skipping")
                continue

            face_image = normalize_face(face_crop, self._session.standard_size)
            prediction = self._session.predict(face_image)

            self._apply_signals(frame, rect, face_image)

            x, y, w, h = rect
            records.append(FaceRecord(
                x=x, y=y, width=w, height=h,
                label=prediction.label,
                name=prediction.name,
                confidence=prediction.confidence,
            ))
            logger.debug(f"  - {prediction.name} [{prediction.confidence:.2f}] at {rect}")

        self._stats["frames_processed"] += 1
        self._stats["faces_detected"] += len(records)
        return records

    def _apply_signals(self, frame: np.ndarray, rect: Tuple[int, int, int, int],
                       face_image: np.ndarray) -> None:
        """Consume pending save signals against the current face."""
        if self._signals is None:
            return

        if self._signals.consume_save_face():
            self._save_face(face_image)

        if self._signals.consume_save_portrait():
            self._save_portrait(frame, rect)

    def _can_save(self) -> bool:
        if self._store is None or not self._person_name:
            logger.warning("Save requested but no corpus store or person name is set")
            return False
        return True

    def _save_face(self, face_image: np.ndarray) -> None:
        if not self._can_save():
            return
        try:
            sample = self._store.append(self._session.corpus, face_image, self._person_name)
        except OSError as e:
            logger.error(f"Failed to save face for {self._person_name}: {e}")
            return
        # Retrain now so later faces in this frame see the new sample
        self._session.retrain_with(sample)
        self._stats["faces_saved"] += 1

    def _save_portrait(self, frame: np.ndarray, rect: Tuple[int, int, int, int]) -> None:
        if not self._can_save():
            return
        try:
            self._store.save_portrait(self._person_name, crop(frame, rect))
        except OSError as e:
            logger.error(f"Failed to save portrait for {self._person_name}: {e}")
            return
        self._stats["portraits_saved"] += 1

    def get_stats(self) -> dict:
        """Get pipeline statistics."""
        return self._stats.copy()
