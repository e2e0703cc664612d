"""Live face collection viewfinder.

Shows the capture stream with recognized faces and lets the operator grow
the corpus from the keyboard.

Controls:
    SPACE  : Save the current face as a training sample and retrain
    P      : Save the current face as a portrait
    ESC    : Quit
"""

import logging
from typing import List, Tuple

import cv2
import numpy as np

from .pipeline import FaceRecord, FrameDecisionPipeline
from .signals import OperatorSignals
from .sources import BaseFrameSource

logger = logging.getLogger(__name__)

WINDOW_NAME = "face_collection"


def annotate_frame(
    image: np.ndarray,
    records: List[FaceRecord],
    color: Tuple[int, int, int] = (0, 255, 0),
) -> np.ndarray:
    """Draw face rectangles and predictions on a copy of the image."""
    output = image.copy()

    for record in records:
        x, y, w, h = record.bbox
        cv2.rectangle(output, (x, y), (x + w, y + h), color, 1)
        label = f"{record.name} [{record.confidence:.2f}]"
        cv2.putText(
            output, label,
            (max(x - 10, 0), max(y - 10, 0)),
            cv2.FONT_HERSHEY_PLAIN, 1.0, color, 2
        )

    return output


def run_collection(
    source: BaseFrameSource,
    pipeline: FrameDecisionPipeline,
    signals: OperatorSignals,
    window_name: str = WINDOW_NAME,
) -> dict:
    """Run the collection loop until ESC or the source runs dry.

    Frames are processed one at a time on the calling thread; a save blocks
    the loop while the recognizer retrains.

    Args:
        source: Open frame source
        pipeline: Pipeline wired to the same signals
        signals: Operator signals updated from key presses
        window_name: HighGUI window title

    Returns:
        Pipeline statistics
    """
    logger.info("Controls: SPACE save face | P save portrait | ESC quit")

    try:
        for frame in source.frames():
            records = pipeline.process_frame(frame)

            cv2.imshow(window_name, annotate_frame(frame, records))
            signals.handle_key(cv2.waitKey(1))
            if signals.exit:
                break
    finally:
        cv2.destroyAllWindows()

    stats = pipeline.get_stats()
    logger.info(
        f"Processed {stats['frames_processed']} frame(s), "
        f"saved {stats['faces_saved']} face(s) and {stats['portraits_saved']} portrait(s)"
    )
    return stats
