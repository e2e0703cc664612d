#!/usr/bin/env python3
"""Command line tools for the face corpus.

Usage:
    python -m face_corpus collect <cascade> <data_path> <device_id> [--name NAME]
    python -m face_corpus recognize <cascade> <data_path> <in_image> <out_info> [<out_image>]
    python -m face_corpus portraits <data_path> <name> <info_path>

Examples:
    # Collect faces of Alice from webcam 0 (SPACE saves a face, P a portrait)
    python -m face_corpus collect haarcascade_frontalface_default.xml ./data 0 --name alice

    # Recognize the faces in a photo and write the result as JSON
    python -m face_corpus recognize haarcascade_frontalface_default.xml ./data photo.jpg result.json

    # List Alice's portraits as JSON
    python -m face_corpus portraits ./data alice portraits.json
"""

import argparse
import logging
import sys
from pathlib import Path

import cv2

from .constants import get_config, get_detection_config, get_recognition_config
from .corpus import FilesystemCorpusStore
from .detection import HaarCascadeDetector
from .exceptions import CorpusLoadError, DeviceError
from .pipeline import FrameDecisionPipeline
from .recognition import CLASSIFIER_BACKENDS, RecognitionSession, create_classifier
from .serialization import portraits_to_json, records_to_json, write_json
from .signals import OperatorSignals
from .sources import CameraFrameSource, ImageFileSource
from .viewfinder import annotate_frame, run_collection

logger = logging.getLogger(__name__)


def _train_session(store: FilesystemCorpusStore, backend: str) -> RecognitionSession:
    """Load the corpus and train a recognition session on it."""
    corpus = store.load()
    session = RecognitionSession(corpus, create_classifier(backend))
    session.train()
    width, height = session.standard_size
    logger.info(f"Standard face image size is {width}*{height}")
    return session


def _valid_name(name: str) -> bool:
    return bool(name) and not name.startswith(".") and not any(
        c.isspace() or c in "/\\" for c in name
    )


def cmd_collect(args):
    """Collect labeled faces and portraits from a live camera."""
    name = args.name
    if name is None:
        print("Please type the name of current user. (No space)")
        name = input("NAME: ").strip()
    if not _valid_name(name):
        logger.error(f"Invalid name: {name!r}")
        return 1

    store = FilesystemCorpusStore(args.data_path)
    store.ensure_layout(name)
    session = _train_session(store, args.classifier)

    try:
        detector = HaarCascadeDetector(cascade_path=args.cascade)
    except RuntimeError as e:
        logger.error(str(e))
        return 1

    signals = OperatorSignals()
    pipeline = FrameDecisionPipeline(
        detector,
        session,
        store=store,
        person_name=name,
        signals=signals,
        detect_size=get_detection_config().frame_size,
    )

    with CameraFrameSource(args.device_id) as source:
        run_collection(source, pipeline, signals)
    return 0


def cmd_recognize(args):
    """Recognize the faces in one image."""
    store = FilesystemCorpusStore(args.data_path)
    if not store.faces_dir.is_dir():
        logger.error(f"The path to face database does not exist: {store.faces_dir}")
        return 1

    session = _train_session(store, args.classifier)

    try:
        detector = HaarCascadeDetector(cascade_path=args.cascade)
    except RuntimeError as e:
        logger.error(str(e))
        return 1

    try:
        image = ImageFileSource(args.in_image).read()
    except OSError as e:
        logger.error(str(e))
        return 1

    pipeline = FrameDecisionPipeline(detector, session)
    records = pipeline.process_frame(image)

    logger.info(f"{len(records)} face(s) detected")
    for record in records:
        logger.info(f"  - {record.name} [{record.confidence:.2f}]")

    try:
        write_json(args.out_info, records_to_json(records))
    except OSError as e:
        logger.error(f"Cannot open the file \"{args.out_info}\": {e}")
        return 1

    if args.out_image:
        if cv2.imwrite(args.out_image, annotate_frame(image, records)):
            logger.info(f"Output the processed image as \"{args.out_image}\"")
        else:
            logger.error(f"Cannot write the image \"{args.out_image}\"")

    return 0


def cmd_portraits(args):
    """Write the portrait paths of one person as JSON."""
    store = FilesystemCorpusStore(args.data_path)
    paths = store.list_portraits(args.name)
    for path in paths:
        logger.info(f"  - {path}")

    try:
        write_json(args.info_path, portraits_to_json(paths))
    except OSError as e:
        logger.error(f"Cannot open the file \"{args.info_path}\": {e}")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="face-corpus",
        description="Face corpus collection and recognition tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Collection controls:
    SPACE   - Save the current face and retrain
    p       - Save the current face as a portrait
    ESC     - Quit
""",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to configuration file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    classifier_help = "Classifier backend (default from config)"

    # Collect command
    collect_parser = subparsers.add_parser("collect", help="Collect faces from a camera")
    collect_parser.add_argument("cascade", help="Path to the Haar cascade for face detection")
    collect_parser.add_argument("data_path", help="Path to the face database directory")
    collect_parser.add_argument("device_id", help="Webcam device id to grab frames from")
    collect_parser.add_argument("--name", "-n", default=None, help="Name of the current user (prompted if omitted)")
    collect_parser.add_argument("--classifier", "-c", choices=sorted(CLASSIFIER_BACKENDS), default=None,
                                help=classifier_help)

    # Recognize command
    recognize_parser = subparsers.add_parser("recognize", help="Recognize faces in an image")
    recognize_parser.add_argument("cascade", help="Path to the Haar cascade for face detection")
    recognize_parser.add_argument("data_path", help="Path to the face database directory")
    recognize_parser.add_argument("in_image", help="Input image to process")
    recognize_parser.add_argument("out_info", help="Output JSON file of the recognition result")
    recognize_parser.add_argument("out_image", nargs="?", default=None,
                                  help="Output image of the recognition result (optional)")
    recognize_parser.add_argument("--classifier", "-c", choices=sorted(CLASSIFIER_BACKENDS), default=None,
                                  help=classifier_help)

    # Portraits command
    portraits_parser = subparsers.add_parser("portraits", help="List a person's portraits as JSON")
    portraits_parser.add_argument("data_path", help="Path to the face database directory")
    portraits_parser.add_argument("name", help="Name of the person")
    portraits_parser.add_argument("info_path", help="Output JSON file of portrait paths")

    return parser


def main(argv=None):
    """Main entry point for the face corpus CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.config:
        get_config().reload(Path(args.config))
    if getattr(args, "classifier", None) is None:
        args.classifier = get_recognition_config().backend

    commands = {
        "collect": cmd_collect,
        "recognize": cmd_recognize,
        "portraits": cmd_portraits,
    }

    try:
        result = commands[args.command](args)
    except CorpusLoadError as e:
        logger.error(f"Failed to load the face data. Reason: {e}")
        sys.exit(1)
    except DeviceError as e:
        logger.error(str(e))
        sys.exit(1)

    sys.exit(result if result else 0)


if __name__ == "__main__":
    main()
