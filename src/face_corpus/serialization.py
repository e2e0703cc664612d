"""JSON rendering of recognition results and portrait lookups."""

import json
import logging
from pathlib import Path
from typing import Iterable, Union

from .pipeline import FaceRecord

logger = logging.getLogger(__name__)

_SEPARATORS = (",", ":")


def records_to_json(records: Iterable[FaceRecord]) -> str:
    """Render face records as a compact JSON array (``[]`` when empty)."""
    return json.dumps([r.to_dict() for r in records], separators=_SEPARATORS, ensure_ascii=False)


def portraits_to_json(paths: Iterable[Union[str, Path]]) -> str:
    """Render portrait paths as a compact JSON array of strings."""
    return json.dumps([str(p) for p in paths], separators=_SEPARATORS, ensure_ascii=False)


def write_json(path: Union[str, Path], text: str) -> None:
    """Write rendered JSON followed by a newline.

    Raises:
        OSError: If the file cannot be written
    """
    with open(path, "w", encoding="utf-8") as f:
        f.write(text + "\n")
    logger.info(f"Output written to \"{path}\"")
