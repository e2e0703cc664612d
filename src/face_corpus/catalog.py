"""Directory listing used by the corpus store."""

import logging
import os
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)


class ItemKind(Enum):
    """Kind of a directory entry."""
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


@dataclass(frozen=True)
class DirectoryItem:
    """A named entry of a directory."""

    name: str
    kind: ItemKind

    @property
    def is_file(self) -> bool:
        return self.kind == ItemKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind == ItemKind.DIRECTORY


def _kind_of(mode: int) -> ItemKind:
    if stat.S_ISREG(mode):
        return ItemKind.FILE
    if stat.S_ISDIR(mode):
        return ItemKind.DIRECTORY
    return ItemKind.OTHER


def list_directory(path: Union[str, Path], hidden_prefix: str = ".") -> List[DirectoryItem]:
    """List the entries of a directory, ignoring hidden ones.

    Entries are returned in the order the filesystem yields them. Symlinks
    are classified by their target.

    Args:
        path: Directory to list
        hidden_prefix: Entries whose name starts with this are skipped

    Returns:
        List of DirectoryItem objects

    Raises:
        OSError: If the directory cannot be opened or any entry cannot be
            statused. No partial result is returned.
    """
    path = Path(path)

    try:
        with os.scandir(path) as it:
            entries = [e for e in it if not (hidden_prefix and e.name.startswith(hidden_prefix))]
    except OSError as e:
        logger.error(f"Cannot open the directory {path}: {e}")
        raise OSError(e.errno, f"Cannot open the directory {path}", str(path)) from e

    items = []
    for entry in entries:
        try:
            mode = entry.stat(follow_symlinks=True).st_mode
        except OSError as e:
            logger.error(f"Cannot obtain the status of the item {entry.path}: {e}")
            raise OSError(e.errno, f"Cannot obtain the status of the item {entry.path}", entry.path) from e
        items.append(DirectoryItem(name=entry.name, kind=_kind_of(mode)))

    return items
