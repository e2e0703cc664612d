"""Face corpus module.

Contains:
- Corpus, LabeledSample: in-memory samples and label mapping
- BaseCorpusStore, FilesystemCorpusStore: directory-backed storage
"""

from .types import UNKNOWN_NAME, Corpus, LabeledSample
from .store import BaseCorpusStore, FilesystemCorpusStore

__all__ = [
    "UNKNOWN_NAME",
    "Corpus",
    "LabeledSample",
    "BaseCorpusStore",
    "FilesystemCorpusStore",
]
