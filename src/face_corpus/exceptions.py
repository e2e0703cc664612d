"""Error types raised by the face corpus package.

Directory and file failures use the builtin ``OSError``; everything below
is specific to the corpus and recognition pipeline.
"""


class FaceCorpusError(Exception):
    """Base class for face corpus errors."""


class CorpusLoadError(FaceCorpusError):
    """The corpus could not be loaded or is unusable for training."""


class DimensionMismatchError(FaceCorpusError, ValueError):
    """An image does not match the corpus standard size."""


class DeviceError(FaceCorpusError):
    """A capture device could not be opened."""
