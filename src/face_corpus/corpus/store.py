"""Face corpus storage.

On-disk layout::

    <root>/faces/<name>/<unix_timestamp>_<sequence>.<ext>
    <root>/protraits/<name>/<unix_timestamp>_<sequence>.<ext>

Each person directory under ``faces`` is one label. Labels are assigned in
the order the filesystem lists the directories, so they are only stable
within one load.
"""

import itertools
import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional, Union

import cv2
import numpy as np

from ..catalog import list_directory
from ..constants import CorpusConfig, get_corpus_config, get_recognition_config
from ..exceptions import CorpusLoadError
from ..utils import normalize_face, resize_to
from .types import Corpus, LabeledSample

logger = logging.getLogger(__name__)


class BaseCorpusStore(ABC):
    """Abstract base class for corpus storage backends."""

    @abstractmethod
    def load(self) -> Corpus:
        """Load every stored face sample into a new Corpus."""
        pass

    @abstractmethod
    def append(self, corpus: Corpus, image: np.ndarray, name: str) -> LabeledSample:
        """Persist a face for ``name`` and add it to ``corpus``."""
        pass

    @abstractmethod
    def save_portrait(self, name: str, image: np.ndarray) -> Path:
        """Persist a portrait for ``name``."""
        pass

    @abstractmethod
    def list_portraits(self, name: str) -> List[Path]:
        """Return the stored portraits of ``name``."""
        pass


class FilesystemCorpusStore(BaseCorpusStore):
    """Corpus stored as a two-level directory tree."""

    def __init__(
        self,
        root: Union[str, Path],
        config: Optional[CorpusConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the store.

        Args:
            root: Corpus root directory
            config: Layout and size settings (uses global config if None)
            clock: Source of unix timestamps for file names
        """
        self.root = Path(root)
        self.config = config or get_corpus_config()
        self._clock = clock
        self._sequence = itertools.count()

    @property
    def faces_dir(self) -> Path:
        return self.root / self.config.faces_dirname

    @property
    def portraits_dir(self) -> Path:
        return self.root / self.config.portraits_dirname

    def ensure_layout(self, name: Optional[str] = None) -> None:
        """Create the faces/portraits directories, and the person's portrait folder if given."""
        self.faces_dir.mkdir(parents=True, exist_ok=True)
        self.portraits_dir.mkdir(parents=True, exist_ok=True)
        if name:
            (self.portraits_dir / name).mkdir(parents=True, exist_ok=True)

    def load(self) -> Corpus:
        """Load all face samples.

        Returns:
            Corpus with one label per person directory

        Raises:
            CorpusLoadError: If the faces directory or a person directory
                cannot be scanned
        """
        corpus = Corpus(root=self.root, unknown_name=get_recognition_config().unknown_name)
        faces_dir = self.faces_dir

        try:
            people = list_directory(faces_dir, self.config.hidden_prefix)
        except OSError as e:
            raise CorpusLoadError(f"Cannot read the face database directory {faces_dir}.") from e

        people = [item for item in people if item.is_dir]
        logger.info(f"Open face data directory \"{faces_dir}\". Now loading {len(people)} people")

        for label, person in enumerate(people):
            person_dir = faces_dir / person.name

            try:
                items = list_directory(person_dir, self.config.hidden_prefix)
            except OSError as e:
                raise CorpusLoadError(f"Cannot read the face image directory {person_dir}.") from e

            corpus.register(person.name, label)
            count = 0

            for item in items:
                if not item.is_file:
                    continue

                image_path = person_dir / item.name
                image = cv2.imread(str(image_path), cv2.IMREAD_GRAYSCALE)
                if image is None:
                    logger.warning(f"Skipping unreadable image {image_path}")
                    continue

                corpus.samples.append(
                    LabeledSample(image=resize_to(image, self.config.face_size), label=label)
                )
                count += 1
                logger.debug(f"  - {image_path}")

            logger.info(f"  - {person.name} [{label + 1}/{len(people)}]: {count} image(s)")

        logger.info(f"Loaded {len(corpus)} face(s) of {len(corpus.names)} people")
        return corpus

    def _next_filename(self) -> str:
        return f"{int(self._clock())}_{next(self._sequence)}.{self.config.image_ext}"

    def _write(self, directory: Path, image: np.ndarray) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self._next_filename()
        if not cv2.imwrite(str(path), image):
            raise OSError(f"Cannot write image {path}")
        logger.info(f"Image saved as \"{path}\"")
        return path

    def append(self, corpus: Corpus, image: np.ndarray, name: str) -> LabeledSample:
        """Save a face for ``name`` and add it to the corpus.

        Unseen names get a fresh label (one past the highest in use). The
        file is written before the corpus changes, so a failed write leaves
        the corpus as it was.

        Args:
            corpus: Corpus to extend
            image: Face image, normalized to the standard size here
            name: Person name

        Returns:
            The appended LabeledSample

        Raises:
            OSError: If the image cannot be written
            CorpusLoadError: If the corpus is empty (no standard size)
        """
        face = normalize_face(image, corpus.standard_size)
        self._write(self.faces_dir / name, face)
        sample = corpus.add_sample(face, name)
        logger.debug(f"Appended sample for {name} (label {sample.label}, {len(corpus)} total)")
        return sample

    def save_portrait(self, name: str, image: np.ndarray) -> Path:
        """Save a portrait for ``name`` at the portrait size.

        Raises:
            OSError: If the image cannot be written
        """
        portrait = resize_to(image, self.config.portrait_size)
        return self._write(self.portraits_dir / name, portrait)

    def list_portraits(self, name: str) -> List[Path]:
        """Return the portrait files of ``name``.

        Missing or unreadable directories give an empty list.
        """
        portraits_dir = self.portraits_dir

        try:
            people = list_directory(portraits_dir, self.config.hidden_prefix)
        except OSError:
            logger.warning(f"Portrait directory \"{portraits_dir}\" is not readable")
            return []

        match = next((item for item in people if item.name == name), None)
        if match is None or not match.is_dir:
            logger.info(f"No portrait directory for {name}")
            return []

        person_dir = portraits_dir / name
        try:
            items = list_directory(person_dir, self.config.hidden_prefix)
        except OSError:
            logger.warning(f"Portrait directory \"{person_dir}\" is not readable")
            return []

        paths = [person_dir / item.name for item in items if item.is_file]
        logger.info(f"Found {len(paths)} portrait(s) in \"{person_dir}\"")
        return paths
