"""Recognition session owning the working sample set and trained classifier."""

import logging
import time
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..corpus.types import Corpus, LabeledSample
from ..exceptions import CorpusLoadError, DimensionMismatchError
from .classifiers import BaseFaceClassifier
from .types import Prediction

logger = logging.getLogger(__name__)


class RecognitionSession:
    """Trains a classifier on a corpus and answers predictions.

    Every (re)training is a full retrain on the working sample set, so
    ``retrain_with`` costs time proportional to the corpus size and blocks
    the caller for its duration. This is fine for corpora of a few hundred
    images.
    """

    def __init__(self, corpus: Corpus, classifier: BaseFaceClassifier):
        """Initialize the session.

        Args:
            corpus: Corpus supplying samples and the label mapping
            classifier: Classifier backend to train
        """
        self.corpus = corpus
        self.classifier = classifier
        self._samples: List[LabeledSample] = []
        self._trained = False

    @property
    def is_trained(self) -> bool:
        return self._trained

    @property
    def standard_size(self) -> Tuple[int, int]:
        """(width, height) every image must have, taken from the corpus."""
        return self.corpus.standard_size

    @property
    def sample_count(self) -> int:
        return len(self._samples)

    def _check_size(self, image: np.ndarray) -> None:
        width, height = self.standard_size
        if image.ndim != 2 or image.shape != (height, width):
            raise DimensionMismatchError(
                f"Expected a {width}x{height} grayscale image, got shape {image.shape}"
            )

    def train(self, samples: Optional[Sequence[LabeledSample]] = None) -> None:
        """Train from scratch, replacing all previous state.

        Args:
            samples: Samples to train on (defaults to the corpus samples)

        Raises:
            CorpusLoadError: If there are no samples, or fewer people than
                the classifier needs
            DimensionMismatchError: If a sample is not at the standard size
        """
        samples = list(self.corpus.samples if samples is None else samples)
        if not samples:
            raise CorpusLoadError("Cannot train a face recognizer on an empty corpus")
        self._fit(samples)

    def retrain_with(self, sample: LabeledSample) -> None:
        """Add one sample to the working set and retrain on the whole set."""
        if not self._trained:
            raise CorpusLoadError("Session must be trained before samples can be added")
        self._fit(self._samples + [sample])

    def _fit(self, samples: List[LabeledSample]) -> None:
        for sample in samples:
            self._check_size(sample.image)

        labels = [s.label for s in samples]
        classes = len(set(labels))
        if classes < self.classifier.min_classes:
            raise CorpusLoadError(
                f"The {self.classifier.name} classifier needs samples of at least "
                f"{self.classifier.min_classes} people, corpus has {classes}"
            )

        started = time.time()
        self.classifier.train([s.image for s in samples], labels)
        self._samples = samples
        self._trained = True
        logger.info(
            f"Face recognizer trained on {len(samples)} sample(s) of {classes} people "
            f"in {time.time() - started:.2f}s"
        )

    def predict(self, image: np.ndarray) -> Prediction:
        """Classify a normalized face.

        Args:
            image: Grayscale face at the standard size

        Returns:
            Prediction; labels missing from the mapping get the unknown name

        Raises:
            CorpusLoadError: If the session has not been trained
            DimensionMismatchError: If the image is not at the standard size
        """
        if not self._trained:
            raise CorpusLoadError("Cannot predict before the recognizer is trained")
        self._check_size(image)

        label, confidence = self.classifier.predict(image)
        return Prediction(
            label=label,
            name=self.corpus.name_for(label),
            confidence=confidence,
            is_known=label in self.corpus.names,
        )
