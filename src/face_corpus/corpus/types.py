"""Corpus data types."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..exceptions import CorpusLoadError

UNKNOWN_NAME = "unknown"


@dataclass
class LabeledSample:
    """A normalized grayscale face image and its integer label."""

    image: np.ndarray
    label: int

    @property
    def size(self) -> Tuple[int, int]:
        """Return (width, height) of the image."""
        return int(self.image.shape[1]), int(self.image.shape[0])


@dataclass
class Corpus:
    """Labeled face samples plus the label <-> name mapping.

    The two mappings are kept as a bijection: every name has exactly one
    label and every label exactly one name. Labels may exist without
    samples (an empty person directory).
    """

    root: Optional[Path] = None
    samples: List[LabeledSample] = field(default_factory=list)
    names: Dict[int, str] = field(default_factory=dict)
    labels: Dict[str, int] = field(default_factory=dict)
    unknown_name: str = UNKNOWN_NAME

    def register(self, name: str, label: int) -> None:
        """Record a name/label pair in both directions."""
        if name in self.labels and self.labels[name] != label:
            raise ValueError(f"{name!r} already has label {self.labels[name]}")
        if label in self.names and self.names[label] != name:
            raise ValueError(f"Label {label} already belongs to {self.names[label]!r}")
        self.names[label] = name
        self.labels[name] = label

    def next_label(self) -> int:
        """Return a label not used by any name."""
        return max(self.names) + 1 if self.names else 0

    def label_for(self, name: str) -> int:
        """Return the label of ``name``, minting and registering a new one if unseen."""
        label = self.labels.get(name)
        if label is None:
            label = self.next_label()
            self.register(name, label)
        return label

    def name_for(self, label: int) -> str:
        """Return the name for ``label`` or the unknown marker."""
        return self.names.get(label, self.unknown_name)

    def add_sample(self, image: np.ndarray, name: str) -> LabeledSample:
        """Append an already-normalized image under ``name``."""
        sample = LabeledSample(image=image, label=self.label_for(name))
        self.samples.append(sample)
        return sample

    @property
    def standard_size(self) -> Tuple[int, int]:
        """(width, height) every sample is normalized to, set by the first sample.

        Raises:
            CorpusLoadError: If the corpus has no samples.
        """
        if not self.samples:
            raise CorpusLoadError("The face corpus is empty, no standard image size available")
        return self.samples[0].size

    @property
    def images(self) -> List[np.ndarray]:
        return [s.image for s in self.samples]

    @property
    def label_list(self) -> List[int]:
        return [s.label for s in self.samples]

    def sample_count(self, name: str) -> int:
        """Get number of samples for a person."""
        label = self.labels.get(name)
        return sum(1 for s in self.samples if s.label == label) if label is not None else 0

    def __len__(self) -> int:
        return len(self.samples)

    def __contains__(self, name: str) -> bool:
        return name in self.labels
