"""Face recognition types."""

from dataclasses import dataclass


@dataclass
class Prediction:
    """Result of classifying one normalized face."""

    label: int
    name: str
    confidence: float
    # False when the label has no entry in the corpus mapping
    is_known: bool = True
