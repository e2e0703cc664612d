"""Centralized constants and configuration loader.

This module provides access to configuration values and sensible defaults
for the corpus layout, detection and recognition. Values are loaded from
config/config.yaml when available, otherwise defaults are used.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

# Path to the default configuration file
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. Uses default if None.

    Returns:
        Configuration dictionary.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    try:
        if path.exists():
            with open(path, "r") as f:
                return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {path}: {e}")

    return {}


def _get_nested(config: Dict, *keys: str, default: Any = None) -> Any:
    """Get nested config value with default fallback."""
    value = config
    for key in keys:
        if isinstance(value, dict):
            value = value.get(key)
        else:
            return default
        if value is None:
            return default
    return value


# ============================================================
# Corpus Layout Constants
# ============================================================

@dataclass
class CorpusConfig:
    """On-disk corpus layout and image sizes."""
    # Subdirectory holding recognition samples, one folder per person
    faces_dirname: str = "faces"
    # Subdirectory holding portraits (spelling is part of the on-disk schema)
    portraits_dirname: str = "protraits"
    # Standard recognition size (width, height)
    face_size: Tuple[int, int] = (64, 64)
    # Portrait size (width, height)
    portrait_size: Tuple[int, int] = (256, 256)
    # Extension for saved images
    image_ext: str = "jpg"
    # Entries starting with this are ignored when scanning
    hidden_prefix: str = "."

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "CorpusConfig":
        """Create from config dictionary."""
        corpus = _get_nested(config, "corpus") or {}

        face_size = corpus.get("face_size", [64, 64])
        portrait_size = corpus.get("portrait_size", [256, 256])

        return cls(
            faces_dirname=corpus.get("faces_dirname", "faces"),
            portraits_dirname=corpus.get("portraits_dirname", "protraits"),
            face_size=tuple(face_size),
            portrait_size=tuple(portrait_size),
            image_ext=str(corpus.get("image_ext", "jpg")).lstrip("."),
            hidden_prefix=corpus.get("hidden_prefix", "."),
        )


# ============================================================
# Detection Constants
# ============================================================

@dataclass
class DetectionConfig:
    """Face detection constants."""
    # Frames are resized to this (width, height) before detection in live mode
    frame_size: Tuple[int, int] = (320, 240)
    # Haar cascade parameters
    scale_factor: float = 1.1
    min_neighbors: int = 3
    min_size: Tuple[int, int] = (30, 30)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "DetectionConfig":
        """Create from config dictionary."""
        det = _get_nested(config, "detection") or {}

        frame_size = det.get("frame_size", [320, 240])
        min_size = det.get("min_size", [30, 30])

        return cls(
            frame_size=tuple(frame_size),
            scale_factor=det.get("scale_factor", 1.1),
            min_neighbors=det.get("min_neighbors", 3),
            min_size=tuple(min_size),
        )


# ============================================================
# Recognition Constants
# ============================================================

@dataclass
class RecognitionConfig:
    """Face recognition constants."""
    # Classifier backend: eigen, fisher, lbph or nearest
    backend: str = "lbph"
    # Name rendered for labels missing from the mapping
    unknown_name: str = "unknown"

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "RecognitionConfig":
        """Create from config dictionary."""
        rec = _get_nested(config, "recognition") or {}

        return cls(
            backend=rec.get("backend", "lbph"),
            unknown_name=rec.get("unknown_name", "unknown"),
        )


# ============================================================
# Global Config Instance (lazy loaded)
# ============================================================

class Config:
    """Global configuration singleton."""

    _instance: Optional["Config"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load()
        return cls._instance

    def _load(self) -> None:
        """Load configuration from file."""
        self._config = load_config()
        self._reset_sections()

    def _reset_sections(self) -> None:
        self._corpus: Optional[CorpusConfig] = None
        self._detection: Optional[DetectionConfig] = None
        self._recognition: Optional[RecognitionConfig] = None

    def reload(self, config_path: Optional[Path] = None) -> None:
        """Reload configuration from file."""
        self._config = load_config(config_path)
        self._reset_sections()

    @property
    def corpus(self) -> CorpusConfig:
        """Get corpus layout config."""
        if self._corpus is None:
            self._corpus = CorpusConfig.from_config(self._config)
        return self._corpus

    @property
    def detection(self) -> DetectionConfig:
        """Get detection config."""
        if self._detection is None:
            self._detection = DetectionConfig.from_config(self._config)
        return self._detection

    @property
    def recognition(self) -> RecognitionConfig:
        """Get recognition config."""
        if self._recognition is None:
            self._recognition = RecognitionConfig.from_config(self._config)
        return self._recognition

    def get(self, *keys: str, default: Any = None) -> Any:
        """Get a config value by key path."""
        return _get_nested(self._config, *keys, default=default)


def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()


# Convenience accessors
def get_corpus_config() -> CorpusConfig:
    """Get corpus layout configuration."""
    return get_config().corpus


def get_detection_config() -> DetectionConfig:
    """Get detection configuration."""
    return get_config().detection


def get_recognition_config() -> RecognitionConfig:
    """Get recognition configuration."""
    return get_config().recognition
