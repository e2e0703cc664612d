"""Pytest configuration and fixtures."""

import pytest
import numpy as np
import sys
from pathlib import Path

import cv2

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def _write_faces(directory: Path, rng: np.random.Generator, count: int, ext: str = "png"):
    directory.mkdir(parents=True, exist_ok=True)
    for i in range(count):
        image = rng.integers(0, 255, (80, 80), dtype=np.uint8)
        assert cv2.imwrite(str(directory / f"{1400000000 + i}_{i}.{ext}"), image)


@pytest.fixture
def sample_image():
    """Create a sample test image."""
    return np.random.randint(0, 255, (480, 640, 3), dtype=np.uint8)


@pytest.fixture
def sample_grayscale_image():
    """Create a sample grayscale test image."""
    return np.random.randint(0, 255, (480, 640), dtype=np.uint8)


@pytest.fixture
def corpus_root(tmp_path):
    """Create a corpus with two people (3 faces each) and two portraits of alice."""
    rng = np.random.default_rng(1234)
    root = tmp_path / "data"

    _write_faces(root / "faces" / "alice", rng, 3)
    _write_faces(root / "faces" / "bob", rng, 3)

    portraits = root / "protraits" / "alice"
    portraits.mkdir(parents=True)
    for i in range(2):
        image = rng.integers(0, 255, (256, 256, 3), dtype=np.uint8)
        assert cv2.imwrite(str(portraits / f"1400000000_{i}.jpg"), image)

    return root


@pytest.fixture
def fixed_clock():
    """Clock frozen inside a single second."""
    return lambda: 1500000000.25


@pytest.fixture
def store(corpus_root, fixed_clock):
    """Filesystem store over the sample corpus."""
    from face_corpus import FilesystemCorpusStore

    return FilesystemCorpusStore(corpus_root, clock=fixed_clock)


@pytest.fixture
def trained_session(store):
    """Recognition session trained on the sample corpus with the nearest backend."""
    from face_corpus import RecognitionSession, create_classifier

    session = RecognitionSession(store.load(), create_classifier("nearest"))
    session.train()
    return session
