"""Tests for the corpus model and filesystem store."""

import re

import cv2
import numpy as np
import pytest


class TestCorpus:
    """Test cases for the in-memory Corpus."""

    def test_new_name_mints_next_label(self):
        """Test unseen names get one past the highest label."""
        from face_corpus import Corpus

        corpus = Corpus()
        corpus.register("alice", 0)
        corpus.register("bob", 4)

        assert corpus.label_for("carol") == 5
        assert corpus.names[5] == "carol"
        assert corpus.labels["carol"] == 5

    def test_first_label_is_zero(self):
        """Test an empty mapping mints label 0, never -1."""
        from face_corpus import Corpus

        corpus = Corpus()
        sample = corpus.add_sample(np.zeros((64, 64), dtype=np.uint8), "alice")

        assert sample.label == 0
        assert corpus.standard_size == (64, 64)

    def test_name_for_unknown_label(self):
        """Test labels missing from the mapping render as unknown."""
        from face_corpus import UNKNOWN_NAME, Corpus

        corpus = Corpus()
        corpus.register("alice", 0)

        assert corpus.name_for(0) == "alice"
        assert corpus.name_for(-1) == UNKNOWN_NAME

    def test_register_conflict(self):
        """Test a name cannot be given two labels."""
        from face_corpus import Corpus

        corpus = Corpus()
        corpus.register("alice", 0)

        with pytest.raises(ValueError):
            corpus.register("alice", 1)
        with pytest.raises(ValueError):
            corpus.register("bob", 0)

    def test_empty_corpus_has_no_standard_size(self):
        """Test asking an empty corpus for its size raises CorpusLoadError."""
        from face_corpus import Corpus, CorpusLoadError

        with pytest.raises(CorpusLoadError):
            Corpus().standard_size


class TestFilesystemCorpusStoreLoad:
    """Test cases for loading the corpus from disk."""

    def test_load_samples(self, store):
        """Test every face is loaded at the standard size."""
        corpus = store.load()

        assert len(corpus) == 6
        assert all(s.image.shape == (64, 64) for s in corpus.samples)
        assert all(s.image.dtype == np.uint8 for s in corpus.samples)
        assert corpus.standard_size == (64, 64)

    def test_mapping_is_bijection_over_person_dirs(self, store):
        """Test two loads give bijective mappings over the same names."""
        first = store.load()
        second = store.load()

        for corpus in (first, second):
            assert set(corpus.labels) == {"alice", "bob"}
            assert set(corpus.names.values()) == {"alice", "bob"}
            assert len(corpus.names) == len(corpus.labels) == 2
            for label, name in corpus.names.items():
                assert corpus.labels[name] == label
            assert sorted(corpus.names) == [0, 1]

    def test_samples_carry_their_directory_label(self, store):
        """Test each person has all their samples under one label."""
        corpus = store.load()

        assert corpus.sample_count("alice") == 3
        assert corpus.sample_count("bob") == 3

    def test_files_in_faces_root_ignored(self, corpus_root, store):
        """Test loose files next to person directories do not become labels."""
        (corpus_root / "faces" / "README").write_text("not a person")

        corpus = store.load()
        assert set(corpus.labels) == {"alice", "bob"}

    def test_empty_person_directory(self, corpus_root, store):
        """Test an empty person directory gets a label but no samples."""
        (corpus_root / "faces" / "dave").mkdir()

        corpus = store.load()

        assert "dave" in corpus
        assert corpus.sample_count("dave") == 0
        assert len(corpus) == 6

    def test_unreadable_image_skipped(self, corpus_root, store):
        """Test files that are not images are skipped."""
        (corpus_root / "faces" / "alice" / "notes.txt").write_text("hello")

        corpus = store.load()
        assert corpus.sample_count("alice") == 3

    def test_missing_faces_directory(self, tmp_path):
        """Test a root without faces/ raises CorpusLoadError."""
        from face_corpus import CorpusLoadError, FilesystemCorpusStore

        with pytest.raises(CorpusLoadError):
            FilesystemCorpusStore(tmp_path / "nowhere").load()

    def test_unreadable_person_directory(self, store, monkeypatch):
        """Test a person directory that cannot be listed fails the load."""
        from face_corpus import CorpusLoadError
        from face_corpus.corpus import store as store_module

        real_list = store_module.list_directory

        def failing_list(path, hidden_prefix="."):
            if path.name == "bob":
                raise PermissionError(13, "Permission denied", str(path))
            return real_list(path, hidden_prefix)

        monkeypatch.setattr(store_module, "list_directory", failing_list)

        with pytest.raises(CorpusLoadError):
            store.load()

    def test_empty_corpus_loads(self, tmp_path):
        """Test a faces directory with no people loads as an empty corpus."""
        from face_corpus import FilesystemCorpusStore

        (tmp_path / "faces").mkdir()
        corpus = FilesystemCorpusStore(tmp_path).load()

        assert len(corpus) == 0
        assert corpus.names == {}


class TestFilesystemCorpusStoreAppend:
    """Test cases for appending samples and saving portraits."""

    def test_append_existing_name(self, store, corpus_root):
        """Test appending for a known name reuses its label and writes a file."""
        corpus = store.load()
        alice = corpus.labels["alice"]

        sample = store.append(corpus, np.full((120, 90), 128, dtype=np.uint8), "alice")

        assert sample.label == alice
        assert sample.image.shape == (64, 64)
        assert len(corpus) == 7
        assert len(list((corpus_root / "faces" / "alice").iterdir())) == 4

    def test_append_new_name_mints_fresh_label(self, store, corpus_root):
        """Test a new person gets a new label recorded in both directions."""
        corpus = store.load()
        before = dict(corpus.names)

        sample = store.append(corpus, np.zeros((64, 64), dtype=np.uint8), "carol")

        assert sample.label == max(before) + 1
        assert sample.label not in before
        assert corpus.names[sample.label] == "carol"
        assert corpus.labels["carol"] == sample.label
        assert (corpus_root / "faces" / "carol").is_dir()

    def test_append_leaves_other_names_alone(self, store):
        """Test append never changes the mapping of unrelated names."""
        corpus = store.load()
        before = dict(corpus.labels)

        store.append(corpus, np.zeros((64, 64), dtype=np.uint8), "carol")
        store.append(corpus, np.zeros((64, 64), dtype=np.uint8), "alice")

        for name, label in before.items():
            assert corpus.labels[name] == label
            assert corpus.names[label] == name

    def test_append_color_image(self, store):
        """Test color input is converted to grayscale."""
        corpus = store.load()

        sample = store.append(corpus, np.zeros((100, 100, 3), dtype=np.uint8), "alice")
        assert sample.image.shape == (64, 64)

    def test_file_name_format(self, store, corpus_root):
        """Test saved faces are named <timestamp>_<sequence>.<ext>."""
        corpus = store.load()
        store.append(corpus, np.zeros((64, 64), dtype=np.uint8), "carol")

        files = [p.name for p in (corpus_root / "faces" / "carol").iterdir()]
        assert files == ["1500000000_0.jpg"]
        assert re.fullmatch(r"\d+_\d+\.jpg", files[0])

    def test_same_second_saves_do_not_collide(self, store, corpus_root):
        """Test a portrait then a face in the same second get distinct names."""
        corpus = store.load()

        portrait = store.save_portrait("carol", np.zeros((50, 50, 3), dtype=np.uint8))
        store.append(corpus, np.zeros((64, 64), dtype=np.uint8), "carol")
        store.append(corpus, np.zeros((64, 64), dtype=np.uint8), "carol")

        faces = sorted(p.name for p in (corpus_root / "faces" / "carol").iterdir())
        assert portrait.name == "1500000000_0.jpg"
        assert faces == ["1500000000_1.jpg", "1500000000_2.jpg"]

    def test_failed_write_leaves_corpus_unchanged(self, store, monkeypatch):
        """Test the corpus is not extended when the image cannot be written."""
        corpus = store.load()
        monkeypatch.setattr(cv2, "imwrite", lambda *args, **kwargs: False)

        with pytest.raises(OSError):
            store.append(corpus, np.zeros((64, 64), dtype=np.uint8), "carol")

        assert len(corpus) == 6
        assert "carol" not in corpus

    def test_append_to_empty_corpus_fails(self, tmp_path):
        """Test append needs a standard size from an existing sample."""
        from face_corpus import CorpusLoadError, FilesystemCorpusStore

        (tmp_path / "faces").mkdir()
        store = FilesystemCorpusStore(tmp_path)
        corpus = store.load()

        with pytest.raises(CorpusLoadError):
            store.append(corpus, np.zeros((64, 64), dtype=np.uint8), "alice")

    def test_save_portrait(self, store, corpus_root):
        """Test portraits are stored at 256x256 without touching the corpus."""
        path = store.save_portrait("bob", np.zeros((40, 30, 3), dtype=np.uint8))

        assert path.parent == corpus_root / "protraits" / "bob"
        saved = cv2.imread(str(path))
        assert saved.shape == (256, 256, 3)


class TestPortraitLookup:
    """Test cases for listing portraits."""

    def test_list_portraits(self, store, corpus_root):
        """Test all portrait files of a person are listed."""
        paths = store.list_portraits("alice")

        assert sorted(p.name for p in paths) == ["1400000000_0.jpg", "1400000000_1.jpg"]
        assert all(p.parent == corpus_root / "protraits" / "alice" for p in paths)

    def test_unknown_name(self, store):
        """Test an unknown name gives no portraits."""
        assert store.list_portraits("zoe") == []

    def test_missing_root(self, tmp_path):
        """Test a missing corpus root gives no portraits."""
        from face_corpus import FilesystemCorpusStore

        assert FilesystemCorpusStore(tmp_path / "nowhere").list_portraits("alice") == []

    def test_name_is_a_file(self, store, corpus_root):
        """Test a file named like the person is not treated as a directory."""
        (corpus_root / "protraits" / "eve").write_text("x")

        assert store.list_portraits("eve") == []

    def test_ensure_layout(self, tmp_path):
        """Test the directory skeleton is created."""
        from face_corpus import FilesystemCorpusStore

        store = FilesystemCorpusStore(tmp_path / "new")
        store.ensure_layout("alice")

        assert store.faces_dir.is_dir()
        assert (store.portraits_dir / "alice").is_dir()
