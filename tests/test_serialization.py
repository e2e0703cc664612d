"""Tests for JSON result rendering."""

import json

import pytest


class TestRecordsToJson:
    """Test cases for records_to_json."""

    def test_empty(self):
        """Test zero records render as []."""
        from face_corpus import records_to_json

        assert records_to_json([]) == "[]"

    def test_single_record(self):
        """Test the exact rendering of one record."""
        from face_corpus import FaceRecord, records_to_json

        record = FaceRecord(x=10, y=20, width=30, height=40, label=0, name="alice", confidence=123.4)

        assert records_to_json([record]) == (
            '[{"prediction":"alice","confidence":123.4,'
            '"position":{"x":10,"y":20},"size":{"width":30,"height":40}}]'
        )

    def test_numpy_values(self):
        """Test NumPy scalars are rendered as plain numbers."""
        import numpy as np
        from face_corpus import FaceRecord, records_to_json

        record = FaceRecord(
            x=np.int32(1), y=np.int64(2), width=np.int32(3), height=np.int32(4),
            label=1, name="bob", confidence=np.float64(0.5),
        )

        assert json.loads(records_to_json([record])) == [{
            "prediction": "bob",
            "confidence": 0.5,
            "position": {"x": 1, "y": 2},
            "size": {"width": 3, "height": 4},
        }]

    def test_order_preserved(self):
        """Test records keep their detection order."""
        from face_corpus import FaceRecord, records_to_json

        records = [
            FaceRecord(0, 0, 1, 1, 0, "alice", 1.0),
            FaceRecord(5, 5, 1, 1, -1, "unknown", 2.0),
        ]

        names = [r["prediction"] for r in json.loads(records_to_json(records))]
        assert names == ["alice", "unknown"]


class TestPortraitsToJson:
    """Test cases for portrait path rendering."""

    def test_paths(self, tmp_path):
        """Test paths render as strings."""
        from face_corpus import portraits_to_json

        paths = [tmp_path / "a.jpg", "rel/b.jpg"]

        assert json.loads(portraits_to_json(paths)) == [str(tmp_path / "a.jpg"), "rel/b.jpg"]

    def test_empty(self):
        """Test no paths render as []."""
        from face_corpus import portraits_to_json

        assert portraits_to_json([]) == "[]"


class TestWriteJson:
    """Test cases for write_json."""

    def test_writes_with_newline(self, tmp_path):
        """Test the text is written followed by a newline."""
        from face_corpus import write_json

        path = tmp_path / "out.json"
        write_json(path, "[]")

        assert path.read_text() == "[]\n"

    def test_unwritable(self, tmp_path):
        """Test a path in a missing directory raises OSError."""
        from face_corpus import write_json

        with pytest.raises(OSError):
            write_json(tmp_path / "missing" / "out.json", "[]")
