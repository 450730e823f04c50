"""Tests for content_store_comp.py."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from unittest.mock import patch

import numpy as np
import pytest

from neuralforge.components.store.content_store_comp import ContentStore, write_json_atomic
from neuralforge.helpers.dto.spectrogram_dto import SpectrogramRecord
from neuralforge.helpers.exceptions import RecordSchemaError

HASH_A = hashlib.md5(b"a").hexdigest()


def _record(md5_hash: str = HASH_A, matrix=None) -> SpectrogramRecord:
    return SpectrogramRecord(
        file_name="a_chunk1.wav",
        md5_hash=md5_hash,
        chunk_path="/p/spectrograms/a_chunk1.wav",
        spectrogram=np.array([[0.0, 0.5], [0.75, 1.0]]) if matrix is None else matrix,
    )


@pytest.fixture
def store(temp_dir: Path) -> ContentStore:
    return ContentStore(temp_dir)


class TestPutAndContains:
    @pytest.mark.unit
    def test_put_writes_record_named_by_hash(self, store: ContentStore, temp_dir: Path):
        assert not store.contains(HASH_A)
        assert store.put(_record()) is True
        assert store.contains(HASH_A)
        assert (temp_dir / f"{HASH_A}.json").is_file()

    @pytest.mark.unit
    def test_record_json_is_indented_and_field_ordered(self, store: ContentStore):
        store.put(_record())
        text = store.record_path(HASH_A).read_text(encoding="utf-8")
        assert text.startswith('{\n  "file_name": "a_chunk1.wav",\n  "md5_hash"')
        assert list(json.loads(text)) == ["file_name", "md5_hash", "chunk_path", "spectrogram"]

    @pytest.mark.unit
    def test_put_never_overwrites(self, store: ContentStore):
        store.put(_record())
        before = store.record_path(HASH_A).read_bytes()

        assert store.put(_record(matrix=np.ones((2, 2)))) is False
        assert store.record_path(HASH_A).read_bytes() == before

    @pytest.mark.unit
    def test_no_temp_files_left_behind(self, store: ContentStore, temp_dir: Path):
        store.put(_record())
        assert [p.name for p in temp_dir.iterdir()] == [f"{HASH_A}.json"]

    @pytest.mark.unit
    def test_failed_write_leaves_no_record(self, store: ContentStore, temp_dir: Path):
        with patch("neuralforge.components.store.content_store_comp.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                store.put(_record())
        assert not store.contains(HASH_A)
        assert list(temp_dir.iterdir()) == []


class TestHashFile:
    @pytest.mark.unit
    def test_md5_of_bytes(self, temp_dir: Path):
        path = temp_dir / "seg.wav"
        path.write_bytes(b"RIFF....WAVE")
        assert ContentStore.hash_file(path) == hashlib.md5(b"RIFF....WAVE").hexdigest()


class TestLoad:
    @pytest.mark.unit
    def test_round_trip(self, store: ContentStore):
        store.put(_record())
        loaded = store.load(store.record_path(HASH_A))
        assert loaded.md5_hash == HASH_A
        assert loaded.file_name == "a_chunk1.wav"
        assert loaded.spectrogram == [[0.0, 0.5], [0.75, 1.0]]

    @pytest.mark.unit
    def test_invalid_json(self, store: ContentStore, temp_dir: Path):
        path = temp_dir / f"{HASH_A}.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RecordSchemaError, match="Invalid JSON"):
            store.load(path)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "payload",
        [
            {"file_name": "a.wav", "md5_hash": HASH_A, "chunk_path": "x"},
            {"file_name": "a.wav", "md5_hash": HASH_A, "chunk_path": "x", "spectrogram": [[0.1, 0.2], [0.3]]},
            {"file_name": "a.wav", "md5_hash": HASH_A, "chunk_path": "x", "spectrogram": []},
            {"file_name": "a.wav", "md5_hash": HASH_A, "chunk_path": "x", "spectrogram": [["a", "b"]]},
            {"file_name": "a.wav", "md5_hash": "nothex", "chunk_path": "x", "spectrogram": [[0.1]]},
        ],
    )
    def test_schema_violations(self, store: ContentStore, temp_dir: Path, payload: dict):
        path = temp_dir / f"{HASH_A}.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(RecordSchemaError):
            store.load(path)

    @pytest.mark.unit
    def test_stem_must_match_hash(self, store: ContentStore, temp_dir: Path):
        other = hashlib.md5(b"b").hexdigest()
        write_json_atomic(temp_dir / f"{other}.json", _record().to_json_dict())
        with pytest.raises(RecordSchemaError, match="carries md5_hash"):
            store.load(temp_dir / f"{other}.json")


class TestListing:
    @pytest.mark.unit
    def test_lists_only_records(self, store: ContentStore, temp_dir: Path):
        hash_b = hashlib.md5(b"b").hexdigest()
        store.put(_record())
        store.put(_record(md5_hash=hash_b))
        (temp_dir / "a_chunk2.wav").write_bytes(b"pending segment")
        (temp_dir / f".{hash_b}.json.x1.tmp").write_text("{}")

        assert store.list_hashes() == sorted([HASH_A, hash_b])

    @pytest.mark.unit
    def test_missing_directory_lists_nothing(self, temp_dir: Path):
        assert ContentStore(temp_dir / "missing").list_record_paths() == []
