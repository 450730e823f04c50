"""
Content-addressed spectrogram store component.

Records live at ``<spectrograms_dir>/<md5>.json``; the key is the MD5 of the
segment file the record was rendered from. A key's presence is authoritative:
put() never overwrites an existing record.

Writes are atomic (temp sibling + rename). Temp files are hidden and carry a
``.tmp`` suffix so a half-written file is never listed as a record.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from neuralforge.helpers.dto.spectrogram_dto import SpectrogramRecord
from neuralforge.helpers.exceptions import RecordSchemaError
from neuralforge.helpers.files_helper import list_files_with_suffix, md5_file

logger = logging.getLogger(__name__)

RECORD_SUFFIX = ".json"


class SpectrogramRecordFile(BaseModel):
    """Schema of a stored spectrogram record."""

    file_name: str
    md5_hash: str
    chunk_path: str
    spectrogram: list[list[float]]

    @field_validator("md5_hash")
    @classmethod
    def _hex_digest(cls, value: str) -> str:
        if len(value) != 32 or any(c not in "0123456789abcdef" for c in value.lower()):
            raise ValueError("md5_hash must be 32 hex characters")
        return value

    @model_validator(mode="after")
    def _rectangular(self) -> SpectrogramRecordFile:
        if not self.spectrogram:
            raise ValueError("spectrogram matrix is empty")
        width = len(self.spectrogram[0])
        if width == 0 or any(len(row) != width for row in self.spectrogram):
            raise ValueError("spectrogram matrix is not rectangular")
        return self


def write_json_atomic(path: Path, payload: Any) -> None:
    """
    Write ``payload`` as 2-space indented JSON via temp sibling + rename.

    Raises:
        OSError: If the temp file cannot be written or renamed
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_name)
        raise


class ContentStore:
    """
    Filesystem-backed, content-addressed record store.

    Args:
        directory: The project's ``spectrograms/`` directory
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    @staticmethod
    def hash_file(path: str | Path) -> str:
        """Content hash (MD5 hex) of a segment file's bytes."""
        return md5_file(path)

    def record_path(self, md5_hash: str) -> Path:
        return self.directory / f"{md5_hash}{RECORD_SUFFIX}"

    def contains(self, md5_hash: str) -> bool:
        """True if a record for ``md5_hash`` is already stored."""
        return self.record_path(md5_hash).is_file()

    def put(self, record: SpectrogramRecord) -> bool:
        """
        Store ``record`` under its hash unless one is already present.

        Returns:
            True if written, False if a record already existed

        Raises:
            OSError: If the record cannot be written
        """
        target = self.record_path(record.md5_hash)
        if target.exists():
            logger.debug("[store] %s already stored", record.md5_hash)
            return False
        write_json_atomic(target, record.to_json_dict())
        logger.debug("[store] stored %s (%s)", record.md5_hash, record.file_name)
        return True

    def list_record_paths(self) -> list[Path]:
        """Snapshot of record files currently in the store, sorted by name."""
        return list_files_with_suffix(self.directory, RECORD_SUFFIX)

    def list_hashes(self) -> list[str]:
        return [p.stem for p in self.list_record_paths()]

    def load(self, path: str | Path) -> SpectrogramRecord:
        """
        Load and validate a record file.

        Raises:
            RecordSchemaError: If the file is not valid JSON, does not match the
                record schema, or its stem differs from its md5_hash
            OSError: If the file cannot be read
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise RecordSchemaError(f"Invalid JSON in {path.name}: {e}") from e

        try:
            parsed = SpectrogramRecordFile.model_validate(raw)
        except ValidationError as e:
            raise RecordSchemaError(f"Malformed record {path.name}: {e.error_count()} validation error(s)") from e

        if parsed.md5_hash != path.stem:
            raise RecordSchemaError(f"Record {path.name} carries md5_hash {parsed.md5_hash}")

        return SpectrogramRecord(
            file_name=parsed.file_name,
            md5_hash=parsed.md5_hash,
            chunk_path=parsed.chunk_path,
            spectrogram=parsed.spectrogram,
        )
