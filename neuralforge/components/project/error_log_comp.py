"""
Per-project error log component.

``<project>/log.error`` is an append-only, UTF-8, line-oriented file: one
record per line, ``<ISO timestamp>\\t<message>: <error>``. All appends for a
given path go through one ErrorLogWriter, which serializes them with a lock so
concurrent workers never interleave partial lines.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from neuralforge.helpers.time_helper import iso_timestamp

logger = logging.getLogger(__name__)

_writers: dict[Path, ErrorLogWriter] = {}
_writers_lock = threading.Lock()


def _one_line(text: str) -> str:
    return text.replace("\r", "\\r").replace("\n", "\\n")


def format_error_line(message: str, err: BaseException | str | None) -> str:
    """Format one log record (no trailing newline)."""
    detail = "" if err is None else str(err)
    body = f"{message}: {detail}" if detail else message
    return f"{iso_timestamp()}\t{_one_line(body)}"


class ErrorLogWriter:
    """Serialized appender for a single ``log.error`` file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()

    def append(self, message: str, err: BaseException | str | None = None) -> str:
        """
        Append one record and mirror it to the process log at ERROR.

        Returns:
            The line written (without newline)

        Raises:
            OSError: If the log file cannot be written
        """
        line = format_error_line(message, err)
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        logger.error("[error_log] %s: %s", message, err)
        return line

    def read_lines(self) -> list[str]:
        """Return all records currently in the log (empty if none)."""
        with self._lock:
            if not self.path.exists():
                return []
            return self.path.read_text(encoding="utf-8").splitlines()


def get_error_log(path: str | Path) -> ErrorLogWriter:
    """Return the process-wide writer for ``path`` (one per resolved path)."""
    key = Path(path).expanduser().resolve()
    with _writers_lock:
        writer = _writers.get(key)
        if writer is None:
            writer = ErrorLogWriter(key)
            _writers[key] = writer
        return writer
