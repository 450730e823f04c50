"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.
"""

from __future__ import annotations

from typing import Any


class ForgeError(Exception):
    """Base class for all NeuralForge pipeline errors."""


class ProjectError(ForgeError):
    """Raised when a project root, its config or its inventory cannot be used.

    Fatal for the current call.
    """


class RendererError(ForgeError):
    """Raised when the external media tool fails.

    Attributes:
        stderr: Captured stderr of the failed invocation (tail-truncated)
        returncode: Process exit code, or None if the process never ran/finished
    """

    def __init__(self, message: str, stderr: str = "", returncode: int | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode

    def __str__(self) -> str:
        base = super().__str__()
        if self.returncode is not None:
            base = f"{base} (exit={self.returncode})"
        if self.stderr:
            last_line = self.stderr.strip().splitlines()[-1] if self.stderr.strip() else ""
            if last_line:
                base = f"{base}: {last_line}"
        return base


class SpectrogramDecodeError(ForgeError):
    """Raised when a rendered spectrogram image cannot be decoded into a matrix."""


class RecordSchemaError(ForgeError):
    """Raised when a stored spectrogram record is malformed."""


class EmptyCorpusError(ForgeError):
    """Raised when no spectrogram records are available for clustering."""


class PhaseFailedError(ForgeError):
    """Raised when a phase completed but one or more items failed.

    Attributes:
        result: The phase result object carrying the per-item failures
    """

    def __init__(self, message: str, result: Any = None) -> None:
        super().__init__(message)
        self.result = result
