"""
FFmpeg renderer adapter component.

Platform-level component wrapping the four ffmpeg invocations the pipeline
needs: transcode to WAV, silence detection, segment extraction and
spectrogram picture rendering.

Architecture:
- Leaf component (no upward imports)
- Every invocation runs with a hard timeout
- Non-zero exit, missing binary and timeout all surface as RendererError
  carrying the captured stderr
- Temporary files created here (spectrogram PNG targets) are removed on every
  exit path
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import subprocess
import tempfile
from collections.abc import Iterable, Iterator
from pathlib import Path

from neuralforge.helpers.dto.spectrogram_dto import AudibleInterval, SilenceInterval
from neuralforge.helpers.exceptions import RendererError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 600.0

# Keep the tail of stderr; ffmpeg puts the actual error last
STDERR_TAIL_CHARS = 4000

_SILENCE_MARKER = re.compile(r"silence_(start|end)\s*:\s*(-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?)")


def format_seconds(value: float) -> str:
    """Format seconds for ffmpeg's -ss/-t options (microsecond precision)."""
    return f"{value:.6f}"


def parse_silence_markers(lines: Iterable[str]) -> list[SilenceInterval]:
    """
    Parse silencedetect output into silence intervals.

    Lines are consumed in order. Each ``silence_start`` opens an interval,
    the following ``silence_end`` closes it. An end with no open start
    yields an interval with ``start=None``; a start that is never closed
    yields an interval with ``end=None`` (silence runs to end of file).

    Args:
        lines: stderr lines from ``ffmpeg -af silencedetect``

    Returns:
        Silence intervals in stream order
    """
    intervals: list[SilenceInterval] = []
    open_start: float | None = None
    has_open = False

    for line in lines:
        for kind, raw in _SILENCE_MARKER.findall(line):
            value = float(raw)
            if kind == "start":
                if has_open:
                    # Two starts in a row: the first never closed
                    intervals.append(SilenceInterval(start=open_start, end=None))
                open_start = value
                has_open = True
            else:
                intervals.append(SilenceInterval(start=open_start if has_open else None, end=value))
                open_start = None
                has_open = False

    if has_open:
        intervals.append(SilenceInterval(start=open_start, end=None))
    return intervals


def audible_intervals(silences: Iterable[SilenceInterval]) -> list[AudibleInterval]:
    """
    Derive audible intervals from silence intervals.

    The cursor starts at 0.0 and is moved to each ``silence_end``; every
    ``silence_start`` closes the stretch ``[cursor, start)`` when it has
    positive length. A trailing ``silence_end`` with nothing after it yields an
    open-ended interval (``end=None``).

    Returns:
        Audible intervals in time order; empty when no silence was reported
    """
    silences = list(silences)
    if not silences:
        return []

    intervals: list[AudibleInterval] = []
    cursor: float | None = 0.0

    for silence in silences:
        if silence.start is not None and cursor is not None and silence.start > cursor:
            intervals.append(AudibleInterval(start=cursor, end=silence.start))
        cursor = silence.end

    if cursor is not None:
        intervals.append(AudibleInterval(start=cursor, end=None))
    return intervals


class FFmpegRenderer:
    """
    Out-of-process media tool adapter.

    Args:
        binary: ffmpeg executable name or path
        timeout: Per-invocation timeout in seconds
        silence_threshold_db: silencedetect noise floor in dB
        silence_min_duration_s: silencedetect minimum silence length

    Example:
        >>> renderer = FFmpegRenderer()
        >>> renderer.transcode_to_wav("in.mp3", "out.wav")
        >>> with renderer.rendered_spectrogram("out.wav") as png:
        ...     matrix = decode_spectrogram_png(png)
    """

    def __init__(
        self,
        binary: str = "ffmpeg",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        silence_threshold_db: float = -30.0,
        silence_min_duration_s: float = 0.5,
    ) -> None:
        self.binary = binary
        self.timeout = timeout
        self.silence_threshold_db = silence_threshold_db
        self.silence_min_duration_s = silence_min_duration_s

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def transcode_to_wav(self, src: str | Path, dst: str | Path) -> None:
        """Decode any ffmpeg-readable audio file into a WAV at ``dst``."""
        self._run(["-y", "-i", str(src), str(dst)], what=f"transcode {src}")

    def detect_silence(
        self,
        src: str | Path,
        threshold_db: float | None = None,
        min_duration_s: float | None = None,
    ) -> list[SilenceInterval]:
        """Run silencedetect over ``src`` and parse the markers from stderr."""
        threshold = self.silence_threshold_db if threshold_db is None else threshold_db
        min_dur = self.silence_min_duration_s if min_duration_s is None else min_duration_s
        stderr = self._run(
            [
                "-i",
                str(src),
                "-af",
                f"silencedetect=n={threshold:g}dB:d={min_dur:g}",
                "-f",
                "null",
                "-",
            ],
            what=f"detect silence in {src}",
        )
        return parse_silence_markers(stderr.splitlines())

    def extract_segment(self, src: str | Path, dst: str | Path, start: float, duration: float | None) -> None:
        """
        Stream-copy a slice of ``src`` into ``dst``.

        ``duration=None`` extracts from ``start`` to end of file.
        """
        args = ["-y", "-i", str(src), "-ss", format_seconds(start)]
        if duration is not None:
            args += ["-t", format_seconds(duration)]
        args += ["-c", "copy", str(dst)]
        self._run(args, what=f"extract segment {start:.3f}s from {src}")

    def render_spectrogram_png(self, src: str | Path, dst: str | Path, width: int = 1024, height: int = 1024) -> None:
        """Render a legend-free, cube-root scaled spectrogram picture of ``src``."""
        self._run(
            [
                "-y",
                "-i",
                str(src),
                "-lavfi",
                f"showspectrumpic=s={width}x{height}:legend=disabled:scale=cbrt",
                str(dst),
            ],
            what=f"render spectrogram of {src}",
        )

    @contextlib.contextmanager
    def rendered_spectrogram(self, src: str | Path, width: int = 1024, height: int = 1024) -> Iterator[Path]:
        """
        Render ``src`` into a temporary PNG and yield its path.

        The PNG is deleted when the block exits, whether rendering, decoding or
        the caller failed.
        """
        fd, tmp_name = tempfile.mkstemp(prefix="spectrogram-", suffix=".png")
        os.close(fd)
        tmp_path = Path(tmp_name)
        try:
            self.render_spectrogram_png(src, tmp_path, width=width, height=height)
            yield tmp_path
        finally:
            with contextlib.suppress(FileNotFoundError):
                tmp_path.unlink()

    # ------------------------------------------------------------------
    # Process plumbing
    # ------------------------------------------------------------------

    def _run(self, args: list[str], what: str) -> str:
        """
        Run ffmpeg with ``args`` and return its stderr.

        Raises:
            RendererError: On missing binary, timeout or non-zero exit
        """
        cmd = [self.binary, "-hide_banner", "-nostdin", *args]
        logger.debug("[ffmpeg] %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise RendererError(f"{self.binary} not found while trying to {what}") from e
        except subprocess.TimeoutExpired as e:
            stderr = _decode(e.stderr)
            raise RendererError(
                f"{self.binary} timed out after {self.timeout}s while trying to {what}",
                stderr=stderr[-STDERR_TAIL_CHARS:],
            ) from e

        stderr = _decode(result.stderr)
        if result.returncode != 0:
            logger.debug("[ffmpeg] failed (exit=%d): %s", result.returncode, stderr)
            raise RendererError(
                f"{self.binary} failed to {what}",
                stderr=stderr[-STDERR_TAIL_CHARS:],
                returncode=result.returncode,
            )
        return stderr


def _decode(raw: bytes | str | None) -> str:
    if raw is None:
        return ""
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    return text
