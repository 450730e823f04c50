"""
Unit tests for neuralforge.helpers.exceptions.
"""

import pytest

from neuralforge.helpers.exceptions import (
    EmptyCorpusError,
    ForgeError,
    PhaseFailedError,
    ProjectError,
    RecordSchemaError,
    RendererError,
    SpectrogramDecodeError,
)


class TestHierarchy:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "exc_type",
        [ProjectError, RendererError, SpectrogramDecodeError, RecordSchemaError, EmptyCorpusError, PhaseFailedError],
    )
    def test_all_errors_derive_from_forge_error(self, exc_type: type[Exception]) -> None:
        assert issubclass(exc_type, ForgeError)

    @pytest.mark.unit
    def test_forge_error_is_not_os_error(self) -> None:
        """Per-item OSError handling must never swallow pipeline errors by accident."""
        assert not issubclass(ForgeError, OSError)


class TestRendererError:
    @pytest.mark.unit
    def test_str_includes_exit_code_and_last_stderr_line(self) -> None:
        err = RendererError("ffmpeg failed to transcode a.mp3", stderr="line one\nInvalid data found\n", returncode=1)
        text = str(err)
        assert "ffmpeg failed to transcode a.mp3" in text
        assert "(exit=1)" in text
        assert text.endswith("Invalid data found")

    @pytest.mark.unit
    def test_str_without_stderr_or_exit(self) -> None:
        err = RendererError("ffmpeg not found")
        assert str(err) == "ffmpeg not found"
        assert err.returncode is None
        assert err.stderr == ""

    @pytest.mark.unit
    def test_blank_stderr_is_ignored(self) -> None:
        assert str(RendererError("boom", stderr="  \n ")) == "boom"


class TestPhaseFailedError:
    @pytest.mark.unit
    def test_carries_result(self) -> None:
        result = object()
        err = PhaseFailedError("2 of 5 failed", result=result)
        assert err.result is result
        assert str(err) == "2 of 5 failed"
