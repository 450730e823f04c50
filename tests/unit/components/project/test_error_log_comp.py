"""Tests for error_log_comp.py."""

from __future__ import annotations

import threading
from datetime import datetime
from pathlib import Path

import pytest

from neuralforge.components.project.error_log_comp import format_error_line, get_error_log


class TestFormatErrorLine:
    @pytest.mark.unit
    def test_timestamp_tab_message(self):
        line = format_error_line("Error converting a.mp3", ValueError("bad header"))
        stamp, body = line.split("\t")
        assert datetime.fromisoformat(stamp).tzinfo is not None
        assert body == "Error converting a.mp3: bad header"

    @pytest.mark.unit
    def test_without_error_detail(self):
        assert format_error_line("Something", None).split("\t")[1] == "Something"

    @pytest.mark.unit
    def test_newlines_are_escaped(self):
        line = format_error_line("Error", "line one\nline two\r\n")
        assert "\n" not in line
        assert line.endswith("line one\\nline two\\r\\n")


class TestErrorLogWriter:
    @pytest.mark.unit
    def test_appends_lines(self, temp_dir: Path):
        log = get_error_log(temp_dir / "p" / "log.error")
        log.append("first", "x")
        log.append("second", RuntimeError("y"))

        lines = log.read_lines()
        assert [line.split("\t")[1] for line in lines] == ["first: x", "second: y"]
        assert (temp_dir / "p" / "log.error").read_text(encoding="utf-8").endswith("\n")

    @pytest.mark.unit
    def test_mirrors_to_process_log(self, temp_dir: Path, caplog):
        with caplog.at_level("ERROR"):
            get_error_log(temp_dir / "log.error").append("Error loading spectrogram x.json", "bad")
        assert "Error loading spectrogram x.json" in caplog.text

    @pytest.mark.unit
    def test_one_writer_per_path(self, temp_dir: Path):
        a = get_error_log(temp_dir / "log.error")
        b = get_error_log(temp_dir / "." / "log.error")
        assert a is b
        assert get_error_log(temp_dir / "other.error") is not a

    @pytest.mark.unit
    def test_read_missing_log(self, temp_dir: Path):
        assert get_error_log(temp_dir / "none.error").read_lines() == []

    @pytest.mark.unit
    def test_concurrent_appends_stay_whole(self, temp_dir: Path):
        log = get_error_log(temp_dir / "log.error")

        def worker(n: int) -> None:
            for i in range(50):
                log.append(f"worker {n} item {i}", "x" * 200)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        lines = log.read_lines()
        assert len(lines) == 400
        assert all(line.endswith("x" * 200) and line.count("\t") == 1 for line in lines)
