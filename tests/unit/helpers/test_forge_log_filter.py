"""Unit tests for ForgeLogFilter.

Tests verify automatic identity/role tag derivation and context injection.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from neuralforge.helpers.logging_helper import (
    ForgeLogFilter,
    clear_log_context,
    configure_logging,
    set_log_context,
)


def _make_record(name: str) -> logging.LogRecord:
    """Create a minimal LogRecord with given logger name."""
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg="Test message",
        args=(),
        exc_info=None,
    )


class TestForgeLogFilterIdentityRole:
    """Tests for identity and role tag derivation from logger names."""

    @pytest.fixture
    def log_filter(self) -> ForgeLogFilter:
        return ForgeLogFilter()

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("logger_name", "identity", "role"),
        [
            ("neuralforge.services.pipeline_svc", "[Pipeline]", "[Service]"),
            ("neuralforge.workflows.processing.process_chunks_wf", "[Process Chunks]", "[Workflow]"),
            ("neuralforge.components.store.content_store_comp", "[Content Store]", "[Component]"),
            ("neuralforge.helpers.files_helper", "[Files]", "[Helper]"),
            ("neuralforge.interfaces.cli.commands.convert_cli", "[Convert]", "[CLI]"),
        ],
    )
    def test_suffix_to_tags(self, log_filter: ForgeLogFilter, logger_name: str, identity: str, role: str) -> None:
        record = _make_record(logger_name)
        log_filter.filter(record)

        assert record.forge_identity_tag == identity
        assert record.forge_role_tag == role
        assert record.forge_prefix == f"{identity} {role} "

    @pytest.mark.unit
    def test_unknown_suffix_keeps_full_name(self, log_filter: ForgeLogFilter) -> None:
        record = _make_record("urllib3.connectionpool")
        log_filter.filter(record)

        assert record.forge_identity_tag == "urllib3.connectionpool"
        assert record.forge_role_tag == ""
        assert record.forge_prefix == "urllib3.connectionpool "

    @pytest.mark.unit
    def test_bare_suffix_is_not_a_role(self, log_filter: ForgeLogFilter) -> None:
        """A module literally named `_svc` has no identity to derive."""
        record = _make_record("pkg._svc")
        log_filter.filter(record)
        assert record.forge_role_tag == ""

    @pytest.mark.unit
    def test_never_suppresses(self, log_filter: ForgeLogFilter) -> None:
        assert log_filter.filter(_make_record("")) is True


class TestForgeLogFilterContext:
    """Tests for context injection."""

    @pytest.mark.unit
    def test_no_context_gives_empty_string(self) -> None:
        clear_log_context()
        record = _make_record("neuralforge.services.pipeline_svc")
        ForgeLogFilter().filter(record)
        assert record.context_str == ""

    @pytest.mark.unit
    def test_context_values_rendered_in_order(self) -> None:
        set_log_context(project="birds")
        set_log_context(phase="chunks")
        record = _make_record("neuralforge.services.pipeline_svc")
        ForgeLogFilter().filter(record)
        assert record.context_str == "[project=birds phase=chunks] "

    @pytest.mark.unit
    def test_clear_drops_context(self) -> None:
        set_log_context(project="birds")
        clear_log_context()
        record = _make_record("neuralforge.services.pipeline_svc")
        ForgeLogFilter().filter(record)
        assert record.context_str == ""


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)

    @pytest.mark.unit
    def test_file_handler_writes_tagged_lines(self, temp_dir: Path) -> None:
        configure_logging("DEBUG", log_dir=temp_dir)
        logging.getLogger("neuralforge.components.store.content_store_comp").info("stored %s", "abc")
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = (temp_dir / "neuralforge.log").read_text(encoding="utf-8")
        assert "[Content Store] [Component] stored abc" in text

    @pytest.mark.unit
    def test_unknown_level_name_falls_back_to_info(self) -> None:
        configure_logging("LOUD")
        assert logging.getLogger().level == logging.INFO
