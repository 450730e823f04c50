"""
Logging helpers: record tagging, context injection and process-wide setup.

Every module logs through ``logging.getLogger(__name__)``. ForgeLogFilter
turns the module suffix into readable tags so a line reads like
``[Content Store] [Component] stored 3f2a...``.
"""

from __future__ import annotations

import contextvars
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s %(forge_prefix)s%(context_str)s%(message)s"

# Module-name suffix -> role tag
_ROLE_SUFFIXES: dict[str, str] = {
    "_svc": "[Service]",
    "_wf": "[Workflow]",
    "_comp": "[Component]",
    "_helper": "[Helper]",
    "_dto": "[DTO]",
    "_cli": "[CLI]",
}

_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar("forge_log_context", default=None)


def set_log_context(**values: Any) -> None:
    """Attach key/value pairs to every record logged from the current context."""
    current = dict(_log_context.get() or {})
    current.update(values)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Copy of the context values visible from the current context."""
    return dict(_log_context.get() or {})


def clear_log_context() -> None:
    """Drop all context values for the current context."""
    _log_context.set(None)


def _derive_tags(name: str) -> tuple[str, str]:
    last = name.rsplit(".", 1)[-1]
    for suffix, role in _ROLE_SUFFIXES.items():
        if last.endswith(suffix):
            stem = last[: -len(suffix)]
            if not stem:
                break
            identity = " ".join(word.capitalize() for word in stem.split("_") if word)
            return f"[{identity}]", role
    return name, ""


class ForgeLogFilter(logging.Filter):
    """Adds ``forge_identity_tag``, ``forge_role_tag``, ``forge_prefix`` and ``context_str`` to records.

    Never suppresses a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            identity, role = _derive_tags(str(record.name or ""))
        except Exception:
            identity, role = str(getattr(record, "name", "")), ""
        record.forge_identity_tag = identity
        record.forge_role_tag = role
        record.forge_prefix = " ".join(tag for tag in (identity, role) if tag) + " "

        context = _log_context.get()
        if context:
            pairs = " ".join(f"{k}={v}" for k, v in context.items())
            record.context_str = f"[{pairs}] "
        else:
            record.context_str = ""
        return True


def configure_logging(level: str | int = "INFO", log_dir: str | Path | None = None) -> None:
    """
    Configure root logging for the process.

    Installs a console handler and, when ``log_dir`` is given, a rotating file
    handler (10MB x 5) at ``<log_dir>/neuralforge.log``. The tagging filter is
    attached to each handler so records from third-party loggers are tagged too.

    Args:
        level: Logging level name or number
        log_dir: Optional directory for the rotating log file
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(ForgeLogFilter())
    handlers.append(console_handler)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path / "neuralforge.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(ForgeLogFilter())
        handlers.append(file_handler)

    # force=True clears handlers installed by an earlier call
    logging.basicConfig(level=level, handlers=handlers, force=True)
