"""CLI Bootstrap Service - Service Container for CLI Commands.

Provides the wiring CLI commands need without each command assembling
config, logging and the pipeline by hand.

Architecture:
- This is a SERVICE layer module (interfaces → services)
- CLI commands should NOT import workflows or components directly
- CLI commands SHOULD use these bootstrap functions to get service instances
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from neuralforge.helpers.logging_helper import configure_logging
from neuralforge.services.config_svc import ConfigService
from neuralforge.services.pipeline_svc import PipelineService

logger = logging.getLogger(__name__)


def get_config_service(
    config_path: str | Path | None = None,
    projects_root: str | Path | None = None,
    log_level: str | None = None,
) -> ConfigService:
    """Get ConfigService instance for CLI operations.

    Command-line values are applied as overrides, so they beat every YAML
    file; ``NEURALFORGE_*`` environment variables still apply last.

    Returns:
        ConfigService instance

    """
    overrides: dict[str, Any] = {}
    if projects_root is not None:
        overrides["projects_root"] = str(projects_root)
    if log_level is not None:
        overrides["log_level"] = log_level
    return ConfigService(config_path=config_path, overrides=overrides)


def setup_logging(config_service: ConfigService) -> None:
    """Configure process logging from the composed config."""
    cfg = config_service.get_config()
    configure_logging(level=str(cfg.get("log_level") or "INFO"), log_dir=cfg.get("log_dir"))


def get_pipeline_service(config_service: ConfigService) -> PipelineService:
    """Get PipelineService instance for CLI operations.

    Raises:
        ValueError: If the configuration holds unusable values

    """
    return PipelineService(
        config=config_service.make_pipeline_config(),
        projects_root=config_service.projects_root(),
    )


def bootstrap_cli(
    config_path: str | Path | None = None,
    projects_root: str | Path | None = None,
    log_level: str | None = None,
) -> PipelineService:
    """Compose config, configure logging and return a PipelineService."""
    config_service = get_config_service(config_path, projects_root, log_level)
    setup_logging(config_service)
    service = get_pipeline_service(config_service)
    logger.debug("[CLI Bootstrap] pipeline service ready (projects_root=%s)", service.projects_root)
    return service
