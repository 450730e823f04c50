"""
Services package.
"""

from .cli_bootstrap_svc import bootstrap_cli, get_config_service, get_pipeline_service, setup_logging
from .config_svc import ENV_CONFIG_PATH, ENV_PREFIX, ConfigService
from .pipeline_svc import PipelineService

__all__ = [
    "ENV_CONFIG_PATH",
    "ENV_PREFIX",
    "ConfigService",
    "PipelineService",
    "bootstrap_cli",
    "get_config_service",
    "get_pipeline_service",
    "setup_logging",
]
