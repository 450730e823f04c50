#!/usr/bin/env python3
# ======================================================================
#  Config Service - Configuration loading and caching
#  - Loads config from built-in defaults, YAML files and env vars
#  - Caches composed config
#  - Builds the typed PipelineConfig handed to workflows
# ======================================================================

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from neuralforge.components.project.project_files_comp import default_projects_root
from neuralforge.helpers.dto.processing_dto import PipelineConfig

ENV_PREFIX = "NEURALFORGE_"
ENV_CONFIG_PATH = "NEURALFORGE_CONFIG"
SYSTEM_CONFIG_PATH = "/etc/neuralforge/config.yaml"


class ConfigService:
    """
    Service for loading and caching pipeline configuration.

    Loads config from multiple sources (defaults → YAML → overrides → env),
    caches the result, and provides reload capability.

    Args:
        config_path: Extra YAML file layered after the standard locations
            (the CLI's ``--config``)
        overrides: Values applied after every YAML file
    """

    def __init__(self, config_path: str | Path | None = None, overrides: dict[str, Any] | None = None) -> None:
        self._config: dict[str, Any] | None = None
        self._config_path = str(config_path) if config_path else None
        self._overrides = dict(overrides or {})
        self._logger = logging.getLogger(__name__)

    def get_config(self, force_reload: bool = False) -> dict[str, Any]:
        """
        Get the composed configuration.

        Args:
            force_reload: If True, bypass cache and reload from sources

        Returns:
            Complete configuration dict
        """
        if self._config is None or force_reload:
            self._config = self._compose()
        return self._config

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dotted path.

        Example:
            >>> service.get("pool_spectrogram")
            10
        """
        node: Any = self.get_config()
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def reload(self) -> dict[str, Any]:
        """Force reload configuration from all sources."""
        self._logger.info("Reloading configuration from all sources")
        return self.get_config(force_reload=True)

    # ----------------------------------------------------------------------
    # Typed views
    # ----------------------------------------------------------------------

    def projects_root(self) -> Path:
        return Path(str(self.get_config()["projects_root"])).expanduser()

    def make_pipeline_config(self) -> PipelineConfig:
        """
        Build a PipelineConfig from the current configuration.

        This is the boundary where raw config values are coerced and checked;
        workflows only ever see the resulting DTO.

        Raises:
            ValueError: If a value cannot be coerced or is out of range
        """
        cfg = self.get_config()
        seed = cfg.get("kmeans_seed")

        config = PipelineConfig(
            ffmpeg_binary=str(cfg["ffmpeg_binary"]),
            ffmpeg_timeout_s=float(cfg["ffmpeg_timeout_s"]),
            batch_normalize=int(cfg["batch_normalize"]),
            pool_spectrogram=int(cfg["pool_spectrogram"]),
            pool_loader=int(cfg["pool_loader"]),
            silence_threshold_db=float(cfg["silence_threshold_db"]),
            silence_min_duration_s=float(cfg["silence_min_duration_s"]),
            spectrogram_width=int(cfg["spectrogram_width"]),
            spectrogram_height=int(cfg["spectrogram_height"]),
            k_max=int(cfg["k_max"]),
            kmeans_iterations=int(cfg["kmeans_iterations"]),
            kmeans_seed=None if seed in (None, "") else int(seed),
        )

        for name in ("batch_normalize", "pool_spectrogram", "pool_loader", "k_max", "kmeans_iterations"):
            if getattr(config, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(config, name)}")
        return config

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self) -> dict[str, Any]:
        """
        Load final configuration from:
          1) Built-in defaults
          2) /etc/neuralforge/config.yaml  (if present)
          3) ./config/config.yaml          (if present)
          4) $NEURALFORGE_CONFIG           (if set)
          5) config_path passed in
          6) overrides dict passed in
          7) Environment variables (NEURALFORGE_<KEY>)

        Returns merged config as dict.
        """
        cfg = self._default_config()

        self._deep_merge(cfg, self._load_yaml(SYSTEM_CONFIG_PATH))
        self._deep_merge(cfg, self._load_yaml(os.path.join(os.getcwd(), "config", "config.yaml")))

        env_path = os.getenv(ENV_CONFIG_PATH)
        if env_path:
            self._deep_merge(cfg, self._load_yaml(env_path))

        if self._config_path:
            self._deep_merge(cfg, self._load_yaml(self._config_path))

        if self._overrides:
            self._deep_merge(cfg, self._overrides)

        self._apply_env_overrides(cfg)

        self._logger.debug("compose() loaded config; keys: %s", list(cfg.keys()))
        return cfg

    def _default_config(self) -> dict[str, Any]:
        """
        Base defaults; all fields present so no KeyErrors downstream.
        """
        return {
            # Filesystem
            "projects_root": str(default_projects_root()),
            # External tool
            "ffmpeg_binary": "ffmpeg",
            "ffmpeg_timeout_s": 600,
            # Concurrency
            "batch_normalize": 200,  # Files normalized concurrently per batch
            "pool_spectrogram": 10,  # Extractor workers (also queue depth)
            "pool_loader": 100,  # Record loader workers (also queue depth)
            # Segmentation
            "silence_threshold_db": -30,
            "silence_min_duration_s": 0.5,
            # Spectrogram rendering
            "spectrogram_width": 1024,
            "spectrogram_height": 1024,
            # Cluster-count estimation
            "k_max": 10,
            "kmeans_iterations": 100,
            "kmeans_seed": None,  # None = OS entropy
            # Logging
            "log_level": "INFO",
            "log_dir": None,  # Optional directory for a rotating process log
        }

    def _deep_merge(self, a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
        """
        Recursively merge dict b into dict a (mutates a, returns it).
        """
        for k, v in b.items():
            if isinstance(v, dict) and isinstance(a.get(k), dict):
                self._deep_merge(a[k], v)
            else:
                a[k] = v
        return a

    def _load_yaml(self, path: str) -> dict[str, Any]:
        """
        Load a YAML file; returns {} if not found or invalid.
        """
        if not path or not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self._logger.warning("Ignoring unreadable config file %s: %s", path, e)
            return {}
        if not isinstance(loaded, dict):
            self._logger.warning("Ignoring config file %s: top level is not a mapping", path)
            return {}
        return loaded

    def _apply_env_overrides(self, cfg: dict[str, Any]) -> None:
        """
        Support environment overrides of the form:
          NEURALFORGE_POOL_SPECTROGRAM=4
          NEURALFORGE_PROJECTS_ROOT=/data/projects
          NEURALFORGE_KMEANS_SEED=7
        Only keys that already exist in the config are overridden.
        """
        for k, v in os.environ.items():
            if not k.startswith(ENV_PREFIX) or k == ENV_CONFIG_PATH:
                continue
            key = k[len(ENV_PREFIX) :].lower()
            if key not in cfg:
                continue
            cfg[key] = _parse_env_value(v)


def _parse_env_value(value: str) -> Any:
    """Parse numeric/bool/null types from an environment string."""
    lowered = value.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("null", "none", ""):
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value
