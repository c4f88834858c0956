"""
Artifact Pipeline Configuration

Centralized configuration for the text-to-artifact pipeline: repair
prompting limits, model transport settings and placement defaults.

Values are resolved from environment variables at construction time and
can be overlaid from a YAML file.

Author: Nexus EE Design Team
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or is malformed."""

    def __init__(self, message: str, *, path: Optional[Union[str, Path]] = None):
        self.path = str(path) if path is not None else None
        full = message if self.path is None else f"{message} (file: {self.path})"
        super().__init__(full)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using {default}")
        return default


@dataclass
class PipelineConfig:
    """
    Configuration for the artifact pipeline.

    Controls:
    - Repair prompting (how much of the original response is re-sent)
    - Model transport (model id, sampling, timeout)
    - Placement defaults (offset from anchor, edge clamps, artifact width)
    """

    # ===== Repair Configuration =====
    repair_text_cap: int = field(
        default_factory=lambda: _env_int("ARTIFACT_REPAIR_TEXT_CAP", 2000)
    )

    # ===== LLM Configuration =====
    llm_model: str = field(
        default_factory=lambda: os.environ.get("ARTIFACT_LLM_MODEL", "anthropic/claude-opus-4.6")
    )
    llm_temperature: float = 0.2  # Reformatting should be close to deterministic
    llm_max_tokens: int = 4096
    llm_timeout: float = field(
        default_factory=lambda: _env_float("ARTIFACT_LLM_TIMEOUT", 120.0)
    )

    # ===== Placement Configuration =====
    placement_offset: float = 40.0
    placement_min_x: float = 0.0
    placement_min_y: float = 40.0  # Keeps artifacts from landing above the visible area
    artifact_width: float = 640.0

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PipelineConfig":
        """
        Build a config from environment defaults overlaid with a YAML file.

        Args:
            path: YAML file containing a flat mapping of field names to values.

        Returns:
            PipelineConfig with file values applied.

        Raises:
            ConfigError: If the file is missing, unparseable or not a mapping.
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigError("Config file not found", path=path) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}", path=path) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config root must be a mapping, got {type(data).__name__}", path=path
            )
        return cls().merged(data)

    def merged(self, overrides: Dict[str, Any]) -> "PipelineConfig":
        """Return a copy with known keys from ``overrides`` applied."""
        known = {f.name for f in fields(self)}
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if key not in known:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue
            values[key] = value
        return PipelineConfig(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
