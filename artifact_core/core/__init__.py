"""Shared configuration and logging helpers."""

from .config import ConfigError, PipelineConfig
from .log import PACKAGE_LOGGER_NAME, configure_logging, preview, resolve_logger

__all__ = [
    "ConfigError",
    "PipelineConfig",
    "PACKAGE_LOGGER_NAME",
    "configure_logging",
    "preview",
    "resolve_logger",
]
