"""
Logging helpers for the artifact pipeline.

Every module logs through ``logging.getLogger(__name__)``. Components the
pipeline drives also accept an injected logger so a host can route one
request's diagnostics separately; ``None`` means the module logger.
"""

import logging
from typing import Optional

PACKAGE_LOGGER_NAME = "artifact_core"


def resolve_logger(logger: Optional[logging.Logger], default: logging.Logger) -> logging.Logger:
    """Return the injected logger, or ``default`` when none was given."""
    return logger if logger is not None else default


def preview(text: str, limit: int = 2000) -> str:
    """Cap ``text`` for inclusion in log lines and error payloads."""
    if len(text) <= limit:
        return text
    return text[:limit] + f"... [{len(text) - limit} more chars]"


def configure_logging(level: int = logging.INFO) -> None:
    """Attach a stream handler to the package logger (for scripts and debugging)."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)
    if not any(isinstance(h, logging.StreamHandler) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        package_logger.addHandler(handler)
