"""Environment configuration and structured logging setup."""
import logging
import os

import structlog

LOG_LEVEL = os.getenv("METATRACE_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("METATRACE_LOG_FORMAT", "json")
EXPORT_INDENT = int(os.getenv("METATRACE_EXPORT_INDENT", "2"))

# Defaults for a freshly created contributor profile
DEFAULT_LANGUAGE = os.getenv("METATRACE_DEFAULT_LANGUAGE", "en")
DEFAULT_REASONING_STYLE = os.getenv("METATRACE_REASONING_STYLE", "analytical")


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure structlog for a host process.

    Library modules only call ``structlog.get_logger()``; the host decides
    the renderer and level by calling this once at startup.
    """
    level = (level or LOG_LEVEL).upper()
    fmt = (fmt or LOG_FORMAT).lower()

    renderer = (
        structlog.dev.ConsoleRenderer()
        if fmt == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level, logging.INFO)
        ),
    )
