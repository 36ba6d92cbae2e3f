"""Configuration module."""

from lounge_curator.config.logging import (
    bind_run_context,
    configure_logging,
    get_logger,
)
from lounge_curator.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "bind_run_context",
    "configure_logging",
    "get_logger",
    "get_settings",
]
