"""Command-line entry point.

Takes no arguments and always exits with status 0. Behaviour is controlled
through ``WEBVIEW_REPAIR_*`` environment variables.
"""

from __future__ import annotations

import logging

from .config import ConfigurationError, RepairSettings, load_repair_settings
from .logging_config import setup_logging
from .repair_run import run_repair

logger = logging.getLogger(__name__)


def main() -> int:
    config_error = None
    try:
        settings = load_repair_settings()
    except ConfigurationError as exc:  # Fall back to defaults  # policy_guard: allow-silent-handler
        config_error = exc
        settings = RepairSettings()

    setup_logging(verbose=settings.verbose, log_file=settings.log_file)
    if config_error is not None:
        logger.warning("Ignoring invalid configuration, using defaults: %s", config_error)

    run_repair(settings)
    return 0


__all__ = ["main"]
