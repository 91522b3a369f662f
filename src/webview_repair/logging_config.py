"""
Centralized logging configuration.

The tool is silent by default: the console handler sits above ``CRITICAL``
so nothing reaches the terminal. Verbose mode lowers it to ``DEBUG``. An
optional log file receives ``INFO`` and above with the technical formatter,
truncated on each run.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Optional

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)
_UNKNOWN_LOGGER_NAME = "<unknown>"
SILENT_LEVEL = logging.CRITICAL + 1

_TECHNICAL_FORMAT = "%(asctime)s%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
_TECHNICAL_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _close_handlers(logger: logging.Logger, logger_name: Optional[str] = None) -> None:
    """Close all handlers for a logger, logging any errors."""
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as e:  # Best-effort cleanup operation  # policy_guard: allow-silent-handler
            safe_name = logger_name if logger_name else _UNKNOWN_LOGGER_NAME
            _MODULE_LOGGER.debug("Handler close failed for logger '%s': %s", safe_name, e)


def _reset_all_handlers(root_logger: logging.Logger) -> None:
    _close_handlers(root_logger)
    root_logger.handlers = []


def _build_console_handler(verbose: bool) -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(_TECHNICAL_FORMAT, _TECHNICAL_DATEFMT))
    console_handler.setLevel(logging.DEBUG if verbose else SILENT_LEVEL)
    return console_handler


def _configure_file_handler(log_file: Optional[Path]) -> Optional[logging.Handler]:
    if log_file is None:
        return None

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    except OSError as exc:  # Log file is optional  # policy_guard: allow-silent-handler
        _MODULE_LOGGER.debug("Could not open log file %s: %s", log_file, exc)
        return None

    file_handler.setFormatter(logging.Formatter(_TECHNICAL_FORMAT, _TECHNICAL_DATEFMT))
    file_handler.setLevel(logging.INFO)
    return file_handler


def setup_logging(*, verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure the root logger for a repair run"""

    with _config_lock:
        root_logger = logging.getLogger()
        _reset_all_handlers(root_logger)

        root_logger.addHandler(_build_console_handler(verbose))

        file_handler = _configure_file_handler(log_file)
        if file_handler:
            root_logger.addHandler(file_handler)

        root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)


__all__ = ["SILENT_LEVEL", "setup_logging"]
