from __future__ import annotations

"""Settings dataclass for a single repair run."""


from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional

from ..constants import PROTECTED_PROCESS_NAMES, default_install_root
from .runtime import env_bool, env_list, env_path, env_seconds

FORCE_CLEAR_ENV = "WEBVIEW_REPAIR_FORCE_CLEAR"
VERBOSE_ENV = "WEBVIEW_REPAIR_VERBOSE"
LOG_FILE_ENV = "WEBVIEW_REPAIR_LOG_FILE"
REPORT_PATH_ENV = "WEBVIEW_REPAIR_REPORT_PATH"
INSTALLER_DIR_ENV = "WEBVIEW_REPAIR_INSTALLER_DIR"
INSTALL_ROOT_ENV = "WEBVIEW_REPAIR_INSTALL_ROOT"
INSTALLER_TIMEOUT_ENV = "WEBVIEW_REPAIR_INSTALLER_TIMEOUT_SECONDS"
EXTRA_PROTECTED_ENV = "WEBVIEW_REPAIR_EXTRA_PROTECTED"


@dataclass(frozen=True)
class RepairSettings:
    force_clear: bool = False
    verbose: bool = False
    log_file: Optional[Path] = None
    report_path: Optional[Path] = None
    installer_dir: Optional[Path] = None
    install_root: Path = field(default_factory=default_install_root)
    installer_timeout_seconds: Optional[int] = None
    protected_processes: FrozenSet[str] = PROTECTED_PROCESS_NAMES


def load_repair_settings() -> RepairSettings:
    """Build settings from the environment (and .env / JSON defaults).

    Raises:
        ConfigurationError: If any variable is present but malformed.
    """
    extra_protected = env_list(EXTRA_PROTECTED_ENV, or_value=()) or ()
    protected = PROTECTED_PROCESS_NAMES | {name.casefold() for name in extra_protected}

    return RepairSettings(
        force_clear=bool(env_bool(FORCE_CLEAR_ENV, or_value=False)),
        verbose=bool(env_bool(VERBOSE_ENV, or_value=False)),
        log_file=env_path(LOG_FILE_ENV),
        report_path=env_path(REPORT_PATH_ENV),
        installer_dir=env_path(INSTALLER_DIR_ENV),
        install_root=env_path(INSTALL_ROOT_ENV) or default_install_root(),
        installer_timeout_seconds=env_seconds(INSTALLER_TIMEOUT_ENV),
        protected_processes=frozenset(protected),
    )


__all__ = [
    "EXTRA_PROTECTED_ENV",
    "FORCE_CLEAR_ENV",
    "INSTALLER_DIR_ENV",
    "INSTALLER_TIMEOUT_ENV",
    "INSTALL_ROOT_ENV",
    "LOG_FILE_ENV",
    "REPORT_PATH_ENV",
    "RepairSettings",
    "VERBOSE_ENV",
    "load_repair_settings",
]
