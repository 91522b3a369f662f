"""Constants package for fixed names, paths and registry locations."""

from .processes import PROTECTED_PROCESS_NAMES, WORKER_PROCESS_NAME
from .registry import (
    DEBUGGER_BLOCK_LIST,
    DEBUGGER_TARGET_EXECUTABLES,
    DEBUGGER_VALUE_NAME,
    IMAGE_FILE_EXECUTION_OPTIONS_KEY,
    UPDATE_CLIENT_REGISTRATION_KEY,
)
from .runtime import (
    INSTALLER_ARGUMENTS,
    INSTALLER_FILENAME,
    PRODUCT_NAME,
    default_install_root,
)

__all__ = [
    "DEBUGGER_BLOCK_LIST",
    "DEBUGGER_TARGET_EXECUTABLES",
    "DEBUGGER_VALUE_NAME",
    "IMAGE_FILE_EXECUTION_OPTIONS_KEY",
    "INSTALLER_ARGUMENTS",
    "INSTALLER_FILENAME",
    "PRODUCT_NAME",
    "PROTECTED_PROCESS_NAMES",
    "UPDATE_CLIENT_REGISTRATION_KEY",
    "WORKER_PROCESS_NAME",
    "default_install_root",
]
