"""Configuration helpers and the run settings dataclass."""

from .errors import ConfigurationError
from .runtime import (
    env_bool,
    env_int,
    env_list,
    env_path,
    env_seconds,
    env_str,
    reset_default_values,
)
from .settings import RepairSettings, load_repair_settings

__all__ = [
    "ConfigurationError",
    "RepairSettings",
    "env_bool",
    "env_int",
    "env_list",
    "env_path",
    "env_seconds",
    "env_str",
    "load_repair_settings",
    "reset_default_values",
]
