from __future__ import annotations

"""Environment-backed settings lookups.

A variable is taken from the process environment first. When it is unset or
blank, the first ``.env`` file and then the first JSON defaults file that
define it supply the value. Files are read once per process; tests reset the
cache with :func:`reset_default_values`.
"""


import os
from pathlib import Path
from typing import Callable, Optional, Sequence, TypeVar

from .errors import ConfigurationError

T = TypeVar("T")

_TRUE_VALUES = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"0", "false", "f", "no", "n", "off"})

_DOTENV_CANDIDATES = (Path(".env"), Path.home() / ".env")
_JSON_ENV_CANDIDATES = (Path("config/webview_repair.json"), Path.home() / ".webview_repair.json")

_DEFAULT_VALUES: dict[str, str] | None = None


def _load_default_values() -> dict[str, str]:
    from .runtime_helpers import DotenvLoader, JsonConfigLoader

    global _DEFAULT_VALUES
    if _DEFAULT_VALUES is not None:
        return _DEFAULT_VALUES

    defaults: dict[str, str] = {}
    for path in _DOTENV_CANDIDATES:
        for key, value in DotenvLoader.load_from_file(path).items():
            defaults.setdefault(key, value)
    for path in _JSON_ENV_CANDIDATES:
        for key, value in JsonConfigLoader.load_from_file(path).items():
            defaults.setdefault(key, value)

    _DEFAULT_VALUES = defaults
    return defaults


def reset_default_values() -> None:
    """Forget cached file defaults so the next lookup re-reads them."""
    global _DEFAULT_VALUES
    _DEFAULT_VALUES = None


def _lookup(name: str, *, strip: bool) -> Optional[str]:
    value = os.getenv(name)
    if value is not None and strip:
        value = value.strip()
    if value:
        return value

    configured = _load_default_values().get(name)
    if configured is not None and strip:
        configured = configured.strip()
    return configured or None


def _parse(name: str, raw: str, parser: Callable[[str], T], expected: str) -> T:
    try:
        return parser(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError.malformed(name, raw, expected) from exc


def env_str(name: str, or_value: str | None = None, *, required: bool = False, strip: bool = True) -> str | None:
    """Fetch a non-blank string setting."""
    value = _lookup(name, strip=strip)
    if value is None:
        if required:
            raise ConfigurationError.unset(name)
        return or_value
    return value


def env_int(name: str, or_value: int | None = None, *, required: bool = False) -> int | None:
    raw = env_str(name, required=required and or_value is None)
    if raw is None:
        return or_value
    return _parse(name, raw, int, "an integer")


def env_bool(name: str, or_value: bool | None = None, *, required: bool = False) -> bool | None:
    """Fetch a flag; accepts the usual yes/no spellings in any case."""
    raw = env_str(name, required=required and or_value is None)
    if raw is None:
        return or_value

    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError.malformed(name, raw, f"one of {sorted(_TRUE_VALUES | _FALSE_VALUES)}")


def env_list(
    name: str,
    *,
    or_value: Sequence[str] | None = None,
    separator: str = ",",
    required: bool = False,
) -> tuple[str, ...] | None:
    """Fetch a delimited list; blank items and case-insensitive repeats are dropped."""
    from .runtime_helpers import ListNormalizer

    raw = env_str(name, required=required and not or_value)
    if raw is None:
        return None if or_value is None else tuple(or_value)

    items = ListNormalizer.unique(ListNormalizer.split(raw, separator))
    if not items and required:
        raise ConfigurationError.malformed(name, raw, "a non-empty list")
    return items


def env_seconds(name: str, or_value: int | None = None, *, required: bool = False) -> int | None:
    """Fetch a non-negative duration in whole seconds."""
    value = env_int(name, or_value=or_value, required=required)
    if value is not None and value < 0:
        raise ConfigurationError.malformed(name, str(value), "a non-negative number of seconds")
    return value


def env_path(name: str, or_value: Path | None = None) -> Path | None:
    """Fetch a path with environment variables and ``~`` expanded."""
    raw = env_str(name)
    if raw is None:
        return or_value
    return _parse(name, raw, lambda value: Path(os.path.expandvars(value)).expanduser(), "a path")


__all__ = [
    "ConfigurationError",
    "env_bool",
    "env_int",
    "env_list",
    "env_path",
    "env_seconds",
    "env_str",
    "reset_default_values",
]
