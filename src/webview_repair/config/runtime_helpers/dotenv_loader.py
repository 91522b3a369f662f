"""Reads ``WEBVIEW_REPAIR_*`` defaults from ``.env`` files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from ..errors import ConfigurationError

_EXPORT_PREFIX = "export "
_QUOTES = ("'", '"')


class DotenvLoader:
    """``KEY=value`` lines; ``#`` comments, an ``export`` prefix and matching quotes are understood."""

    @staticmethod
    def load_from_file(path: Path) -> Dict[str, str]:
        """
        Load defaults from ``path``.

        Returns an empty mapping when the file does not exist. Later
        assignments to the same key override earlier ones, as a shell would.

        Raises:
            ConfigurationError: If the file exists but cannot be read
        """
        if not path.is_file():
            return {}
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigurationError.unreadable(path, str(exc)) from exc
        return DotenvLoader.parse_lines(text.splitlines())

    @staticmethod
    def parse_lines(lines: Iterable[str]) -> Dict[str, str]:
        values: Dict[str, str] = {}
        for line in lines:
            parsed = DotenvLoader._parse_assignment(line.strip())
            if parsed is not None:
                key, value = parsed
                values[key] = value
        return values

    @staticmethod
    def _parse_assignment(line: str) -> Optional[Tuple[str, str]]:
        if not line or line.startswith("#") or "=" not in line:
            return None
        if line.startswith(_EXPORT_PREFIX):
            line = line[len(_EXPORT_PREFIX) :].lstrip()

        key, raw_value = line.split("=", 1)
        key = key.strip()
        if not key:
            return None
        return key, DotenvLoader._unquote(raw_value.strip())

    @staticmethod
    def _unquote(value: str) -> str:
        if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
            return value[1:-1]
        # Unquoted values may carry a trailing " # comment"
        comment_at = value.find(" #")
        if comment_at != -1:
            value = value[:comment_at].rstrip()
        return value
