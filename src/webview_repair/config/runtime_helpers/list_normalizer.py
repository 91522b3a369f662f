"""Splitting of delimited settings such as extra protected process names."""

from __future__ import annotations

from typing import Callable, Iterable


class ListNormalizer:
    """Turns ``"a.exe, B.exe,,a.EXE"`` into ``("a.exe", "B.exe")``."""

    @staticmethod
    def split(raw_value: str, separator: str = ",") -> list[str]:
        """Split on ``separator`` and drop blank items; an empty separator keeps the value whole."""
        parts = raw_value.split(separator) if separator else [raw_value]
        return [item.strip() for item in parts if item.strip()]

    @staticmethod
    def unique(items: Iterable[str], key: Callable[[str], str] = str.casefold) -> tuple[str, ...]:
        # First spelling wins; Windows process names compare case-insensitively
        seen: set[str] = set()
        kept: list[str] = []
        for item in items:
            marker = key(item)
            if marker in seen:
                continue
            seen.add(marker)
            kept.append(item)
        return tuple(kept)
