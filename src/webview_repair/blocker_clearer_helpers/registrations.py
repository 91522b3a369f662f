"""Name matching for stale update-client registrations."""

from __future__ import annotations


def registration_matches(entry_name: str, product_name: str) -> bool:
    """Case-insensitive substring match; an empty product name matches nothing."""
    if not product_name:
        return False
    return product_name.casefold() in entry_name.casefold()


__all__ = ["registration_matches"]
