from __future__ import annotations

"""Exception raised for unusable ``WEBVIEW_REPAIR_*`` settings."""


class ConfigurationError(RuntimeError):
    """A setting is required but absent, malformed, or its defaults file is unreadable."""

    @classmethod
    def unset(cls, name: str) -> "ConfigurationError":
        return cls(f"Required setting {name!r} is not set")

    @classmethod
    def malformed(cls, name: str, raw_value: str, expected: str) -> "ConfigurationError":
        """Create error for a value that does not parse as ``expected``."""
        return cls(f"Setting {name!r} must be {expected} (got {raw_value!r})")

    @classmethod
    def unreadable(cls, path: object, reason: str = "") -> "ConfigurationError":
        msg = f"Cannot read configuration defaults from {path}"
        if reason:
            msg += f": {reason}"
        return cls(msg)


__all__ = ["ConfigurationError"]
