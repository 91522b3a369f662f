"""JSON configuration file loading utilities."""

from pathlib import Path
from typing import Any, Dict

import orjson

from ..errors import ConfigurationError


class JsonConfigLoader:
    """Loads environment defaults from a flat JSON object."""

    @staticmethod
    def load_from_file(path: Path) -> Dict[str, str]:
        """
        Load configuration from JSON file.

        Args:
            path: Path to JSON file

        Returns:
            Dictionary of environment variables (all values as strings)

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        if not path.exists():
            return {}

        try:
            payload = orjson.loads(path.read_bytes())
        except FileNotFoundError:  # policy_guard: allow-silent-handler
            return {}
        except orjson.JSONDecodeError as exc:
            raise ConfigurationError.unreadable(path, "not valid JSON") from exc
        except OSError as exc:
            raise ConfigurationError.unreadable(path, str(exc)) from exc

        if not isinstance(payload, dict):
            raise ConfigurationError(f"JSON config {path} must contain an object at the top level")

        return JsonConfigLoader._normalize_values(payload, path)

    @staticmethod
    def _normalize_values(payload: Dict[str, Any], path: Path) -> Dict[str, str]:
        """Normalize JSON scalars to strings; nested structures are rejected."""
        normalized: Dict[str, str] = {}

        for key, value in payload.items():
            if isinstance(value, (dict, list)):
                raise ConfigurationError(f"JSON config {path} must map environment names to scalar values (problematic key: {key})")

            if value is None:
                normalized[str(key)] = ""
            elif isinstance(value, bool):
                normalized[str(key)] = "true" if value else "false"
            else:
                normalized[str(key)] = str(value)

        return normalized
