"""Helper modules for runtime configuration."""

from .dotenv_loader import DotenvLoader
from .json_config_loader import JsonConfigLoader
from .list_normalizer import ListNormalizer

__all__ = [
    "DotenvLoader",
    "JsonConfigLoader",
    "ListNormalizer",
]
