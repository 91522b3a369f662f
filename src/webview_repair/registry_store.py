"""Registry access behind a small protocol.

``WindowsRegistryStore`` is the only module that touches ``winreg``; the
stages depend on :class:`RegistryStore` so tests can hand them an in-memory
store.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol

logger = logging.getLogger(__name__)


class RegistryStore(Protocol):
    """Minimal hierarchical key/value store used by the blocker clearer."""

    def read_value(self, key_path: str, value_name: str) -> Optional[str]:
        """Return the value as a string, or ``None`` when key or value is absent."""

    def delete_value(self, key_path: str, value_name: str) -> None:
        """Delete a value; raises ``FileNotFoundError`` when it is absent."""

    def list_subkeys(self, key_path: str) -> List[str]:
        """Return immediate subkey names, or an empty list when the key is absent."""

    def delete_key_tree(self, key_path: str) -> None:
        """Delete a key with all of its subkeys."""


def _import_winreg() -> Any:
    try:
        import winreg
    except ImportError as import_exc:
        raise RuntimeError("winreg is only available on Windows; cannot access the registry") from import_exc
    else:
        return winreg


class WindowsRegistryStore:
    """RegistryStore backed by ``HKEY_LOCAL_MACHINE`` through the 64-bit view."""

    def __init__(self, winreg_module: Any = None) -> None:
        self._winreg = winreg_module if winreg_module is not None else _import_winreg()
        self._hive = self._winreg.HKEY_LOCAL_MACHINE
        self._view = self._winreg.KEY_WOW64_64KEY

    def _open(self, key_path: str, access: int) -> Any:
        return self._winreg.OpenKey(self._hive, key_path, 0, access | self._view)

    def read_value(self, key_path: str, value_name: str) -> Optional[str]:
        try:
            with self._open(key_path, self._winreg.KEY_READ) as key:
                value, _value_type = self._winreg.QueryValueEx(key, value_name)
        except FileNotFoundError:  # policy_guard: allow-silent-handler
            return None
        if value is None:
            return None
        return str(value)

    def delete_value(self, key_path: str, value_name: str) -> None:
        with self._open(key_path, self._winreg.KEY_SET_VALUE) as key:
            self._winreg.DeleteValue(key, value_name)

    def list_subkeys(self, key_path: str) -> List[str]:
        try:
            key = self._open(key_path, self._winreg.KEY_READ)
        except FileNotFoundError:  # policy_guard: allow-silent-handler
            return []

        names: List[str] = []
        with key:
            index = 0
            while True:
                try:
                    names.append(self._winreg.EnumKey(key, index))
                except OSError:  # policy_guard: allow-silent-handler
                    # ERROR_NO_MORE_ITEMS ends the enumeration
                    break
                index += 1
        return names

    def delete_key_tree(self, key_path: str) -> None:
        for child in self.list_subkeys(key_path):
            self.delete_key_tree(f"{key_path}\\{child}")
        parent_path, _, leaf = key_path.rpartition("\\")
        with self._open(parent_path, self._winreg.KEY_WRITE) as parent:
            self._winreg.DeleteKeyEx(parent, leaf, self._view, 0)
        logger.debug("Deleted registry key HKLM\\%s", key_path)


__all__ = ["RegistryStore", "WindowsRegistryStore"]
