"""Launch options that keep child processes invisible on Windows."""

from __future__ import annotations

import subprocess
import sys
from typing import Any, Dict

CREATE_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0x08000000)
_SW_HIDE = 0


def hidden_window_options() -> Dict[str, Any]:
    """Return ``subprocess`` keyword arguments that suppress console and GUI windows."""
    if sys.platform != "win32":
        return {}

    options: Dict[str, Any] = {"creationflags": CREATE_NO_WINDOW}
    startupinfo = subprocess.STARTUPINFO()
    startupinfo.dwFlags |= subprocess.STARTF_USESHOWWINDOW
    startupinfo.wShowWindow = _SW_HIDE
    options["startupinfo"] = startupinfo
    return options


__all__ = ["CREATE_NO_WINDOW", "hidden_window_options"]
