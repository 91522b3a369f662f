"""Runtime product constants.

Names and locations of the Edge WebView2 Runtime and its bundled installer.
"""

import os
from pathlib import Path

PRODUCT_NAME = "EdgeWebView"

INSTALLER_FILENAME = "MicrosoftEdgeWebview2Setup.exe"
INSTALLER_ARGUMENTS = ("/silent", "/install")

_PROGRAM_FILES_X86_FALLBACK = r"C:\Program Files (x86)"


def default_install_root() -> Path:
    """Return the directory holding one subdirectory per installed runtime build."""
    program_files = os.environ.get("ProgramFiles(x86)") or _PROGRAM_FILES_X86_FALLBACK
    return Path(program_files) / "Microsoft" / "EdgeWebView" / "Application"


__all__ = [
    "INSTALLER_ARGUMENTS",
    "INSTALLER_FILENAME",
    "PRODUCT_NAME",
    "default_install_root",
]
