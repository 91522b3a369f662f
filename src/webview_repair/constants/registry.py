"""Registry locations and debugger hook constants.

All key paths are relative to HKEY_LOCAL_MACHINE and are opened through the
64-bit registry view.
"""

IMAGE_FILE_EXECUTION_OPTIONS_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion\Image File Execution Options"
DEBUGGER_VALUE_NAME = "Debugger"

# Executables whose debugger hook blocks the runtime or its installer
DEBUGGER_TARGET_EXECUTABLES = (
    "msedgewebview2.exe",
    "MicrosoftEdgeUpdate.exe",
    "MicrosoftEdgeWebview2Setup.exe",
    "MicrosoftEdgeUpdateSetup.exe",
)

# Debugger values written by "Edge removal" tools; environment references are
# expanded before comparison
DEBUGGER_BLOCK_LIST = (
    r"%SystemRoot%\System32\systray.exe",
    r"%SystemRoot%\SysWOW64\systray.exe",
    r"C:\Windows\System32\systray.exe",
    r"C:\Windows\SysWOW64\systray.exe",
)

UPDATE_CLIENT_REGISTRATION_KEY = r"SOFTWARE\WOW6432Node\Microsoft\Windows\CurrentVersion\Uninstall"

__all__ = [
    "DEBUGGER_BLOCK_LIST",
    "DEBUGGER_TARGET_EXECUTABLES",
    "DEBUGGER_VALUE_NAME",
    "IMAGE_FILE_EXECUTION_OPTIONS_KEY",
    "UPDATE_CLIENT_REGISTRATION_KEY",
]
