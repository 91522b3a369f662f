"""Process names used by the process guardian.

Names are compared case-insensitively.
"""

WORKER_PROCESS_NAME = "msedgewebview2.exe"

# Core OS processes that are never terminated, even when they host a worker
PROTECTED_PROCESS_NAMES = frozenset(
    {
        "system",
        "system idle process",
        "registry",
        "smss.exe",
        "csrss.exe",
        "wininit.exe",
        "winlogon.exe",
        "services.exe",
        "lsass.exe",
        "svchost.exe",
        "explorer.exe",
        "dwm.exe",
        "sihost.exe",
        "fontdrvhost.exe",
        "taskhostw.exe",
        "runtimebroker.exe",
        "startmenuexperiencehost.exe",
        "searchhost.exe",
        "shellexperiencehost.exe",
    }
)

__all__ = ["PROTECTED_PROCESS_NAMES", "WORKER_PROCESS_NAME"]
