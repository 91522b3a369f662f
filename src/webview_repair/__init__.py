"""Repair utility for the Edge WebView2 Runtime.

Clears installer-blocking registry state, runs the bundled installer, stops
and later restarts the processes hosting the runtime, and removes superseded
runtime builds.
"""

from .config import RepairSettings, load_repair_settings
from .repair_run import STAGE_SEQUENCE, run_repair
from .run_report import RunReport

__all__ = ["RepairSettings", "RunReport", "STAGE_SEQUENCE", "load_repair_settings", "run_repair"]
