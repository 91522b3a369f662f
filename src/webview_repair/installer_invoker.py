"""Run the installer bundled next to this program and wait for it."""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import Optional, Sequence

from .constants import INSTALLER_ARGUMENTS, INSTALLER_FILENAME
from .outcome import ActionOutcome, StageResult
from .process_launch import hidden_window_options

STAGE_NAME = "install"

logger = logging.getLogger(__name__)


def resolve_program_dir(argv: Optional[Sequence[str]] = None) -> Path:
    """Return the directory the running program lives in.

    A frozen build reports its own executable. Otherwise the invoking
    command's path (``argv[0]``, or ``argv[0]`` plus ``.exe`` for a
    console-script launcher) is used when it points at a real file, and the
    package directory is the last resort (``python -c``, embedded interpreters).
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent

    args = sys.argv if argv is None else argv
    if args:
        invoked = args[0]
        if invoked and invoked not in ("-c", "-m"):
            candidate = Path(invoked)
            # Console-script launchers report their own path without ".exe"
            for launcher in (candidate, Path(invoked + ".exe")):
                if launcher.is_file():
                    return launcher.resolve().parent

    return Path(__file__).resolve().parent


def installer_path(installer_dir: Optional[Path] = None, argv: Optional[Sequence[str]] = None) -> Path:
    base_dir = installer_dir if installer_dir is not None else resolve_program_dir(argv)
    return base_dir / INSTALLER_FILENAME


def invoke_installer(
    *,
    installer_dir: Optional[Path] = None,
    timeout_seconds: Optional[int] = None,
    argv: Optional[Sequence[str]] = None,
) -> StageResult:
    """Run the installer silently; a missing installer is skipped, the exit code is not checked."""
    result = StageResult(STAGE_NAME)
    path = installer_path(installer_dir, argv)

    if not path.is_file():
        logger.debug("Installer not found at %s; skipping installation", path)
        result.add(ActionOutcome.skipped(STAGE_NAME, "run_installer", str(path), "installer not found"))
        return result

    command = [str(path), *INSTALLER_ARGUMENTS]
    logger.info("Running installer: %s", " ".join(command))
    try:
        completed = subprocess.run(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
            timeout=timeout_seconds,
            **hidden_window_options(),
        )
    except subprocess.TimeoutExpired:  # policy_guard: allow-silent-handler
        logger.warning("Installer did not exit within %ss and was killed", timeout_seconds)
        result.add(ActionOutcome.failed(STAGE_NAME, "run_installer", str(path), f"timed out after {timeout_seconds}s"))
        return result
    except OSError as exc:  # policy_guard: allow-silent-handler
        result.add(ActionOutcome.failed(STAGE_NAME, "run_installer", str(path), str(exc)))
        return result

    logger.info("Installer exited with code %s", completed.returncode)
    result.add(ActionOutcome.ok(STAGE_NAME, "run_installer", str(path), f"exit code {completed.returncode}"))
    return result


__all__ = ["STAGE_NAME", "installer_path", "invoke_installer", "resolve_program_dir"]
