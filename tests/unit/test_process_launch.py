import subprocess
import sys

from webview_repair import process_launch


class _FakeStartupInfo:
    def __init__(self):
        self.dwFlags = 0
        self.wShowWindow = None


def test_no_options_outside_windows(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")

    assert process_launch.hidden_window_options() == {}


def test_windows_options_hide_console_and_window(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.setattr(subprocess, "STARTUPINFO", _FakeStartupInfo, raising=False)
    monkeypatch.setattr(subprocess, "STARTF_USESHOWWINDOW", 0x1, raising=False)

    options = process_launch.hidden_window_options()

    assert options["creationflags"] == process_launch.CREATE_NO_WINDOW
    assert options["startupinfo"].dwFlags & 0x1
    assert options["startupinfo"].wShowWindow == 0
