import subprocess
import sys
from types import SimpleNamespace

import orjson
import pytest

from webview_repair import blocker_clearer, installer_invoker, process_restorer, repair_run
from webview_repair.config import RepairSettings
from webview_repair.constants import (
    DEBUGGER_VALUE_NAME,
    IMAGE_FILE_EXECUTION_OPTIONS_KEY,
    INSTALLER_FILENAME,
    UPDATE_CLIENT_REGISTRATION_KEY,
)
from webview_repair.outcome import OutcomeStatus, StageResult
from webview_repair.process_guardian_helpers import ParentProcessRecord

WEBVIEW_HOOK = f"{IMAGE_FILE_EXECUTION_OPTIONS_KEY}\\msedgewebview2.exe"


@pytest.fixture
def machine(tmp_path, fake_registry, process_table, monkeypatch):
    """A machine with a blocked runtime, two old builds and a running host app."""
    install_root = tmp_path / "Application"
    for version in ("109.0.1518.140", "119.0.2151.97", "120.0.2210.91"):
        (install_root / version).mkdir(parents=True)

    fake_registry.set_value(WEBVIEW_HOOK, DEBUGGER_VALUE_NAME, "C:\\Windows\\System32\\systray.exe")
    fake_registry.add_key(f"{UPDATE_CLIENT_REGISTRATION_KEY}\\Microsoft EdgeWebView")

    process_table.add(4, "explorer.exe")
    process_table.add(100, "HostApp.exe", cmdline=["C:\\App\\HostApp.exe", "--tray"])
    process_table.add(201, "msedgewebview2.exe", parent_pid=100)
    process_table.add(202, "msedgewebview2.exe", parent_pid=100)
    process_table.add(203, "msedgewebview2.exe", parent_pid=4)

    launched = []

    def fake_popen(command, **kwargs):
        launched.append(command)
        process_table.events.append(f"launch:{command}")
        return object()

    monkeypatch.setattr(process_restorer.subprocess, "Popen", fake_popen)

    bundle_dir = tmp_path / "bundle"
    bundle_dir.mkdir()
    settings = RepairSettings(install_root=install_root, installer_dir=bundle_dir)
    return SimpleNamespace(
        settings=settings,
        registry=fake_registry,
        table=process_table,
        install_root=install_root,
        bundle_dir=bundle_dir,
        launched=launched,
    )


def test_full_run_visits_every_stage_in_order(machine):
    report = repair_run.run_repair(machine.settings, registry=machine.registry)

    assert tuple(report.stage_names) == repair_run.STAGE_SEQUENCE
    assert machine.registry.read_value(WEBVIEW_HOOK, DEBUGGER_VALUE_NAME) is None
    assert machine.registry.list_subkeys(UPDATE_CLIENT_REGISTRATION_KEY) == []
    assert [entry.name for entry in machine.install_root.iterdir()] == ["120.0.2210.91"]
    assert report.parents == [ParentProcessRecord(name="HostApp.exe", pid=100, command_line="C:\\App\\HostApp.exe --tray")]
    assert machine.table.killed_pids() == [201, 202, 100]
    assert machine.table.processes[4].alive
    assert machine.table.processes[203].alive
    assert machine.launched == ["C:\\App\\HostApp.exe --tray"]


def test_missing_installer_skips_install_only(machine):
    report = repair_run.run_repair(machine.settings, registry=machine.registry)

    install = report.stage(installer_invoker.STAGE_NAME)
    assert [o.status for o in install.outcomes] == [OutcomeStatus.SKIPPED]
    assert report.count(OutcomeStatus.FAILED) == 0


def test_installer_finishes_before_any_process_is_killed(machine, monkeypatch):
    (machine.bundle_dir / INSTALLER_FILENAME).write_bytes(b"MZ")

    def fake_run(command, **kwargs):
        machine.table.events.append("install")
        return SimpleNamespace(returncode=0)

    monkeypatch.setattr(installer_invoker.subprocess, "run", fake_run)

    repair_run.run_repair(machine.settings, registry=machine.registry)

    assert machine.table.events[0] == "install"
    assert machine.table.events[-1] == "launch:C:\\App\\HostApp.exe --tray"


def test_run_without_workers_still_cleans_up(machine):
    for pid in (201, 202, 203):
        machine.table.processes[pid].alive = False

    report = repair_run.run_repair(machine.settings, registry=machine.registry)

    assert report.parents == []
    assert machine.launched == []
    assert machine.registry.read_value(WEBVIEW_HOOK, DEBUGGER_VALUE_NAME) is None
    assert [entry.name for entry in machine.install_root.iterdir()] == ["120.0.2210.91"]


def test_second_run_has_no_further_effects(machine):
    repair_run.run_repair(machine.settings, registry=machine.registry)
    killed_after_first = list(machine.table.killed_pids())

    report = repair_run.run_repair(machine.settings, registry=machine.registry)

    assert report.count(OutcomeStatus.OK) == 0
    assert report.parents == []
    assert machine.table.killed_pids() == killed_after_first
    assert machine.launched == ["C:\\App\\HostApp.exe --tray"]


def test_stage_exception_does_not_abort_the_run(machine, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("registry unavailable")

    monkeypatch.setattr(blocker_clearer, "clear_blockers", explode)

    report = repair_run.run_repair(machine.settings, registry=machine.registry)

    assert tuple(report.stage_names) == repair_run.STAGE_SEQUENCE
    failed = report.stage(blocker_clearer.STAGE_NAME).outcomes
    assert failed[0].status is OutcomeStatus.FAILED
    assert "registry unavailable" in failed[0].detail
    assert [entry.name for entry in machine.install_root.iterdir()] == ["120.0.2210.91"]


def test_missing_psutil_is_absorbed(machine, monkeypatch):
    monkeypatch.setitem(sys.modules, "psutil", None)

    report = repair_run.run_repair(machine.settings, registry=machine.registry)

    assert report.stage("capture_and_kill_workers").outcomes[0].status is OutcomeStatus.FAILED
    assert report.parents == []
    assert [entry.name for entry in machine.install_root.iterdir()] == ["120.0.2210.91"]


@pytest.mark.skipif(sys.platform == "win32", reason="winreg exists on Windows")
def test_default_registry_unavailable_off_windows(machine):
    report = repair_run.run_repair(machine.settings)

    assert report.stage(blocker_clearer.STAGE_NAME).outcomes[0].status is OutcomeStatus.FAILED
    assert tuple(report.stage_names) == repair_run.STAGE_SEQUENCE


def test_report_written_when_configured(machine, tmp_path):
    report_path = tmp_path / "report.json"
    settings = RepairSettings(
        install_root=machine.settings.install_root,
        installer_dir=machine.settings.installer_dir,
        report_path=report_path,
    )

    repair_run.run_repair(settings, registry=machine.registry)

    payload = orjson.loads(report_path.read_bytes())
    assert [stage["stage"] for stage in payload["stages"]] == list(repair_run.STAGE_SEQUENCE)
    assert payload["parents"][0]["pid"] == 100


def test_captured_parents_are_handed_to_kill_and_restore(machine, monkeypatch):
    record = ParentProcessRecord(name="Other.exe", pid=300, command_line="C:\\Other.exe")
    seen = {}

    def fake_capture(**kwargs):
        return [record], StageResult("capture_and_kill_workers")

    def fake_kill(records):
        seen["kill"] = list(records)
        return StageResult("kill_parents")

    def fake_restore(records):
        seen["restore"] = list(records)
        return StageResult("restore_parents")

    monkeypatch.setattr(repair_run.process_guardian, "capture_and_kill_workers", fake_capture)
    monkeypatch.setattr(repair_run.process_guardian, "kill_parents", fake_kill)
    monkeypatch.setattr(repair_run.process_restorer, "restore_parents", fake_restore)

    report = repair_run.run_repair(machine.settings, registry=machine.registry)

    assert seen == {"kill": [record], "restore": [record]}
    assert report.parents == [record]
