from webview_repair import process_guardian
from webview_repair.outcome import OutcomeStatus
from webview_repair.process_guardian_helpers import ParentProcessRecord


def _shared_parent_tree(table):
    table.add(4, "explorer.exe")
    table.add(100, "HostApp.exe", cmdline=["C:\\App\\HostApp.exe", "--background"])
    table.add(201, "msedgewebview2.exe", parent_pid=100)
    table.add(202, "msedgewebview2.exe", parent_pid=100)
    table.add(203, "msedgewebview2.exe", parent_pid=4)


def test_shared_parent_recorded_once_and_protected_parent_untouched(process_table):
    _shared_parent_tree(process_table)

    records, stage = process_guardian.capture_and_kill_workers()

    assert records == [ParentProcessRecord(name="HostApp.exe", pid=100, command_line="C:\\App\\HostApp.exe --background")]
    assert process_table.killed_pids() == [201, 202]
    assert process_table.processes[203].alive
    assert stage.count(OutcomeStatus.SKIPPED) == 1

    parent_stage = process_guardian.kill_parents(records)

    assert process_table.killed_pids() == [201, 202, 100]
    assert process_table.processes[4].alive
    assert process_table.processes[4].kill_calls == 0
    assert parent_stage.count(OutcomeStatus.OK) == 1


def test_worker_without_parent_is_skipped(process_table):
    process_table.add(300, "msedgewebview2.exe", parent_pid=None)
    process_table.add(301, "msedgewebview2.exe", parent_pid=999)

    records, stage = process_guardian.capture_and_kill_workers()

    assert records == []
    assert process_table.killed_pids() == []
    assert [o.detail for o in stage.outcomes] == ["no resolvable parent", "no resolvable parent"]


def test_worker_hosted_by_worker_is_killed_without_record(process_table):
    process_table.add(4, "explorer.exe")
    process_table.add(300, "msedgewebview2.exe", parent_pid=4)
    process_table.add(301, "msedgewebview2.exe", parent_pid=300)

    records, _stage = process_guardian.capture_and_kill_workers()

    assert records == []
    assert process_table.killed_pids() == [301]
    assert process_table.processes[300].alive


def test_no_workers_means_nothing_to_do(process_table):
    process_table.add(100, "HostApp.exe")

    records, stage = process_guardian.capture_and_kill_workers()

    assert records == []
    assert stage.outcomes == []
    assert process_table.killed_pids() == []


def test_custom_protected_set_is_honoured(process_table):
    process_table.add(100, "Kiosk.exe", cmdline=["kiosk.exe"])
    process_table.add(201, "msedgewebview2.exe", parent_pid=100)

    records, _stage = process_guardian.capture_and_kill_workers(protected=frozenset({"kiosk.exe"}))

    assert records == []
    assert process_table.processes[201].alive


def test_worker_kill_failure_does_not_stop_the_scan(process_table):
    _shared_parent_tree(process_table)
    process_table.processes[201].kill_error = process_table.module.AccessDenied(201)

    records, stage = process_guardian.capture_and_kill_workers()

    assert [r.pid for r in records] == [100]
    assert process_table.killed_pids() == [202]
    assert stage.count(OutcomeStatus.FAILED) == 1


def test_parent_without_readable_command_line_is_still_recorded(process_table):
    parent = process_table.add(100, "HostApp.exe", cmdline=["HostApp.exe"])
    parent.cmdline_error = process_table.module.AccessDenied(100)
    process_table.add(201, "msedgewebview2.exe", parent_pid=100)

    records, _stage = process_guardian.capture_and_kill_workers()

    assert records == [ParentProcessRecord(name="HostApp.exe", pid=100, command_line=None)]


def test_kill_parents_treats_exited_parent_as_success(process_table):
    records = [ParentProcessRecord(name="HostApp.exe", pid=100, command_line="HostApp.exe")]

    stage = process_guardian.kill_parents(records)

    assert stage.outcomes[0].status is OutcomeStatus.OK
    assert stage.outcomes[0].detail == "already exited"


def test_kill_parents_skips_reused_pid(process_table):
    process_table.add(100, "Unrelated.exe")
    records = [ParentProcessRecord(name="HostApp.exe", pid=100, command_line="HostApp.exe")]

    stage = process_guardian.kill_parents(records)

    assert stage.outcomes[0].status is OutcomeStatus.SKIPPED
    assert process_table.processes[100].alive


def test_kill_parents_kills_each_pid_once(process_table):
    process_table.add(100, "HostApp.exe")
    record = ParentProcessRecord(name="HostApp.exe", pid=100, command_line="HostApp.exe")

    process_guardian.kill_parents([record, record])

    assert process_table.processes[100].kill_calls == 1


def test_kill_parents_with_no_records_is_empty():
    assert process_guardian.kill_parents([]).outcomes == []
