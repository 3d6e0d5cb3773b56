from __future__ import annotations

from datetime import date

from structlog.testing import capture_logs

from src.worklog_system.worklog_system.core.enums import DayOutcome
from src.worklog_system.worklog_system.rollover.processor import DayRolloverProcessor

JUNE_1 = date(2025, 6, 1)
JUNE_2 = date(2025, 6, 2)


def test_unfinished_tasks_create_destination_entry(work_entries, clock):
    work_entries.seed("u1", JUNE_1, assigned=["T1", "T2"], completed=["T1"])

    outcome = DayRolloverProcessor(work_entries, clock=clock).process("u1", JUNE_1, JUNE_2)

    assert outcome == DayOutcome.MERGED
    dest = work_entries.entry("u1", JUNE_2)
    assert dest is not None
    assert dest.assigned_tasks == ("T2",)
    assert dest.completed_tasks == ()
    assert dest.is_absent is False
    assert dest.check_in_time is None and dest.check_out_time is None
    assert dest.updated_at == clock.now()


def test_same_or_reversed_dates_are_a_noop(work_entries, clock):
    work_entries.seed("u1", JUNE_2, assigned=["T1"])
    processor = DayRolloverProcessor(work_entries, clock=clock)

    assert processor.process("u1", JUNE_2, JUNE_2) == DayOutcome.SKIPPED
    assert processor.process("u1", JUNE_2, JUNE_1) == DayOutcome.SKIPPED
    assert work_entries.reads == []


def test_missing_source_entry_carries_nothing(work_entries, clock):
    outcome = DayRolloverProcessor(work_entries, clock=clock).process("u1", JUNE_1, JUNE_2)

    assert outcome == DayOutcome.NOTHING_TO_CARRY
    assert work_entries.entry("u1", JUNE_2) is None


def test_all_tasks_completed_does_not_create_destination(work_entries, clock):
    work_entries.seed("u1", JUNE_1, assigned=["T1"], completed=["T1"])

    outcome = DayRolloverProcessor(work_entries, clock=clock).process("u1", JUNE_1, JUNE_2)

    assert outcome == DayOutcome.NOTHING_TO_CARRY
    assert work_entries.entry("u1", JUNE_2) is None


def test_union_keeps_each_task_once(work_entries, clock):
    work_entries.seed("u1", JUNE_1, assigned=["T1", "T2", "T4"], completed=[])
    work_entries.seed("u1", JUNE_2, assigned=["T2", "T3"])

    outcome = DayRolloverProcessor(work_entries, clock=clock).process("u1", JUNE_1, JUNE_2)

    assert outcome == DayOutcome.MERGED
    merged = work_entries.entry("u1", JUNE_2).assigned_tasks
    assert sorted(merged) == ["T1", "T2", "T3", "T4"]
    assert len(merged) == len(set(merged))


def test_no_write_when_destination_already_has_all_unfinished(work_entries, clock):
    work_entries.seed("u1", JUNE_1, assigned=["T1", "T2"], completed=["T1"])
    before = work_entries.seed("u1", JUNE_2, assigned=["T2", "T3"])

    outcome = DayRolloverProcessor(work_entries, clock=clock).process("u1", JUNE_1, JUNE_2)

    assert outcome == DayOutcome.UNCHANGED
    assert work_entries.writes == []
    assert work_entries.entry("u1", JUNE_2) == before


def test_applying_same_day_twice_is_idempotent(work_entries, clock):
    work_entries.seed("u1", JUNE_1, assigned=["T1", "T2"], completed=[])
    processor = DayRolloverProcessor(work_entries, clock=clock)

    assert processor.process("u1", JUNE_1, JUNE_2) == DayOutcome.MERGED
    first = work_entries.entry("u1", JUNE_2)
    assert processor.process("u1", JUNE_1, JUNE_2) == DayOutcome.UNCHANGED

    assert work_entries.entry("u1", JUNE_2) == first
    assert len(work_entries.writes) == 1


def test_store_failure_is_logged_and_reported_as_failed_day(work_entries, clock):
    work_entries.seed("u1", JUNE_1, assigned=["T1"])
    work_entries.seed("u1", JUNE_2)
    work_entries.fail_update_for.add(JUNE_2)

    with capture_logs() as logs:
        processor = DayRolloverProcessor(work_entries, clock=clock)
        outcome = processor.process("u1", JUNE_1, JUNE_2)

    assert outcome == DayOutcome.FAILED
    failures = [e for e in logs if e["event"] == "rollover_day_failed"]
    assert len(failures) == 1
    assert failures[0]["user_id"] == "u1"
    assert failures[0]["from_date"] == "2025-06-01"
    assert failures[0]["to_date"] == "2025-06-02"
    assert failures[0]["log_level"] == "error"


def test_create_failure_abandons_the_day(work_entries, clock):
    work_entries.seed("u1", JUNE_1, assigned=["T1"])
    work_entries.fail_create_for.add(JUNE_2)

    outcome = DayRolloverProcessor(work_entries, clock=clock).process("u1", JUNE_1, JUNE_2)

    assert outcome == DayOutcome.FAILED
    assert work_entries.entry("u1", JUNE_2) is None
