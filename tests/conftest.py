from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Optional

import pytest

from src.worklog_system.worklog_system.common.datetime_utils import CivilClock
from src.worklog_system.worklog_system.core.constants import EPOCH_SENTINEL
from src.worklog_system.worklog_system.core.exceptions import StoreReadError, StoreWriteError
from src.worklog_system.worklog_system.rollover.model import RolloverRun, RolloverState
from src.worklog_system.worklog_system.users.model import User
from src.worklog_system.worklog_system.work_entries.model import WorkEntry


class InMemoryUsers:
    def __init__(self, users: list[User] | None = None):
        self.users = list(users or [])
        self.fail = False

    def list_active(self):
        if self.fail:
            raise StoreReadError("users unavailable")
        return [u for u in self.users if u.is_active]


class InMemoryWorkEntries:
    """Work entries keyed by (user_id, work_date), with failure injection."""

    def __init__(self):
        self._by_user_date: dict[tuple[str, date], WorkEntry] = {}
        self._id = 0
        self.reads: list[tuple[str, date]] = []
        self.writes: list[tuple[int, tuple[str, ...]]] = []
        self.fail_update_for: set[date] = set()
        self.fail_read_for: set[date] = set()
        self.fail_create_for: set[date] = set()

    def seed(self, user_id: str, work_date: date, *, assigned=(), completed=()) -> WorkEntry:
        self._id += 1
        entry = WorkEntry(
            entry_id=self._id,
            user_id=user_id,
            work_date=work_date,
            assigned_tasks=tuple(assigned),
            completed_tasks=tuple(completed),
        )
        self._by_user_date[(user_id, work_date)] = entry
        return entry

    def entry(self, user_id: str, work_date: date) -> Optional[WorkEntry]:
        return self._by_user_date.get((user_id, work_date))

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[WorkEntry]:
        self.reads.append((user_id, work_date))
        if work_date in self.fail_read_for:
            raise StoreReadError(f"read failed for {work_date}")
        return self._by_user_date.get((user_id, work_date))

    def create(self, *, user_id: str, work_date: date) -> WorkEntry:
        if work_date in self.fail_create_for:
            raise StoreWriteError(f"create failed for {work_date}")
        existing = self._by_user_date.get((user_id, work_date))
        if existing:
            return existing
        return self.seed(user_id, work_date)

    def update_assigned_tasks(self, *, entry_id: int, assigned_tasks, updated_at: datetime) -> WorkEntry:
        for key, entry in list(self._by_user_date.items()):
            if entry.entry_id != entry_id:
                continue
            if entry.work_date in self.fail_update_for:
                raise StoreWriteError(f"update failed for {entry.work_date}")
            updated = replace(entry, assigned_tasks=tuple(assigned_tasks), updated_at=updated_at)
            self._by_user_date[key] = updated
            self.writes.append((entry_id, tuple(assigned_tasks)))
            return updated
        raise StoreWriteError(f"entry {entry_id} not found")

    def snapshot(self) -> dict:
        return dict(self._by_user_date)


class InMemoryRolloverStates:
    def __init__(self):
        self.states: dict[str, date] = {}
        self.updates: list[tuple[str, date]] = []
        self.fail_read_for: set[str] = set()
        self.fail_create_for: set[str] = set()
        self.fail_update_for: set[str] = set()

    def get_or_create(self, user_id: str) -> RolloverState:
        if user_id in self.fail_read_for:
            raise StoreReadError(f"state read failed for {user_id}")
        if user_id not in self.states:
            if user_id in self.fail_create_for:
                raise StoreWriteError(f"state create failed for {user_id}")
            self.states[user_id] = EPOCH_SENTINEL
        return RolloverState(user_id=user_id, last_rollover_date=self.states[user_id])

    def update(self, user_id: str, last_rollover_date: date) -> None:
        if user_id in self.fail_update_for:
            raise StoreWriteError(f"state update failed for {user_id}")
        self.states[user_id] = last_rollover_date
        self.updates.append((user_id, last_rollover_date))


class InMemoryRolloverRuns:
    def __init__(self):
        self.runs: list[RolloverRun] = []
        self.fail = False

    def append(self, run: RolloverRun) -> None:
        if self.fail:
            raise StoreWriteError("run log unavailable")
        self.runs.append(run)

    def latest(self) -> Optional[RolloverRun]:
        if self.fail:
            raise StoreReadError("run log unavailable")
        return self.runs[-1] if self.runs else None


@pytest.fixture
def make_clock():
    """Build a clock pinned to a UTC instant given as datetime(...) arguments."""

    def _make(*args) -> CivilClock:
        instant = datetime(*args, tzinfo=timezone.utc)
        return CivilClock(source=lambda: instant)

    return _make


@pytest.fixture
def fixed_now() -> datetime:
    # 2025-06-02 00:15 at +05:30
    return datetime(2025, 6, 1, 18, 45, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now) -> CivilClock:
    return CivilClock(source=lambda: fixed_now)


@pytest.fixture
def work_entries() -> InMemoryWorkEntries:
    return InMemoryWorkEntries()


@pytest.fixture
def states() -> InMemoryRolloverStates:
    return InMemoryRolloverStates()


@pytest.fixture
def runs() -> InMemoryRolloverRuns:
    return InMemoryRolloverRuns()


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers([User(user_id="u1", username="alice")])
