from __future__ import annotations

import threading
from datetime import date, datetime, timedelta

import pytest

from src.attendance_tasks.attendance_tasks.attendance.service import AttendanceService
from src.attendance_tasks.attendance_tasks.common.pagination import PageRequest
from src.attendance_tasks.attendance_tasks.core.enums import AttendanceStatus
from src.attendance_tasks.attendance_tasks.core.exceptions import ConflictError, NotFoundError

USER = "user-1"


@pytest.fixture
def svc(attendance_repo):
    return AttendanceService(attendance_repo)


def test_checkin_creates_record_for_utc_date(svc, fixed_now):
    rec = svc.check_in(USER, now=fixed_now)

    assert rec.date == fixed_now.date()
    assert rec.checked_in_at == fixed_now
    assert rec.checked_out_at is None
    assert rec.status == AttendanceStatus.PRESENT


def test_second_checkin_same_day_conflicts(svc, attendance_repo, fixed_now):
    svc.check_in(USER, now=fixed_now)

    with pytest.raises(ConflictError):
        svc.check_in(USER, status=AttendanceStatus.LATE, now=fixed_now + timedelta(hours=2))

    # first record untouched
    assert attendance_repo.get_for_user_and_date(USER, fixed_now.date()).status == AttendanceStatus.PRESENT


def test_checkin_next_day_is_allowed(svc, fixed_now):
    svc.check_in(USER, now=fixed_now)
    rec = svc.check_in(USER, now=fixed_now + timedelta(days=1))

    assert rec.date == date(2025, 1, 16)


def test_concurrent_checkins_exactly_one_succeeds(svc, attendance_repo, fixed_now):
    barrier = threading.Barrier(2)
    outcomes: list[str] = []

    def attempt():
        barrier.wait()
        try:
            svc.check_in(USER, now=fixed_now)
            outcomes.append("ok")
        except ConflictError:
            outcomes.append("conflict")

    threads = [threading.Thread(target=attempt) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(outcomes) == ["conflict", "ok"]
    assert len(attendance_repo.all()) == 1


def test_checkout_sets_time_once(svc, fixed_now):
    svc.check_in(USER, notes="wfh", now=fixed_now)
    later = fixed_now + timedelta(hours=8)

    rec = svc.check_out(USER, now=later)
    assert rec.checked_out_at == later
    assert rec.notes == "wfh"

    with pytest.raises(NotFoundError):
        svc.check_out(USER, now=later + timedelta(hours=1))
    assert svc.get_today(USER, now=later).checked_out_at == later


def test_checkout_without_checkin_creates_nothing(svc, attendance_repo, fixed_now):
    with pytest.raises(NotFoundError):
        svc.check_out(USER, now=fixed_now)

    assert attendance_repo.all() == []


def test_get_today_returns_none_when_absent(svc, fixed_now):
    assert svc.get_today(USER, now=fixed_now) is None


def test_history_is_scoped_ranged_and_newest_first(svc, fixed_now):
    for days in range(5):
        svc.check_in(USER, now=fixed_now - timedelta(days=days))
    svc.check_in("someone-else", now=fixed_now)

    page = svc.history(
        USER,
        start_date=date(2025, 1, 12),
        end_date=date(2025, 1, 14),
        page=PageRequest(page=1, limit=2),
    )

    assert page.total == 3
    assert [r.date for r in page.items] == [date(2025, 1, 14), date(2025, 1, 13)]
    assert all(r.user_id == USER for r in page.items)


def test_history_second_page(svc, fixed_now):
    for days in range(3):
        svc.check_in(USER, now=datetime(2025, 1, 10 + days, 8, 0))

    page = svc.history(USER, page=PageRequest(page=2, limit=2))

    assert page.total == 3
    assert [r.date for r in page.items] == [date(2025, 1, 10)]
