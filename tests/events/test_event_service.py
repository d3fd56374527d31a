from __future__ import annotations

from datetime import date

import pytest

from src.staffdesk.staffdesk.core.enums import Role
from src.staffdesk.staffdesk.core.exceptions import AuthorizationError, ValidationError
from src.staffdesk.staffdesk.events import service as event_module
from tests.fakes import add_user, register_company


def test_manager_creates_event_and_is_recorded_as_creator(container):
    admin = register_company(container)
    manager = add_user(container, admin, "mia", Role.MANAGER)

    event = container.event_service.create_event(
        manager, {"title": "Town hall", "startDate": "2024-03-01", "endDate": "2024-03-01"}
    )

    assert event.created_by == manager.user_id
    assert container.repos.activity.actions(admin.company_id)[-1] == "Event Created"


def test_user_cannot_create_event(container):
    admin = register_company(container)
    user = add_user(container, admin, "ursula", Role.USER)
    with pytest.raises(AuthorizationError):
        container.event_service.create_event(user, {"title": "Party", "startDate": "2024-03-01", "endDate": "2024-03-01"})


def test_same_day_end_time_before_start_rejected(container):
    admin = register_company(container)
    with pytest.raises(ValidationError) as exc:
        container.event_service.create_event(
            admin,
            {"title": "Standup", "startDate": "2024-03-01", "endDate": "2024-03-01", "startTime": "10:00", "endTime": "09:30"},
        )
    assert exc.value.errors[0]["field"] == "endTime"


def test_upcoming_only_returns_future_events(container, monkeypatch):
    admin = register_company(container)
    monkeypatch.setattr(event_module, "today_local", lambda: date(2024, 3, 10))
    for title, day in (("past", "2024-03-01"), ("later", "2024-04-01"), ("today", "2024-03-10")):
        container.event_service.create_event(admin, {"title": title, "startDate": day, "endDate": day})

    assert [e.title for e in container.event_service.list_upcoming(admin)] == ["today", "later"]
