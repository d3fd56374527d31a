from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Mapping, Optional, Sequence

from ..activity.service import ActivityService
from ..common.datetime_utils import today_local
from ..common.validators import PayloadReader
from ..core.constants import MAX_LIST_LIMIT
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from ..core.policy import Principal, authorize, ensure_owned
from .model import Event
from .repository import EventRepository


class EventService:
    def __init__(self, events: EventRepository, activity: ActivityService):
        self._events = events
        self._activity = activity

    def list_events(self, principal: Principal) -> Sequence[Event]:
        authorize(principal, Role.USER)
        return self._events.list_for_company(principal.company_id)

    def list_upcoming(self, principal: Principal, limit: Optional[int] = None) -> Sequence[Event]:
        authorize(principal, Role.USER)
        if limit is not None:
            limit = max(1, min(int(limit), MAX_LIST_LIMIT))
        return self._events.list_upcoming(principal.company_id, today_local(), limit)

    def get_event(self, principal: Principal, event_id: int) -> Event:
        authorize(principal, Role.USER)
        return ensure_owned(self._events.get_by_id(int(event_id)), principal, "Event")

    def create_event(self, principal: Principal, payload: Mapping[str, Any]) -> Event:
        authorize(principal, Role.MANAGER)
        values = self._read(payload)
        created = self._events.create(
            Event(id=None, company_id=principal.company_id, created_by=principal.user_id, **values)
        )
        self._activity.record(
            principal, "Event Created", f'Event "{created.title}" scheduled on {created.start_date.isoformat()}'
        )
        return created

    def update_event(self, principal: Principal, event_id: int, payload: Mapping[str, Any]) -> Event:
        authorize(principal, Role.MANAGER)
        existing = ensure_owned(self._events.get_by_id(int(event_id)), principal, "Event")
        values = self._read(payload)
        updated = self._events.update(replace(existing, **values))
        if updated is None:
            raise NotFoundError("Event not found")
        self._activity.record(principal, "Event Updated", f'Event "{updated.title}" updated')
        return updated

    def delete_event(self, principal: Principal, event_id: int) -> None:
        authorize(principal, Role.HR)
        existing = ensure_owned(self._events.get_by_id(int(event_id)), principal, "Event")
        if not self._events.delete_by_id(existing.id):
            raise NotFoundError("Event not found")
        self._activity.record(principal, "Event Deleted", f'Event "{existing.title}" deleted')

    @staticmethod
    def _read(payload: Mapping[str, Any]) -> Dict[str, Any]:
        reader = PayloadReader(payload)
        values = {
            "title": reader.string("title"),
            "description": reader.string("description", required=False),
            "start_date": reader.date("startDate"),
            "end_date": reader.date("endDate"),
            "start_time": reader.clock("startTime", required=False),
            "end_time": reader.clock("endTime", required=False),
            "location": reader.string("location", required=False),
        }
        start, end = values["start_date"], values["end_date"]
        if start and end and end < start:
            reader.add_error("endDate", "End date cannot be earlier than start date")
        elif start and end and start == end and values["start_time"] and values["end_time"]:
            if values["end_time"] < values["start_time"]:
                reader.add_error("endTime", "End time cannot be earlier than start time")
        reader.raise_if_errors()
        return values
