from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..common.repository import TenantRepository
from .model import Event


class EventRepository(TenantRepository[Event], Protocol):
    def list_upcoming(self, company_id: int, from_date: date, limit: Optional[int] = None) -> Sequence[Event]:
        """Events starting on or after ``from_date``, soonest first."""
        raise NotImplementedError
