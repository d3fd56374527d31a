from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Event:
    """Company calendar entry; times are optional 'HH:MM'."""

    id: Optional[int]
    company_id: int
    title: str
    start_date: date
    end_date: date
    description: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
