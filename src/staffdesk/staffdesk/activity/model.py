from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ActivityLog:
    """Append-only audit row. Never updated or deleted by the application."""

    id: Optional[int]
    user_id: int
    company_id: Optional[int]
    action: str
    details: Optional[str] = None
    created_at: Optional[datetime] = None
