from __future__ import annotations

from typing import Protocol, Sequence

from .model import ActivityLog


class ActivityRepository(Protocol):
    def create(self, entry: ActivityLog) -> ActivityLog:
        raise NotImplementedError

    def list_recent(self, company_id: int, limit: int) -> Sequence[ActivityLog]:
        """Newest first."""

        raise NotImplementedError
