from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ..core.constants import DEFAULT_DASHBOARD_LIMIT, MAX_LIST_LIMIT, UNKNOWN_LABEL
from ..core.policy import Principal
from .model import ActivityLog
from .repository import ActivityRepository

logger = logging.getLogger(__name__)


def best_effort(lookup: Callable[[], Optional[str]], default: str = UNKNOWN_LABEL) -> str:
    """Resolve a display name for an activity detail string.

    The lookup may fail or find nothing; the caller then gets ``default``
    instead of an error, because a log line must never fail the request.
    """
    try:
        value = lookup()
    except Exception:
        logger.warning("Display-name lookup failed; using %r", default, exc_info=True)
        return default
    return value or default


class ActivityService:
    """Use case: append and read the audit trail."""

    def __init__(self, activities: ActivityRepository):
        self._activities = activities

    def record(self, principal: Principal, action: str, details: str) -> ActivityLog:
        return self.record_for(
            user_id=principal.user_id,
            company_id=principal.company_id,
            action=action,
            details=details,
        )

    def record_for(self, *, user_id: int, company_id: Optional[int], action: str, details: str) -> ActivityLog:
        entry = self._activities.create(
            ActivityLog(id=None, user_id=int(user_id), company_id=company_id, action=action, details=details)
        )
        logger.info("activity company=%s user=%s action=%r", company_id, user_id, action)
        return entry

    def recent(self, principal: Principal, limit: int = DEFAULT_DASHBOARD_LIMIT) -> Sequence[ActivityLog]:
        limit = max(1, min(int(limit), MAX_LIST_LIMIT))
        return self._activities.list_recent(principal.company_id, limit)
