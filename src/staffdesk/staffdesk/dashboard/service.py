from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from ..activity.model import ActivityLog
from ..activity.service import ActivityService
from ..attendance.repository import AttendanceRepository
from ..catalog.repository import DepartmentRepository
from ..common.datetime_utils import today_local
from ..core.constants import DEFAULT_DASHBOARD_LIMIT, MAX_LIST_LIMIT
from ..core.enums import LeaveStatus, Role
from ..core.policy import Principal, authorize
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..events.model import Event
from ..events.repository import EventRepository
from ..leaves.repository import LeaveRepository


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    active_today: int
    on_leave_today: int
    pending_leave_requests: int


@dataclass(frozen=True)
class DepartmentShare:
    department_id: int
    name: str
    count: int
    percentage: int


def _percent(part: int, total: int) -> int:
    if total <= 0:
        return 0
    return int((Decimal(part) * 100 / Decimal(total)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _clamp(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_DASHBOARD_LIMIT
    return max(1, min(int(limit), MAX_LIST_LIMIT))


class DashboardService:
    """Company-scoped aggregates. Nothing here writes or logs activity."""

    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        events: EventRepository,
        activity: ActivityService,
    ):
        self._employees = employees
        self._departments = departments
        self._attendance = attendance
        self._leaves = leaves
        self._events = events
        self._activity = activity

    def stats(self, principal: Principal) -> DashboardStats:
        authorize(principal, Role.USER)
        today = today_local()
        company_id = principal.company_id
        return DashboardStats(
            total_employees=self._employees.count_for_company(company_id),
            active_today=self._attendance.count_on_date(company_id, today),
            on_leave_today=self._leaves.count_on_leave(company_id, today),
            pending_leave_requests=self._leaves.count_by_status(company_id, LeaveStatus.PENDING),
        )

    def department_distribution(self, principal: Principal) -> List[DepartmentShare]:
        """Headcount per department, largest first; empty departments included."""
        authorize(principal, Role.USER)
        employees = self._employees.list_for_company(principal.company_id)
        counts: dict = {}
        for e in employees:
            counts[e.department_id] = counts.get(e.department_id, 0) + 1

        total = len(employees)
        shares = [
            DepartmentShare(
                department_id=d.id,
                name=d.name,
                count=counts.get(d.id, 0),
                percentage=_percent(counts.get(d.id, 0), total),
            )
            for d in self._departments.list_for_company(principal.company_id)
        ]
        return sorted(shares, key=lambda s: s.count, reverse=True)

    def recent_employees(self, principal: Principal, limit: Optional[int] = None) -> Sequence[Employee]:
        authorize(principal, Role.USER)
        return self._employees.list_recent(principal.company_id, _clamp(limit))

    def recent_activities(self, principal: Principal, limit: Optional[int] = None) -> Sequence[ActivityLog]:
        authorize(principal, Role.USER)
        return self._activity.recent(principal, _clamp(limit))

    def upcoming_events(self, principal: Principal, limit: Optional[int] = None) -> Sequence[Event]:
        authorize(principal, Role.USER)
        return self._events.list_upcoming(principal.company_id, today_local(), _clamp(limit))
