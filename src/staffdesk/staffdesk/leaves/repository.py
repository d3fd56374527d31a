from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..common.repository import TenantRepository
from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(TenantRepository[LeaveRequest], Protocol):
    def list_filtered(
        self,
        company_id: int,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def update_pending(self, leave: LeaveRequest) -> Optional[LeaveRequest]:
        """Replace the details of a request that is still pending.

        Returns None when the row is gone or was decided in the meantime.
        """
        raise NotImplementedError

    def decide(self, leave_id: int, *, status: LeaveStatus, decided_by: int) -> bool:
        """Move a pending request to ``status``.

        Returns False when the row is no longer pending, so only one of two
        concurrent deciders wins.
        """
        raise NotImplementedError

    def count_by_employee(self, employee_id: int) -> int:
        raise NotImplementedError

    def count_by_leave_type(self, leave_type_id: int) -> int:
        raise NotImplementedError

    def count_by_status(self, company_id: int, status: LeaveStatus) -> int:
        raise NotImplementedError

    def count_on_leave(self, company_id: int, day: date) -> int:
        """Approved leaves covering ``day``."""
        raise NotImplementedError
