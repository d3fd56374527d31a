from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Mapping, Optional, Sequence

from ..activity.service import ActivityService, best_effort
from ..catalog.model import LeaveType
from ..catalog.repository import LeaveTypeRepository
from ..common.datetime_utils import inclusive_days
from ..common.validators import PayloadReader
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..core.policy import Principal, authorize, ensure_owned, require_reference
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_DECISION_ACTIONS = {
    LeaveStatus.APPROVED: "Leave Approved",
    LeaveStatus.REJECTED: "Leave Rejected",
}


class LeaveService:
    """Use cases: leave requests and their approval workflow.

    ``pending`` is the only state that accepts edits or a decision;
    ``approved`` and ``rejected`` are terminal. Deciding requires hr.
    """

    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        leave_types: LeaveTypeRepository,
        activity: ActivityService,
    ):
        self._leaves = leaves
        self._employees = employees
        self._leave_types = leave_types
        self._activity = activity

    def list_leaves(
        self,
        principal: Principal,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        authorize(principal, Role.USER)
        return self._leaves.list_filtered(principal.company_id, status=status, employee_id=employee_id)

    def list_for_employee(self, principal: Principal, employee_id: int) -> Sequence[LeaveRequest]:
        authorize(principal, Role.USER)
        employee = ensure_owned(self._employees.get_by_id(int(employee_id)), principal, "Employee")
        return self._leaves.list_filtered(principal.company_id, employee_id=employee.id)

    def get_leave(self, principal: Principal, leave_id: int) -> LeaveRequest:
        authorize(principal, Role.USER)
        return ensure_owned(self._leaves.get_by_id(int(leave_id)), principal, "Leave request")

    def create_leave(self, principal: Principal, payload: Mapping[str, Any]) -> LeaveRequest:
        """File a request. Any ``status`` in the payload is ignored."""
        authorize(principal, Role.USER)
        values = self._read(payload)
        employee, leave_type = self._check_references(principal, values)

        created = self._leaves.create(
            LeaveRequest(id=None, company_id=principal.company_id, status=LeaveStatus.PENDING, **values)
        )
        self._activity.record(
            principal,
            "Leave Requested",
            f"{leave_type.name} requested for {employee.full_name} "
            f"from {created.start_date.isoformat()} to {created.end_date.isoformat()} ({created.days} days)",
        )
        return created

    def update_leave(self, principal: Principal, leave_id: int, payload: Mapping[str, Any]) -> LeaveRequest:
        """Edit the details of a pending request, and optionally decide it.

        A ``status`` different from the stored one is a transition and needs
        hr; it is checked before anything is written.
        """
        authorize(principal, Role.USER)
        existing = ensure_owned(self._leaves.get_by_id(int(leave_id)), principal, "Leave request")

        status_reader = PayloadReader(payload)
        requested = status_reader.choice("status", LeaveStatus, required=False)
        status_reader.raise_if_errors()
        changing = requested is not None and requested != existing.status
        if changing:
            authorize(principal, Role.HR)

        if existing.status != LeaveStatus.PENDING:
            raise ConflictError("Leave request has already been decided")
        self._ensure_self_service(principal, self._employees.get_by_id(existing.employee_id))

        values = self._read(payload)
        employee, leave_type = self._check_references(principal, values)

        updated = self._leaves.update_pending(replace(existing, **values))
        if updated is None:
            raise ConflictError("Leave request has already been decided")
        if changing:
            return self._decide(principal, updated, requested)
        self._activity.record(
            principal,
            "Leave Updated",
            f"{leave_type.name} for {employee.full_name} updated "
            f"to {updated.start_date.isoformat()} - {updated.end_date.isoformat()}",
        )
        return updated

    def approve_leave(self, principal: Principal, leave_id: int) -> LeaveRequest:
        return self._transition(principal, leave_id, LeaveStatus.APPROVED)

    def reject_leave(self, principal: Principal, leave_id: int) -> LeaveRequest:
        return self._transition(principal, leave_id, LeaveStatus.REJECTED)

    def delete_leave(self, principal: Principal, leave_id: int) -> None:
        authorize(principal, Role.HR)
        existing = ensure_owned(self._leaves.get_by_id(int(leave_id)), principal, "Leave request")
        if not self._leaves.delete_by_id(existing.id):
            raise NotFoundError("Leave request not found")

        employee_name = best_effort(lambda: self._employees.get_by_id(existing.employee_id).full_name)
        self._activity.record(
            principal,
            "Leave Deleted",
            f"Leave request of {employee_name} from {existing.start_date.isoformat()} deleted",
        )

    # ----- workflow -----

    def _transition(self, principal: Principal, leave_id: int, target: LeaveStatus) -> LeaveRequest:
        authorize(principal, Role.HR)
        existing = ensure_owned(self._leaves.get_by_id(int(leave_id)), principal, "Leave request")
        return self._decide(principal, existing, target)

    def _decide(self, principal: Principal, leave: LeaveRequest, target: LeaveStatus) -> LeaveRequest:
        if target not in _DECISION_ACTIONS:
            raise ValidationError(
                "Validation failed",
                [{"field": "status", "message": "Status can only change to approved or rejected"}],
            )
        if leave.status != LeaveStatus.PENDING or not self._leaves.decide(
            leave.id, status=target, decided_by=principal.user_id
        ):
            raise ConflictError("Leave request has already been decided")

        decided = self._leaves.get_by_id(leave.id) or replace(leave, status=target, approved_by=principal.user_id)
        employee_name = best_effort(lambda: self._employees.get_by_id(leave.employee_id).full_name)
        type_name = best_effort(lambda: self._leave_types.get_by_id(leave.leave_type_id).name)
        self._activity.record(
            principal,
            _DECISION_ACTIONS[target],
            f"{type_name} for {employee_name} from {leave.start_date.isoformat()} "
            f"to {leave.end_date.isoformat()} {target.value} by {principal.username}",
        )
        logger.info("leave %s -> %s by user %s", leave.id, target.value, principal.user_id)
        return decided

    # ----- helpers -----

    @staticmethod
    def _read(payload: Mapping[str, Any]) -> Dict[str, Any]:
        reader = PayloadReader(payload)
        values = {
            "employee_id": reader.integer("employeeId", min_value=1),
            "leave_type_id": reader.integer("leaveTypeId", min_value=1),
            "start_date": reader.date("startDate"),
            "end_date": reader.date("endDate"),
            "reason": reader.string("reason"),
        }
        if values["start_date"] and values["end_date"] and values["end_date"] < values["start_date"]:
            reader.add_error("endDate", "End date cannot be earlier than start date")
        reader.raise_if_errors()
        return values

    def _check_references(self, principal: Principal, values: Mapping[str, Any]) -> tuple[Employee, LeaveType]:
        employee = require_reference(
            self._employees.get_by_id, values["employee_id"], principal,
            field="employeeId", label="Employee",
        )
        self._ensure_self_service(principal, employee)
        leave_type = require_reference(
            self._leave_types.get_by_id, values["leave_type_id"], principal,
            field="leaveTypeId", label="Leave type",
        )

        days = inclusive_days(values["start_date"], values["end_date"])
        if days > leave_type.allowed_days:
            raise ValidationError(
                "Validation failed",
                [{
                    "field": "endDate",
                    "message": f"{days} days requested but {leave_type.name} allows {leave_type.allowed_days}",
                }],
            )
        return employee, leave_type

    @staticmethod
    def _ensure_self_service(principal: Principal, employee: Optional[Employee]) -> None:
        """Plain users may only act on the employee record carrying their own email."""
        if principal.role.has_at_least(Role.MANAGER):
            return
        if employee is None or employee.email.casefold() != (principal.email or "").casefold():
            raise AuthorizationError("You can only manage your own leave requests")
