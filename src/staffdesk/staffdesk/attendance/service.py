from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, Mapping, Optional, Sequence

from ..activity.service import ActivityService, best_effort
from ..catalog.repository import ShiftRepository
from ..common.validators import PayloadReader
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.policy import Principal, authorize, ensure_owned, require_reference
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        shifts: ShiftRepository,
        activity: ActivityService,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._shifts = shifts
        self._activity = activity
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def list_attendance(
        self,
        principal: Principal,
        *,
        work_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        authorize(principal, Role.USER)
        return self._attendance.list_filtered(principal.company_id, work_date=work_date, employee_id=employee_id)

    def list_for_employee(self, principal: Principal, employee_id: int) -> Sequence[AttendanceRecord]:
        authorize(principal, Role.USER)
        employee = ensure_owned(self._employees.get_by_id(int(employee_id)), principal, "Employee")
        return self._attendance.list_filtered(principal.company_id, employee_id=employee.id)

    def get_attendance(self, principal: Principal, attendance_id: int) -> AttendanceRecord:
        authorize(principal, Role.USER)
        return ensure_owned(self._attendance.get_by_id(int(attendance_id)), principal, "Attendance record")

    def create_attendance(self, principal: Principal, payload: Mapping[str, Any]) -> AttendanceRecord:
        authorize(principal, Role.MANAGER)
        values = self._read(payload)
        employee = require_reference(
            self._employees.get_by_id, values["employee_id"], principal,
            field="employeeId", label="Employee",
        )
        self._check_times(employee, values)
        if values["status"] is None:
            values["status"] = self._derive_status(employee.shift_id, values["check_in"])

        if self._attendance.get_for_employee_and_date(employee.id, values["work_date"]):
            raise ConflictError("Attendance for this employee and date already exists")

        created = self._attendance.create(AttendanceRecord(id=None, company_id=principal.company_id, **values))
        self._activity.record(
            principal,
            "Attendance Created",
            f"Attendance for {employee.full_name} on {created.work_date.isoformat()} marked {created.status.value}",
        )
        return created

    def update_attendance(self, principal: Principal, attendance_id: int, payload: Mapping[str, Any]) -> AttendanceRecord:
        authorize(principal, Role.MANAGER)
        existing = ensure_owned(self._attendance.get_by_id(int(attendance_id)), principal, "Attendance record")
        values = self._read(payload)
        employee = require_reference(
            self._employees.get_by_id, values["employee_id"], principal,
            field="employeeId", label="Employee",
        )
        self._check_times(employee, values)
        if values["status"] is None:
            values["status"] = self._derive_status(employee.shift_id, values["check_in"])

        clash = self._attendance.get_for_employee_and_date(employee.id, values["work_date"])
        if clash is not None and clash.id != existing.id:
            raise ConflictError("Attendance for this employee and date already exists")

        updated = self._attendance.update(replace(existing, **values))
        if updated is None:
            raise NotFoundError("Attendance record not found")
        self._activity.record(
            principal,
            "Attendance Updated",
            f"Attendance for {employee.full_name} on {updated.work_date.isoformat()} updated to {updated.status.value}",
        )
        return updated

    def delete_attendance(self, principal: Principal, attendance_id: int) -> None:
        authorize(principal, Role.HR)
        existing = ensure_owned(self._attendance.get_by_id(int(attendance_id)), principal, "Attendance record")
        if not self._attendance.delete_by_id(existing.id):
            raise NotFoundError("Attendance record not found")

        employee_name = best_effort(lambda: self._employees.get_by_id(existing.employee_id).full_name)
        self._activity.record(
            principal,
            "Attendance Deleted",
            f"Attendance for {employee_name} on {existing.work_date.isoformat()} deleted",
        )

    # ----- helpers -----

    @staticmethod
    def _read(payload: Mapping[str, Any]) -> Dict[str, Any]:
        reader = PayloadReader(payload)
        values = {
            "employee_id": reader.integer("employeeId", min_value=1),
            "work_date": reader.date("date"),
            "status": reader.choice("status", AttendanceStatus, required=False),
            "check_in": reader.clock("checkIn", required=False),
            "check_out": reader.clock("checkOut", required=False),
            "remarks": reader.string("remarks", required=False),
        }
        if values["status"] is None and values["check_in"] is None and not reader.errors:
            reader.add_error("status", "Required when checkIn is not given")
        reader.raise_if_errors()
        return values

    def _check_times(self, employee: Employee, values: Mapping[str, Any]) -> None:
        """Check-out may precede check-in only for shifts that cross midnight."""
        check_in, check_out = values["check_in"], values["check_out"]
        if not (check_in and check_out) or check_out >= check_in:
            return
        shift = self._shifts.get_by_id(employee.shift_id)
        if shift is None or not shift.crosses_midnight:
            raise ValidationError(
                "Validation failed",
                [{"field": "checkOut", "message": "Check-out cannot be earlier than check-in"}],
            )

    def _derive_status(self, shift_id: int, check_in: str) -> AttendanceStatus:
        shift = self._shifts.get_by_id(shift_id)
        return self._factory.for_checkin(check_in=check_in, shift=shift).decide_checkin(check_in=check_in, shift=shift)
