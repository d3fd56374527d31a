from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from ..activity.service import ActivityService, best_effort
from ..catalog.repository import (
    DepartmentRepository,
    DesignationRepository,
    EmployeeTypeRepository,
    LocationRepository,
    ShiftRepository,
)
from ..common.validators import PayloadReader
from ..core.enums import Role
from ..core.exceptions import ConflictError, InvalidReferenceError, NotFoundError
from ..core.policy import Principal, authorize, ensure_owned, require_reference
from .model import Employee
from .repository import EmployeeRepository


class EmployeeService:
    """Use cases: employee directory of one company."""

    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        designations: DesignationRepository,
        employee_types: EmployeeTypeRepository,
        shifts: ShiftRepository,
        locations: LocationRepository,
        activity: ActivityService,
        *,
        attendance_count: Callable[[int], int],
        leave_count: Callable[[int], int],
        salary_count: Callable[[int], int],
    ):
        self._employees = employees
        self._departments = departments
        self._designations = designations
        self._employee_types = employee_types
        self._shifts = shifts
        self._locations = locations
        self._activity = activity
        # employee id -> number of dependent rows
        self._dependents = (
            (attendance_count, "Cannot delete employee with attendance records"),
            (leave_count, "Cannot delete employee with leave requests"),
            (salary_count, "Cannot delete employee with salary records"),
        )

    def list_employees(self, principal: Principal) -> Sequence[Employee]:
        authorize(principal, Role.USER)
        return self._employees.list_for_company(principal.company_id)

    def get_employee(self, principal: Principal, employee_id: int) -> Employee:
        authorize(principal, Role.USER)
        return ensure_owned(self._employees.get_by_id(int(employee_id)), principal, "Employee")

    def find_by_email(self, principal: Principal, email: str) -> Employee:
        authorize(principal, Role.USER)
        employee = self._employees.get_by_email(principal.company_id, (email or "").strip())
        if employee is None:
            raise NotFoundError("Employee not found")
        return employee

    def create_employee(self, principal: Principal, payload: Mapping[str, Any]) -> Employee:
        authorize(principal, Role.HR)
        values = self._read(payload)
        department_name = self._check_references(principal, values)
        self._ensure_unique(principal, values, exclude_id=None)

        created = self._employees.create(Employee(id=None, company_id=principal.company_id, **values))
        self._activity.record(
            principal,
            "Employee Created",
            f'Employee "{created.full_name}" ({created.employee_code}) added to department "{department_name}"',
        )
        return created

    def update_employee(self, principal: Principal, employee_id: int, payload: Mapping[str, Any]) -> Employee:
        authorize(principal, Role.HR)
        existing = ensure_owned(self._employees.get_by_id(int(employee_id)), principal, "Employee")
        values = self._read(payload)
        self._check_references(principal, values)
        self._ensure_unique(principal, values, exclude_id=existing.id)

        updated = self._employees.update(replace(existing, **values))
        if updated is None:
            raise NotFoundError("Employee not found")
        self._activity.record(
            principal,
            "Employee Updated",
            f'Employee "{updated.full_name}" ({updated.employee_code}) updated',
        )
        return updated

    def delete_employee(self, principal: Principal, employee_id: int) -> None:
        authorize(principal, Role.ADMIN)
        existing = ensure_owned(self._employees.get_by_id(int(employee_id)), principal, "Employee")

        for count, message in self._dependents:
            if count(existing.id) > 0:
                raise ConflictError(message)

        if not self._employees.delete_by_id(existing.id):
            raise NotFoundError("Employee not found")

        department_name = best_effort(lambda: self._departments.get_by_id(existing.department_id).name)
        self._activity.record(
            principal,
            "Employee Deleted",
            f'Employee "{existing.full_name}" ({existing.employee_code}) removed from department "{department_name}"',
        )

    # ----- helpers -----

    @staticmethod
    def _read(payload: Mapping[str, Any]) -> Dict[str, Any]:
        reader = PayloadReader(payload)
        values = {
            "employee_code": reader.string("employeeId"),
            "first_name": reader.string("firstName"),
            "last_name": reader.string("lastName"),
            "email": reader.email("email"),
            "phone": reader.string("phone", required=False),
            "department_id": reader.integer("departmentId", min_value=1),
            "designation_id": reader.integer("designationId", min_value=1),
            "employee_type_id": reader.integer("employeeTypeId", min_value=1),
            "shift_id": reader.integer("shiftId", min_value=1),
            "location_id": reader.integer("locationId", min_value=1),
            "date_of_joining": reader.date("dateOfJoining"),
            "date_of_birth": reader.date("dateOfBirth", required=False),
            "address": reader.string("address", required=False),
            "city": reader.string("city", required=False),
            "state": reader.string("state", required=False),
            "country": reader.string("country", required=False),
            "zip_code": reader.string("zipCode", required=False),
            "gender": reader.string("gender", required=False),
            "avatar": reader.string("avatar", required=False),
            "is_active": reader.boolean("isActive", default=True),
        }
        if values["date_of_birth"] and values["date_of_joining"] and values["date_of_birth"] >= values["date_of_joining"]:
            reader.add_error("dateOfBirth", "Date of birth must be before the date of joining")
        reader.raise_if_errors()
        return values

    def _check_references(self, principal: Principal, values: Mapping[str, Any]) -> str:
        """Re-fetch every lookup the payload names; returns the department name."""
        department = require_reference(
            self._departments.get_by_id, values["department_id"], principal,
            field="departmentId", label="Department",
        )
        designation = require_reference(
            self._designations.get_by_id, values["designation_id"], principal,
            field="designationId", label="Designation",
        )
        require_reference(
            self._employee_types.get_by_id, values["employee_type_id"], principal,
            field="employeeTypeId", label="Employee type",
        )
        require_reference(self._shifts.get_by_id, values["shift_id"], principal, field="shiftId", label="Shift")
        require_reference(
            self._locations.get_by_id, values["location_id"], principal,
            field="locationId", label="Location",
        )
        if designation.department_id != department.id:
            raise InvalidReferenceError(
                "designationId",
                f'Designation {designation.id} does not belong to department "{department.name}"',
            )
        return department.name

    def _ensure_unique(self, principal: Principal, values: Mapping[str, Any], exclude_id: Optional[int]) -> None:
        same_code = self._employees.get_by_code(principal.company_id, values["employee_code"])
        if same_code is not None and same_code.id != exclude_id:
            raise ConflictError("Employee ID already exists")
        same_email = self._employees.get_by_email(principal.company_id, values["email"])
        if same_email is not None and same_email.id != exclude_id:
            raise ConflictError("An employee with this email already exists")
