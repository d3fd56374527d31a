from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Dict, Generic, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from ..activity.service import ActivityService
from ..common.repository import TenantRepository
from ..common.validators import PayloadReader
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError
from ..core.policy import Principal, authorize, ensure_owned, require_reference
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRepository
from .model import Department, Designation, EmployeeType, LeaveType, Location, Shift
from .repository import (
    DepartmentRepository,
    DesignationRepository,
    EmployeeTypeRepository,
    LeaveTypeRepository,
    LocationRepository,
    ShiftRepository,
)

T = TypeVar("T")

# (count of rows referencing the entity, message shown when non-zero)
DependentCheck = Tuple[Callable[[int], int], str]


class LookupService(Generic[T]):
    """CRUD over one company-scoped lookup table.

    Subclasses declare the model, a label for messages and activity rows, and
    read their own payload fields in ``_read``.
    """

    model: Type[T]
    label: str = ""

    def __init__(self, repo: TenantRepository[T], activity: ActivityService):
        self._repo = repo
        self._activity = activity

    # ----- hooks -----

    def _read(self, reader: PayloadReader) -> Dict[str, Any]:
        raise NotImplementedError

    def _check_references(self, principal: Principal, values: Mapping[str, Any]) -> str:
        """Validate foreign keys; returns extra text for the activity row."""
        return ""

    def _dependents(self) -> Sequence[DependentCheck]:
        return ()

    def _same_scope(self, other: T, values: Mapping[str, Any]) -> bool:
        return True

    # ----- use cases -----

    def list(self, principal: Principal) -> Sequence[T]:
        authorize(principal, Role.USER)
        return self._repo.list_for_company(principal.company_id)

    def get(self, principal: Principal, entity_id: int) -> T:
        authorize(principal, Role.USER)
        return ensure_owned(self._repo.get_by_id(int(entity_id)), principal, self.label)

    def create(self, principal: Principal, payload: Mapping[str, Any]) -> T:
        authorize(principal, Role.HR)
        values = self._validated(payload)
        extra = self._check_references(principal, values)
        self._ensure_unique_name(principal, values, exclude_id=None)

        created = self._repo.create(self.model(id=None, company_id=principal.company_id, **values))
        self._activity.record(principal, f"{self.label} Created", f'{self.label} "{created.name}" created{extra}')
        return created

    def update(self, principal: Principal, entity_id: int, payload: Mapping[str, Any]) -> T:
        authorize(principal, Role.HR)
        existing = ensure_owned(self._repo.get_by_id(int(entity_id)), principal, self.label)
        values = self._validated(payload)
        extra = self._check_references(principal, values)
        self._ensure_unique_name(principal, values, exclude_id=existing.id)

        updated = self._repo.update(replace(existing, **values))
        if updated is None:
            raise NotFoundError(f"{self.label} not found")
        self._activity.record(principal, f"{self.label} Updated", f'{self.label} "{updated.name}" updated{extra}')
        return updated

    def delete(self, principal: Principal, entity_id: int) -> None:
        authorize(principal, Role.ADMIN)
        existing = ensure_owned(self._repo.get_by_id(int(entity_id)), principal, self.label)

        for count, message in self._dependents():
            if count(existing.id) > 0:
                raise ConflictError(message)

        if not self._repo.delete_by_id(existing.id):
            raise NotFoundError(f"{self.label} not found")
        self._activity.record(principal, f"{self.label} Deleted", f'{self.label} "{existing.name}" deleted')

    # ----- helpers -----

    def _validated(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        reader = PayloadReader(payload)
        values = self._read(reader)
        reader.raise_if_errors()
        return values

    def _ensure_unique_name(self, principal: Principal, values: Mapping[str, Any], exclude_id: Optional[int]) -> None:
        name = values["name"].casefold()
        for other in self._repo.list_for_company(principal.company_id):
            if other.id != exclude_id and other.name.casefold() == name and self._same_scope(other, values):
                raise ConflictError(f'{self.label} "{values["name"]}" already exists')


class DepartmentService(LookupService[Department]):
    model = Department
    label = "Department"

    def __init__(
        self,
        repo: DepartmentRepository,
        designations: DesignationRepository,
        employees: EmployeeRepository,
        activity: ActivityService,
    ):
        super().__init__(repo, activity)
        self._designations = designations
        self._employees = employees

    def _read(self, reader: PayloadReader) -> Dict[str, Any]:
        return {
            "name": reader.string("name"),
            "description": reader.string("description", required=False),
        }

    def _dependents(self) -> Sequence[DependentCheck]:
        return (
            (
                lambda dept_id: self._employees.count_referencing("department_id", dept_id),
                "Cannot delete department with assigned employees",
            ),
            (self._designations.count_by_department, "Cannot delete department with designations"),
        )


class DesignationService(LookupService[Designation]):
    model = Designation
    label = "Designation"

    def __init__(
        self,
        repo: DesignationRepository,
        departments: DepartmentRepository,
        employees: EmployeeRepository,
        activity: ActivityService,
    ):
        super().__init__(repo, activity)
        self._designations = repo
        self._departments = departments
        self._employees = employees

    def list_by_department(self, principal: Principal, department_id: int) -> Sequence[Designation]:
        authorize(principal, Role.USER)
        ensure_owned(self._departments.get_by_id(int(department_id)), principal, "Department")
        return self._designations.list_by_department(int(department_id))

    def _read(self, reader: PayloadReader) -> Dict[str, Any]:
        return {
            "name": reader.string("name"),
            "department_id": reader.integer("departmentId", min_value=1),
            "description": reader.string("description", required=False),
        }

    def _check_references(self, principal: Principal, values: Mapping[str, Any]) -> str:
        department = require_reference(
            self._departments.get_by_id,
            values["department_id"],
            principal,
            field="departmentId",
            label="Department",
        )
        return f' in department "{department.name}"'

    def _same_scope(self, other: Designation, values: Mapping[str, Any]) -> bool:
        return other.department_id == values["department_id"]

    def _dependents(self) -> Sequence[DependentCheck]:
        return (
            (
                lambda designation_id: self._employees.count_referencing("designation_id", designation_id),
                "Cannot delete designation with assigned employees",
            ),
        )


class EmployeeTypeService(LookupService[EmployeeType]):
    model = EmployeeType
    label = "Employee Type"

    def __init__(self, repo: EmployeeTypeRepository, employees: EmployeeRepository, activity: ActivityService):
        super().__init__(repo, activity)
        self._employees = employees

    def _read(self, reader: PayloadReader) -> Dict[str, Any]:
        return {
            "name": reader.string("name"),
            "description": reader.string("description", required=False),
        }

    def _dependents(self) -> Sequence[DependentCheck]:
        return (
            (
                lambda type_id: self._employees.count_referencing("employee_type_id", type_id),
                "Cannot delete employee type with assigned employees",
            ),
        )


class ShiftService(LookupService[Shift]):
    model = Shift
    label = "Shift"

    def __init__(self, repo: ShiftRepository, employees: EmployeeRepository, activity: ActivityService):
        super().__init__(repo, activity)
        self._employees = employees

    def _read(self, reader: PayloadReader) -> Dict[str, Any]:
        # Overnight shifts (end before start) are allowed.
        return {
            "name": reader.string("name"),
            "start_time": reader.clock("startTime"),
            "end_time": reader.clock("endTime"),
            "description": reader.string("description", required=False),
        }

    def _dependents(self) -> Sequence[DependentCheck]:
        return (
            (
                lambda shift_id: self._employees.count_referencing("shift_id", shift_id),
                "Cannot delete shift with assigned employees",
            ),
        )


class LeaveTypeService(LookupService[LeaveType]):
    model = LeaveType
    label = "Leave Type"

    def __init__(self, repo: LeaveTypeRepository, leaves: LeaveRepository, activity: ActivityService):
        super().__init__(repo, activity)
        self._leaves = leaves

    def _read(self, reader: PayloadReader) -> Dict[str, Any]:
        return {
            "name": reader.string("name"),
            "allowed_days": reader.integer("allowedDays", min_value=0),
            "is_paid": reader.boolean("isPaid", default=True),
            "description": reader.string("description", required=False),
        }

    def _dependents(self) -> Sequence[DependentCheck]:
        return ((self._leaves.count_by_leave_type, "Cannot delete leave type that is used by leave requests"),)


class LocationService(LookupService[Location]):
    model = Location
    label = "Location"

    def __init__(self, repo: LocationRepository, employees: EmployeeRepository, activity: ActivityService):
        super().__init__(repo, activity)
        self._employees = employees

    def _read(self, reader: PayloadReader) -> Dict[str, Any]:
        return {
            "name": reader.string("name"),
            "address": reader.string("address", required=False),
            "city": reader.string("city", required=False),
            "state": reader.string("state", required=False),
            "country": reader.string("country", required=False),
            "zip_code": reader.string("zipCode", required=False),
        }

    def _dependents(self) -> Sequence[DependentCheck]:
        return (
            (
                lambda location_id: self._employees.count_referencing("location_id", location_id),
                "Cannot delete location with assigned employees",
            ),
        )
