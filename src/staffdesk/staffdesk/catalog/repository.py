from __future__ import annotations

from typing import Protocol, Sequence

from ..common.repository import TenantRepository
from .model import Department, Designation, EmployeeType, LeaveType, Location, Shift


class DepartmentRepository(TenantRepository[Department], Protocol):
    pass


class DesignationRepository(TenantRepository[Designation], Protocol):
    def list_by_department(self, department_id: int) -> Sequence[Designation]:
        raise NotImplementedError

    def count_by_department(self, department_id: int) -> int:
        raise NotImplementedError


class EmployeeTypeRepository(TenantRepository[EmployeeType], Protocol):
    pass


class ShiftRepository(TenantRepository[Shift], Protocol):
    pass


class LeaveTypeRepository(TenantRepository[LeaveType], Protocol):
    pass


class LocationRepository(TenantRepository[Location], Protocol):
    pass
