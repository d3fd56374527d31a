from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import clock_from_db
from ..database.mysql_base import MySQLTableRepository
from .model import Department, Designation, EmployeeType, LeaveType, Location, Shift
from .repository import (
    DepartmentRepository,
    DesignationRepository,
    EmployeeTypeRepository,
    LeaveTypeRepository,
    LocationRepository,
    ShiftRepository,
)


class MySQLDepartmentRepository(MySQLTableRepository[Department], DepartmentRepository):
    table = "departments"
    model = Department
    default_order = "`name`"


class MySQLDesignationRepository(MySQLTableRepository[Designation], DesignationRepository):
    table = "designations"
    model = Designation
    default_order = "`name`"

    def list_by_department(self, department_id: int) -> Sequence[Designation]:
        return self._select_where("`department_id`=%s", (int(department_id),))

    def count_by_department(self, department_id: int) -> int:
        return self._count_where("`department_id`=%s", (int(department_id),))


class MySQLEmployeeTypeRepository(MySQLTableRepository[EmployeeType], EmployeeTypeRepository):
    table = "employee_types"
    model = EmployeeType
    default_order = "`name`"


class MySQLShiftRepository(MySQLTableRepository[Shift], ShiftRepository):
    table = "shifts"
    model = Shift
    converters = {"start_time": clock_from_db, "end_time": clock_from_db}
    default_order = "`start_time`, `name`"


class MySQLLeaveTypeRepository(MySQLTableRepository[LeaveType], LeaveTypeRepository):
    table = "leave_types"
    model = LeaveType
    converters = {"is_paid": bool}
    default_order = "`name`"


class MySQLLocationRepository(MySQLTableRepository[Location], LocationRepository):
    table = "locations"
    model = Location
    default_order = "`name`"
