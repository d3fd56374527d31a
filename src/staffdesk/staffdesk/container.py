from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .activity.mysql_activity_repository import MySQLActivityRepository
from .activity.service import ActivityService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .catalog.mysql_catalog_repository import (
    MySQLDepartmentRepository,
    MySQLDesignationRepository,
    MySQLEmployeeTypeRepository,
    MySQLLeaveTypeRepository,
    MySQLLocationRepository,
    MySQLShiftRepository,
)
from .catalog.service import (
    DepartmentService,
    DesignationService,
    EmployeeTypeService,
    LeaveTypeService,
    LocationService,
    ShiftService,
)
from .companies.mysql_company_repository import MySQLCompanyRepository
from .companies.service import CompanyService
from .core.constants import DEFAULT_GRACE_MINUTES
from .dashboard.service import DashboardService
from .database.connection import DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .events.mysql_event_repository import MySQLEventRepository
from .events.service import EventService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .org_chart.mysql_org_chart_repository import MySQLOrgChartRepository
from .org_chart.service import OrgChartService
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.service import SalaryService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Repositories:
    companies: Any
    users: Any
    activity: Any
    departments: Any
    designations: Any
    employee_types: Any
    shifts: Any
    leave_types: Any
    locations: Any
    employees: Any
    attendance: Any
    leaves: Any
    salaries: Any
    events: Any
    org_chart: Any


@dataclass(frozen=True)
class Container:
    repos: Repositories

    activity_service: ActivityService
    auth_service: AuthService
    user_service: UserService
    company_service: CompanyService
    department_service: DepartmentService
    designation_service: DesignationService
    employee_type_service: EmployeeTypeService
    shift_service: ShiftService
    leave_type_service: LeaveTypeService
    location_service: LocationService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService
    salary_service: SalaryService
    event_service: EventService
    org_chart_service: OrgChartService
    dashboard_service: DashboardService


def build_services(repos: Repositories, *, grace_minutes: int = DEFAULT_GRACE_MINUTES) -> Container:
    """Wire services over any set of repositories (MySQL or in-memory)."""
    activity = ActivityService(repos.activity)

    return Container(
        repos=repos,
        activity_service=activity,
        auth_service=AuthService(repos.users, repos.companies, activity),
        user_service=UserService(repos.users, activity),
        company_service=CompanyService(repos.companies, activity),
        department_service=DepartmentService(repos.departments, repos.designations, repos.employees, activity),
        designation_service=DesignationService(repos.designations, repos.departments, repos.employees, activity),
        employee_type_service=EmployeeTypeService(repos.employee_types, repos.employees, activity),
        shift_service=ShiftService(repos.shifts, repos.employees, activity),
        leave_type_service=LeaveTypeService(repos.leave_types, repos.leaves, activity),
        location_service=LocationService(repos.locations, repos.employees, activity),
        employee_service=EmployeeService(
            repos.employees,
            repos.departments,
            repos.designations,
            repos.employee_types,
            repos.shifts,
            repos.locations,
            activity,
            attendance_count=repos.attendance.count_by_employee,
            leave_count=repos.leaves.count_by_employee,
            salary_count=repos.salaries.count_by_employee,
        ),
        attendance_service=AttendanceService(
            repos.attendance,
            repos.employees,
            repos.shifts,
            activity,
            strategy_factory=AttendanceStrategyFactory(grace_minutes=grace_minutes),
        ),
        leave_service=LeaveService(repos.leaves, repos.employees, repos.leave_types, activity),
        salary_service=SalaryService(repos.salaries, repos.employees, activity),
        event_service=EventService(repos.events, activity),
        org_chart_service=OrgChartService(repos.org_chart, repos.employees, activity),
        dashboard_service=DashboardService(
            repos.employees,
            repos.departments,
            repos.attendance,
            repos.leaves,
            repos.events,
            activity,
        ),
    )


def build_container(*, db_config: dict, grace_minutes: int = DEFAULT_GRACE_MINUTES) -> Container:
    conn = DatabaseConnection.from_dict(db_config)

    repos = Repositories(
        companies=MySQLCompanyRepository(conn),
        users=MySQLUserRepository(conn),
        activity=MySQLActivityRepository(conn),
        departments=MySQLDepartmentRepository(conn),
        designations=MySQLDesignationRepository(conn),
        employee_types=MySQLEmployeeTypeRepository(conn),
        shifts=MySQLShiftRepository(conn),
        leave_types=MySQLLeaveTypeRepository(conn),
        locations=MySQLLocationRepository(conn),
        employees=MySQLEmployeeRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        leaves=MySQLLeaveRepository(conn),
        salaries=MySQLSalaryRepository(conn),
        events=MySQLEventRepository(conn),
        org_chart=MySQLOrgChartRepository(conn),
    )
    return build_services(repos, grace_minutes=grace_minutes)
