"""In-memory repositories and builders shared by the service and API tests."""
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Any, Optional

from src.staffdesk.staffdesk.container import Container, Repositories, build_services
from src.staffdesk.staffdesk.core.enums import LeaveStatus, Role
from src.staffdesk.staffdesk.core.policy import Principal

_EPOCH = datetime(2026, 1, 1, 8, 0, 0)


class InMemoryRepo:
    """Dict-backed stand-in for ``MySQLTableRepository``."""

    update_skip = ("id", "company_id", "created_at")

    def __init__(self):
        self.rows: dict[int, Any] = {}
        self._next_id = 1
        self._tick = 0

    def _stamp(self) -> datetime:
        self._tick += 1
        return _EPOCH + timedelta(seconds=self._tick)

    def _where(self, **conds) -> list:
        return [r for r in self.rows.values() if all(getattr(r, k) == v for k, v in conds.items())]

    def get_by_id(self, entity_id: int):
        return self.rows.get(int(entity_id))

    def list_for_company(self, company_id: int):
        return sorted(self._where(company_id=company_id), key=lambda r: r.id)

    def create(self, entity):
        created = replace(entity, id=self._next_id, created_at=getattr(entity, "created_at", None) or self._stamp())
        self.rows[created.id] = created
        self._next_id += 1
        return created

    def update(self, entity):
        stored = self.rows.get(int(entity.id))
        if stored is None:
            return None
        kept = {name: getattr(stored, name) for name in self.update_skip if hasattr(stored, name)}
        updated = replace(entity, **kept)
        self.rows[updated.id] = updated
        return updated

    def delete_by_id(self, entity_id: int) -> bool:
        return self.rows.pop(int(entity_id), None) is not None


class FakeCompanies(InMemoryRepo):
    update_skip = ("id", "created_at")

    def get_by_name(self, name: str):
        return next(iter(self._where(name=name)), None)


class FakeUsers(InMemoryRepo):
    update_skip = ("id", "created_at")

    def get_by_username(self, username: str):
        return next(iter(self._where(username=username)), None)


class FakeActivity(InMemoryRepo):
    def list_recent(self, company_id: int, limit: int):
        rows = sorted(self._where(company_id=company_id), key=lambda r: (r.created_at, r.id), reverse=True)
        return rows[:limit]

    def actions(self, company_id: Optional[int] = None) -> list[str]:
        rows = sorted(self.rows.values(), key=lambda r: r.id)
        return [r.action for r in rows if company_id is None or r.company_id == company_id]


class FakeDesignations(InMemoryRepo):
    def list_by_department(self, department_id: int):
        return self._where(department_id=department_id)

    def count_by_department(self, department_id: int) -> int:
        return len(self._where(department_id=department_id))


class FakeEmployees(InMemoryRepo):
    def __init__(self, org_chart: "FakeOrgChart"):
        super().__init__()
        self._org_chart = org_chart

    def delete_by_id(self, entity_id: int) -> bool:
        deleted = super().delete_by_id(entity_id)
        if deleted:
            # org_chart_nodes.employee_id is ON DELETE SET NULL
            for node in self._org_chart._where(employee_id=int(entity_id)):
                self._org_chart.rows[node.id] = replace(node, employee_id=None)
        return deleted

    def get_by_email(self, company_id: int, email: str):
        return next(iter(self._where(company_id=company_id, email=email)), None)

    def get_by_code(self, company_id: int, employee_code: str):
        return next(iter(self._where(company_id=company_id, employee_code=employee_code)), None)

    def count_referencing(self, field: str, value: int) -> int:
        return len(self._where(**{field: value}))

    def count_for_company(self, company_id: int) -> int:
        return len(self._where(company_id=company_id))

    def list_recent(self, company_id: int, limit: int):
        rows = sorted(self._where(company_id=company_id), key=lambda e: (e.date_of_joining, e.id), reverse=True)
        return rows[:limit]


class FakeAttendance(InMemoryRepo):
    def get_for_employee_and_date(self, employee_id: int, work_date: date):
        return next(iter(self._where(employee_id=employee_id, work_date=work_date)), None)

    def list_filtered(self, company_id: int, *, work_date=None, employee_id=None):
        rows = self._where(company_id=company_id)
        if work_date is not None:
            rows = [r for r in rows if r.work_date == work_date]
        if employee_id is not None:
            rows = [r for r in rows if r.employee_id == employee_id]
        return rows

    def count_by_employee(self, employee_id: int) -> int:
        return len(self._where(employee_id=employee_id))

    def count_on_date(self, company_id: int, work_date: date) -> int:
        return len(self._where(company_id=company_id, work_date=work_date))


class FakeLeaves(InMemoryRepo):
    update_skip = ("id", "company_id", "created_at", "status", "approved_by")

    def __init__(self):
        super().__init__()
        self.lose_next_decision = False
        self.decide_before_next_edit = False

    def update_pending(self, entity):
        stored = self.rows.get(int(entity.id))
        if self.decide_before_next_edit and stored is not None:
            # decided by someone else between read and write
            self.decide_before_next_edit = False
            stored = replace(stored, status=LeaveStatus.APPROVED, approved_by=999)
            self.rows[stored.id] = stored
        if stored is None or stored.status != LeaveStatus.PENDING:
            return None
        return self.update(entity)

    def list_filtered(self, company_id: int, *, status=None, employee_id=None):
        rows = self._where(company_id=company_id)
        if status is not None:
            rows = [r for r in rows if r.status == status]
        if employee_id is not None:
            rows = [r for r in rows if r.employee_id == employee_id]
        return rows

    def decide(self, leave_id: int, *, status: LeaveStatus, decided_by: int) -> bool:
        stored = self.rows.get(int(leave_id))
        if self.lose_next_decision:
            # another decider got there first
            self.lose_next_decision = False
            self.rows[stored.id] = replace(stored, status=LeaveStatus.REJECTED, approved_by=999)
            return False
        if stored is None or stored.status != LeaveStatus.PENDING:
            return False
        self.rows[stored.id] = replace(stored, status=status, approved_by=decided_by)
        return True

    def count_by_employee(self, employee_id: int) -> int:
        return len(self._where(employee_id=employee_id))

    def count_by_leave_type(self, leave_type_id: int) -> int:
        return len(self._where(leave_type_id=leave_type_id))

    def count_by_status(self, company_id: int, status: LeaveStatus) -> int:
        return len(self._where(company_id=company_id, status=status))

    def count_on_leave(self, company_id: int, day: date) -> int:
        return len(
            [
                r
                for r in self._where(company_id=company_id, status=LeaveStatus.APPROVED)
                if r.start_date <= day <= r.end_date
            ]
        )


class FakeSalaries(InMemoryRepo):
    def get_for_period(self, employee_id: int, month: int, year: int):
        return next(iter(self._where(employee_id=employee_id, month=month, year=year)), None)

    def list_filtered(self, company_id: int, *, month=None, year=None, employee_id=None):
        rows = self._where(company_id=company_id)
        for name, value in (("month", month), ("year", year), ("employee_id", employee_id)):
            if value is not None:
                rows = [r for r in rows if getattr(r, name) == value]
        return rows

    def count_by_employee(self, employee_id: int) -> int:
        return len(self._where(employee_id=employee_id))


class FakeEvents(InMemoryRepo):
    def list_upcoming(self, company_id: int, from_date: date, limit=None):
        rows = sorted(
            (e for e in self._where(company_id=company_id) if e.start_date >= from_date),
            key=lambda e: (e.start_date, e.start_time or "", e.id),
        )
        return rows if limit is None else rows[:limit]


class FakeOrgChart(InMemoryRepo):
    def count_children(self, parent_id: int) -> int:
        return len(self._where(parent_id=parent_id))


def fake_repositories() -> Repositories:
    org_chart = FakeOrgChart()
    return Repositories(
        companies=FakeCompanies(),
        users=FakeUsers(),
        activity=FakeActivity(),
        departments=InMemoryRepo(),
        designations=FakeDesignations(),
        employee_types=InMemoryRepo(),
        shifts=InMemoryRepo(),
        leave_types=InMemoryRepo(),
        locations=InMemoryRepo(),
        employees=FakeEmployees(org_chart),
        attendance=FakeAttendance(),
        leaves=FakeLeaves(),
        salaries=FakeSalaries(),
        events=FakeEvents(),
        org_chart=org_chart,
    )


def build_fake_container() -> Container:
    return build_services(fake_repositories())


# ----- builders -----


def register_company(container: Container, username: str = "alice", company: str = "Acme") -> Principal:
    """Self-register an admin (and their company); returns the admin principal."""
    user = container.auth_service.register(
        {
            "username": username,
            "password": "secret1",
            "fullName": f"{username.title()} Admin",
            "email": f"{username}@{company.lower()}.test",
            "companyName": company,
        }
    )
    return container.auth_service.load_principal(user.id)


def add_user(container: Container, admin: Principal, username: str, role: Role, email: Optional[str] = None) -> Principal:
    user = container.user_service.create_user(
        admin,
        {
            "username": username,
            "password": "secret1",
            "fullName": f"{username.title()} Person",
            "email": email or f"{username}@example.test",
            "role": role.value,
        },
    )
    return container.auth_service.load_principal(user.id)


def seed_lookups(container: Container, admin: Principal) -> dict:
    dept = container.department_service.create(admin, {"name": "Engineering"})
    designation = container.designation_service.create(admin, {"name": "Developer", "departmentId": dept.id})
    employee_type = container.employee_type_service.create(admin, {"name": "Full-time"})
    shift = container.shift_service.create(admin, {"name": "Day", "startTime": "09:00", "endTime": "17:00"})
    leave_type = container.leave_type_service.create(admin, {"name": "Annual", "allowedDays": 10})
    location = container.location_service.create(admin, {"name": "HQ"})
    return {
        "department": dept,
        "designation": designation,
        "employee_type": employee_type,
        "shift": shift,
        "leave_type": leave_type,
        "location": location,
    }


def employee_payload(lookups: dict, **overrides) -> dict:
    payload = {
        "employeeId": "E-1",
        "firstName": "Bob",
        "lastName": "Builder",
        "email": "bob@example.test",
        "departmentId": lookups["department"].id,
        "designationId": lookups["designation"].id,
        "employeeTypeId": lookups["employee_type"].id,
        "shiftId": lookups["shift"].id,
        "locationId": lookups["location"].id,
        "dateOfJoining": "2024-01-01",
    }
    payload.update(overrides)
    return payload


def make_principal(role: Role = Role.ADMIN, *, company_id: int = 1, user_id: int = 1, email: str = "p@example.test") -> Principal:
    return Principal(
        user_id=user_id,
        username=f"user{user_id}",
        full_name="Test Principal",
        email=email,
        role=role,
        company_id=company_id,
    )
