"""Create a demo company with an admin account and a few lookups.

Runs through the regular services, so every row is validated and logged like
a request would be. Safe to re-run: an existing demo admin stops the script.
"""
from __future__ import annotations

import importlib
import logging
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.staffdesk.staffdesk.container import build_container

logger = logging.getLogger("staffdesk.seed_db")

DEMO_ADMIN = {
    "username": "admin",
    "password": "admin123",
    "fullName": "Admin Demo",
    "email": "admin@demo.local",
    "companyName": "Demo Company",
}


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))

    if container.repos.users.get_by_username(DEMO_ADMIN["username"]):
        logger.info("Demo admin already exists; nothing to do")
        return

    admin = container.auth_service.register(DEMO_ADMIN)
    principal = container.auth_service.load_principal(admin.id)

    dept = container.department_service.create(principal, {"name": "Engineering"})
    container.department_service.create(principal, {"name": "Human Resources"})
    designation = container.designation_service.create(
        principal, {"name": "Software Engineer", "departmentId": dept.id}
    )
    full_time = container.employee_type_service.create(principal, {"name": "Full-time"})
    shift = container.shift_service.create(principal, {"name": "Day", "startTime": "09:00", "endTime": "17:00"})
    container.leave_type_service.create(principal, {"name": "Annual Leave", "allowedDays": 12, "isPaid": True})
    container.leave_type_service.create(principal, {"name": "Unpaid Leave", "allowedDays": 30, "isPaid": False})
    office = container.location_service.create(principal, {"name": "Head Office", "city": "Hanoi", "country": "VN"})

    container.employee_service.create_employee(
        principal,
        {
            "employeeId": "EMP-001",
            "firstName": "Nguyen",
            "lastName": "Van A",
            "email": "nguyenvana@demo.local",
            "departmentId": dept.id,
            "designationId": designation.id,
            "employeeTypeId": full_time.id,
            "shiftId": shift.id,
            "locationId": office.id,
            "dateOfJoining": date.today().isoformat(),
        },
    )
    logger.info("Seeded demo company %r (login: %s / %s)", DEMO_ADMIN["companyName"], DEMO_ADMIN["username"], DEMO_ADMIN["password"])


if __name__ == "__main__":
    main()
