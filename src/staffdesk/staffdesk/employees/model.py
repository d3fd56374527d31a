from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Staff record of one company.

    ``employee_code`` is the human-facing business id (JSON ``employeeId``);
    ``id`` is the surrogate key every other table references.
    """

    id: Optional[int]
    company_id: int
    employee_code: str
    first_name: str
    last_name: str
    email: str
    department_id: int
    designation_id: int
    employee_type_id: int
    shift_id: int
    location_id: int
    date_of_joining: date
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip_code: Optional[str] = None
    gender: Optional[str] = None
    avatar: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
