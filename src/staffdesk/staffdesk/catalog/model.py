from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Department:
    id: Optional[int]
    company_id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Designation:
    id: Optional[int]
    company_id: int
    name: str
    department_id: int
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class EmployeeType:
    id: Optional[int]
    company_id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Shift:
    """Work shift; times are 'HH:MM' strings."""

    id: Optional[int]
    company_id: int
    name: str
    start_time: str
    end_time: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def crosses_midnight(self) -> bool:
        return self.end_time < self.start_time


@dataclass(frozen=True)
class LeaveType:
    id: Optional[int]
    company_id: int
    name: str
    allowed_days: int
    is_paid: bool = True
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Location:
    """Branch / office."""

    id: Optional[int]
    company_id: int
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip_code: Optional[str] = None
    created_at: Optional[datetime] = None
