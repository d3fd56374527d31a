from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentStatus

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class SalaryComponents:
    """Inputs of a pay slip; the calculator turns them into a net amount."""

    basic_salary: Decimal
    house_rent_allowance: Decimal = ZERO
    conveyance_allowance: Decimal = ZERO
    medical_allowance: Decimal = ZERO
    special_allowance: Decimal = ZERO
    provident_fund: Decimal = ZERO
    income_tax: Decimal = ZERO
    professional_tax: Decimal = ZERO
    other_deductions: Decimal = ZERO


@dataclass(frozen=True)
class SalaryRecord:
    """Monthly pay slip of one employee."""

    id: Optional[int]
    company_id: int
    employee_id: int
    month: int
    year: int
    basic_salary: Decimal
    house_rent_allowance: Decimal
    conveyance_allowance: Decimal
    medical_allowance: Decimal
    special_allowance: Decimal
    provident_fund: Decimal
    income_tax: Decimal
    professional_tax: Decimal
    other_deductions: Decimal
    net_salary: Decimal
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_date: Optional[date] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
