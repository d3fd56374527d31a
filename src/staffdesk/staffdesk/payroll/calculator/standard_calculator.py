from __future__ import annotations

from decimal import Decimal

from ..model import SalaryComponents
from .base import SalaryCalculator


class StandardSalaryCalculator(SalaryCalculator):
    """Standard rule: basic + allowances - deductions, no floor."""

    def gross(self, parts: SalaryComponents) -> Decimal:
        return (
            parts.basic_salary
            + parts.house_rent_allowance
            + parts.conveyance_allowance
            + parts.medical_allowance
            + parts.special_allowance
        )

    def deductions(self, parts: SalaryComponents) -> Decimal:
        return parts.provident_fund + parts.income_tax + parts.professional_tax + parts.other_deductions
