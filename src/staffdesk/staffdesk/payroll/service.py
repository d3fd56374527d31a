from __future__ import annotations

from dataclasses import fields, replace
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Sequence

from ..activity.service import ActivityService, best_effort
from ..common.datetime_utils import today_local
from ..common.validators import PayloadReader
from ..core.constants import NET_SALARY_TOLERANCE
from ..core.enums import PaymentStatus, Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.policy import Principal, authorize, ensure_owned, require_reference
from ..employees.repository import EmployeeRepository
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import StandardSalaryCalculator
from .model import SalaryComponents, SalaryRecord
from .repository import SalaryRepository

_COMPONENT_FIELDS = {
    "basic_salary": "basicSalary",
    "house_rent_allowance": "houseRentAllowance",
    "conveyance_allowance": "conveyanceAllowance",
    "medical_allowance": "medicalAllowance",
    "special_allowance": "specialAllowance",
    "provident_fund": "providentFund",
    "income_tax": "incomeTax",
    "professional_tax": "professionalTax",
    "other_deductions": "otherDeductions",
}


class SalaryService:
    """Use cases: monthly salary records.

    The stored ``net_salary`` is always the calculator's result; a client
    value is only checked against it.
    """

    def __init__(
        self,
        salaries: SalaryRepository,
        employees: EmployeeRepository,
        activity: ActivityService,
        *,
        calculator: Optional[SalaryCalculator] = None,
    ):
        self._salaries = salaries
        self._employees = employees
        self._activity = activity
        self._calculator = calculator or StandardSalaryCalculator()

    def list_salaries(
        self,
        principal: Principal,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[SalaryRecord]:
        authorize(principal, Role.HR)
        return self._salaries.list_filtered(principal.company_id, month=month, year=year, employee_id=employee_id)

    def get_salary(self, principal: Principal, salary_id: int) -> SalaryRecord:
        authorize(principal, Role.HR)
        return ensure_owned(self._salaries.get_by_id(int(salary_id)), principal, "Salary record")

    def create_salary(self, principal: Principal, payload: Mapping[str, Any]) -> SalaryRecord:
        authorize(principal, Role.HR)
        values = self._read(payload)
        employee = require_reference(
            self._employees.get_by_id, values["employee_id"], principal,
            field="employeeId", label="Employee",
        )
        if self._salaries.get_for_period(employee.id, values["month"], values["year"]):
            raise ConflictError("Salary record for this employee and period already exists")

        created = self._salaries.create(SalaryRecord(id=None, company_id=principal.company_id, **values))
        self._activity.record(
            principal,
            "Salary Created",
            f"Salary for {employee.full_name} for {created.month:02d}/{created.year} "
            f"created (net {created.net_salary})",
        )
        return created

    def update_salary(self, principal: Principal, salary_id: int, payload: Mapping[str, Any]) -> SalaryRecord:
        authorize(principal, Role.HR)
        existing = ensure_owned(self._salaries.get_by_id(int(salary_id)), principal, "Salary record")
        values = self._read(payload)
        employee = require_reference(
            self._employees.get_by_id, values["employee_id"], principal,
            field="employeeId", label="Employee",
        )
        clash = self._salaries.get_for_period(employee.id, values["month"], values["year"])
        if clash is not None and clash.id != existing.id:
            raise ConflictError("Salary record for this employee and period already exists")

        updated = self._salaries.update(replace(existing, **values))
        if updated is None:
            raise NotFoundError("Salary record not found")
        self._activity.record(
            principal,
            "Salary Updated",
            f"Salary for {employee.full_name} for {updated.month:02d}/{updated.year} "
            f"updated ({updated.payment_status.value}, net {updated.net_salary})",
        )
        return updated

    def delete_salary(self, principal: Principal, salary_id: int) -> None:
        authorize(principal, Role.ADMIN)
        existing = ensure_owned(self._salaries.get_by_id(int(salary_id)), principal, "Salary record")
        if not self._salaries.delete_by_id(existing.id):
            raise NotFoundError("Salary record not found")

        employee_name = best_effort(lambda: self._employees.get_by_id(existing.employee_id).full_name)
        self._activity.record(
            principal,
            "Salary Deleted",
            f"Salary for {employee_name} for {existing.month:02d}/{existing.year} deleted",
        )

    def compute_net(self, parts: SalaryComponents) -> Decimal:
        return self._calculator.net(parts)

    # ----- helpers -----

    def _read(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        reader = PayloadReader(payload)
        zero = Decimal("0.00")
        amounts = {
            name: reader.amount(key) if name == "basic_salary" else reader.amount(key, required=False, default=zero)
            for name, key in _COMPONENT_FIELDS.items()
        }
        values: Dict[str, Any] = {
            "employee_id": reader.integer("employeeId", min_value=1),
            "month": reader.integer("month", min_value=1, max_value=12),
            "year": reader.integer("year", min_value=1900, max_value=9999),
            "payment_status": reader.choice("paymentStatus", PaymentStatus, default=PaymentStatus.PENDING),
            "payment_date": reader.date("paymentDate", required=False),
            "remarks": reader.string("remarks", required=False),
        }
        claimed = reader.amount("netSalary", required=False)
        reader.raise_if_errors()

        parts = SalaryComponents(**amounts)
        net = self.compute_net(parts)
        if claimed is not None and abs(claimed - net) > NET_SALARY_TOLERANCE:
            raise ValidationError(
                "Validation failed",
                [{"field": "netSalary", "message": f"Net salary does not match the computed value {net}"}],
            )
        if values["payment_status"] == PaymentStatus.PAID and values["payment_date"] is None:
            values["payment_date"] = today_local()

        values.update({f.name: getattr(parts, f.name) for f in fields(parts)})
        values["net_salary"] = net
        return values
