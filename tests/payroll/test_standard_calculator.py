from decimal import Decimal

from src.staffdesk.staffdesk.payroll.calculator.standard_calculator import StandardSalaryCalculator
from src.staffdesk.staffdesk.payroll.model import SalaryComponents


def test_standard_calculator_subtracts_deductions():
    parts = SalaryComponents(
        basic_salary=Decimal("5000.00"),
        house_rent_allowance=Decimal("1000.00"),
        conveyance_allowance=Decimal("200.00"),
        medical_allowance=Decimal("150.00"),
        special_allowance=Decimal("50.00"),
        provident_fund=Decimal("600.00"),
        income_tax=Decimal("400.00"),
        professional_tax=Decimal("20.00"),
        other_deductions=Decimal("30.00"),
    )

    calc = StandardSalaryCalculator()
    assert calc.gross(parts) == Decimal("6400.00")
    assert calc.net(parts) == Decimal("5350.00")


def test_net_may_go_negative():
    parts = SalaryComponents(basic_salary=Decimal("100.00"), other_deductions=Decimal("150.00"))
    assert StandardSalaryCalculator().net(parts) == Decimal("-50.00")
