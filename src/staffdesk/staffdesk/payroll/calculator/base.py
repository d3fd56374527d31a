from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ..model import SalaryComponents


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def gross(self, parts: SalaryComponents) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def deductions(self, parts: SalaryComponents) -> Decimal:
        raise NotImplementedError

    def net(self, parts: SalaryComponents) -> Decimal:
        return self.gross(parts) - self.deductions(parts)
