from __future__ import annotations

from typing import Optional, Protocol

from .model import Company


class CompanyRepository(Protocol):
    def get_by_id(self, company_id: int) -> Optional[Company]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Company]:
        raise NotImplementedError

    def create(self, company: Company) -> Company:
        raise NotImplementedError

    def update(self, company: Company) -> Optional[Company]:
        raise NotImplementedError

    def delete_by_id(self, company_id: int) -> bool:
        raise NotImplementedError
