from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from ..activity.service import ActivityService
from ..common.validators import PayloadReader
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError
from ..core.policy import Principal, authorize
from .model import Company
from .repository import CompanyRepository


class CompanyService:
    """Use case: read and edit the caller's own company profile."""

    def __init__(self, companies: CompanyRepository, activity: ActivityService):
        self._companies = companies
        self._activity = activity

    def get_company(self, principal: Principal) -> Company:
        company = self._companies.get_by_id(principal.company_id)
        if company is None:
            raise NotFoundError("Company not found")
        return company

    def update_company(self, principal: Principal, payload: Mapping[str, Any]) -> Company:
        authorize(principal, Role.ADMIN)
        company = self.get_company(principal)

        reader = PayloadReader(payload)
        name = reader.string("name")
        email = reader.email("email", required=False)
        optional = {
            field: reader.string(field, required=False)
            for field in ("description", "address", "phone", "website", "logo")
        }
        reader.raise_if_errors()

        other = self._companies.get_by_name(name)
        if other is not None and other.id != company.id:
            raise ConflictError("Company name already exists")

        updated = self._companies.update(replace(company, name=name, email=email, **optional))
        self._activity.record(principal, "Company Updated", f'Company "{name}" updated')
        return updated
