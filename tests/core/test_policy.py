from __future__ import annotations

from types import SimpleNamespace

import pytest

from src.staffdesk.staffdesk.core.enums import Role
from src.staffdesk.staffdesk.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    InvalidReferenceError,
    NotFoundError,
)
from src.staffdesk.staffdesk.core.policy import authorize, ensure_owned, require_reference, resolve_principal
from tests.fakes import make_principal


def test_roles_are_ordered():
    assert Role.ADMIN.has_at_least(Role.HR)
    assert Role.HR.has_at_least(Role.MANAGER)
    assert Role.MANAGER.has_at_least(Role.USER)
    assert not Role.USER.has_at_least(Role.MANAGER)
    assert not Role.HR.has_at_least(Role.ADMIN)


@pytest.mark.parametrize("role", [Role.USER, Role.MANAGER])
def test_authorize_rejects_lower_roles(role):
    with pytest.raises(AuthorizationError):
        authorize(make_principal(role), Role.HR)


def test_authorize_accepts_higher_role():
    authorize(make_principal(Role.ADMIN), Role.HR)


def test_user_without_company_is_not_authenticated():
    user = SimpleNamespace(id=1, username="a", full_name="A", email="a@x.io", role="admin", company_id=None)
    with pytest.raises(AuthenticationError):
        resolve_principal(user)
    with pytest.raises(AuthenticationError):
        resolve_principal(None)


def test_foreign_tenant_row_looks_missing():
    principal = make_principal(company_id=1)
    foreign = SimpleNamespace(id=7, company_id=2)

    with pytest.raises(NotFoundError) as exc:
        ensure_owned(foreign, principal, "Department")
    assert exc.value.message == "Department not found"
    assert exc.value.status_code == 404


def test_require_reference_rejects_other_company():
    principal = make_principal(company_id=1)
    rows = {3: SimpleNamespace(id=3, company_id=2)}

    with pytest.raises(InvalidReferenceError) as exc:
        require_reference(rows.get, 3, principal, field="departmentId", label="Department")
    assert exc.value.field == "departmentId"
    assert exc.value.status_code == 400
