from __future__ import annotations

import pytest

from src.staffdesk.staffdesk.core.enums import Role
from src.staffdesk.staffdesk.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from tests.fakes import add_user, register_company


def test_register_creates_company_and_admin(container):
    user = container.auth_service.register(
        {
            "username": "alice",
            "password": "secret1",
            "fullName": "Alice Liddell",
            "email": "alice@example.test",
            "role": "user",
        }
    )

    assert user.role == Role.ADMIN
    company = container.repos.companies.get_by_id(user.company_id)
    assert company.name == "Alice Liddell's Company"
    assert container.repos.activity.actions(user.company_id) == ["User Registration"]
    assert user.password_hash != "secret1"


def test_register_rejects_duplicate_username(container):
    register_company(container, "alice", "Acme")
    with pytest.raises(ConflictError, match="Username already exists"):
        register_company(container, "alice", "Other")


def test_register_validates_all_fields(container):
    with pytest.raises(ValidationError) as exc:
        container.auth_service.register({"username": "al", "password": "123", "email": "nope"})

    fields = {e["field"] for e in exc.value.errors}
    assert fields == {"username", "password", "fullName", "email"}
    assert not container.repos.users.rows


def test_login_failure_does_not_reveal_which_part_was_wrong(container):
    register_company(container, "alice")

    with pytest.raises(AuthenticationError) as unknown:
        container.auth_service.authenticate("bob", "secret1")
    with pytest.raises(AuthenticationError) as wrong:
        container.auth_service.authenticate("alice", "wrong-pass")

    assert unknown.value.message == wrong.value.message == "Invalid username or password"


def test_login_records_activity(container):
    admin = register_company(container, "alice")
    container.auth_service.authenticate("alice", "secret1")

    assert container.repos.activity.actions(admin.company_id)[-1] == "User Login"


def test_password_change_requires_current_password(container):
    admin = register_company(container, "alice")
    payload = {"fullName": "Alice A", "email": "alice@acme.test", "newPassword": "newsecret", "currentPassword": "bad"}

    with pytest.raises(ValidationError) as exc:
        container.auth_service.update_profile(admin, payload)
    assert exc.value.errors[0]["field"] == "currentPassword"

    container.auth_service.update_profile(admin, dict(payload, currentPassword="secret1"))
    assert container.auth_service.authenticate("alice", "newsecret").id == admin.user_id


def test_only_admin_manages_users(container):
    admin = register_company(container, "alice")
    hr = add_user(container, admin, "henry", Role.HR)

    with pytest.raises(AuthorizationError):
        container.user_service.list_users(hr)
    assert [u.username for u in container.user_service.list_users(admin)] == ["alice", "henry"]


def test_admin_cannot_demote_self(container):
    admin = register_company(container, "alice")
    with pytest.raises(ValidationError) as exc:
        container.user_service.update_user(
            admin, admin.user_id, {"fullName": "Alice A", "email": "alice@acme.test", "role": "hr"}
        )
    assert exc.value.errors[0]["field"] == "role"


def test_admin_cannot_touch_other_company_users(container):
    acme = register_company(container, "alice", "Acme")
    globex = register_company(container, "gina", "Globex")

    with pytest.raises(NotFoundError):
        container.user_service.update_user(
            acme, globex.user_id, {"fullName": "Gina G", "email": "g@globex.test", "role": "user"}
        )


def test_failed_admin_insert_removes_the_new_company(container, monkeypatch):
    def lost_race(user):
        raise ConflictError("A record with the same unique values already exists")

    monkeypatch.setattr(container.repos.users, "create", lost_race)
    with pytest.raises(ConflictError):
        register_company(container, "alice", "Acme")

    assert container.repos.companies.get_by_name("Acme") is None
    assert container.repos.activity.actions() == []

    monkeypatch.undo()
    admin = register_company(container, "alice", "Acme")
    assert container.repos.companies.get_by_id(admin.company_id).name == "Acme"
