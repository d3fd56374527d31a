"""Tenant scoping and role checks shared by every resource service.

Every service call receives a ``Principal`` and goes through the same gates:
``authorize`` for the role, ``ensure_owned`` for entities fetched by id and
``require_reference`` for foreign keys named in a payload.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from .enums import Role
from .exceptions import AuthenticationError, AuthorizationError, InvalidReferenceError, NotFoundError

T = TypeVar("T")


@dataclass(frozen=True)
class Principal:
    """The authenticated caller as seen by services."""

    user_id: int
    username: str
    full_name: str
    email: str
    role: Role
    company_id: int


def resolve_principal(user: Any) -> Principal:
    """Derive the acting principal from a user record.

    A user without a company is not authenticated for tenant-scoped work.
    """
    if user is None or getattr(user, "company_id", None) is None:
        raise AuthenticationError("Unauthorized")
    return Principal(
        user_id=int(user.id),
        username=user.username,
        full_name=user.full_name,
        email=user.email,
        role=Role(user.role),
        company_id=int(user.company_id),
    )


def authorize(principal: Principal, required: Role) -> None:
    if not principal.role.has_at_least(required):
        raise AuthorizationError("Insufficient permissions")


def ensure_owned(entity: Optional[T], principal: Principal, label: str) -> T:
    """Return ``entity`` if it exists and belongs to the principal's company.

    Foreign-tenant rows are reported exactly like missing ones.
    """
    if entity is None or getattr(entity, "company_id", None) != principal.company_id:
        raise NotFoundError(f"{label} not found")
    return entity


def require_reference(
    fetch: Callable[[int], Optional[T]],
    entity_id: Optional[int],
    principal: Principal,
    *,
    field: str,
    label: str,
) -> T:
    """Re-fetch a referenced row and verify it is in the principal's company."""
    entity = fetch(int(entity_id)) if entity_id is not None else None
    if entity is None or getattr(entity, "company_id", None) != principal.company_id:
        raise InvalidReferenceError(field, f"{label} {entity_id} does not exist")
    return entity
