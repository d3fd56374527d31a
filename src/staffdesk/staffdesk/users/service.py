from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..activity.service import ActivityService
from ..common.validators import PayloadReader
from ..companies.model import Company
from ..companies.repository import CompanyRepository
from ..core.constants import MIN_FULL_NAME_LENGTH, MIN_PASSWORD_LENGTH, MIN_USERNAME_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, ValidationError
from ..core.policy import Principal, authorize, ensure_owned, resolve_principal
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _read_account_fields(reader: PayloadReader) -> tuple[Optional[str], Optional[str], Optional[str], Optional[str]]:
    username = reader.string("username", min_len=MIN_USERNAME_LENGTH)
    password = reader.string("password", min_len=MIN_PASSWORD_LENGTH)
    full_name = reader.string("fullName", min_len=MIN_FULL_NAME_LENGTH)
    email = reader.email("email")
    return username, password, full_name, email


class AuthService:
    """Use cases: register, login, logout, own profile."""

    def __init__(self, users: UserRepository, companies: CompanyRepository, activity: ActivityService):
        self._users = users
        self._companies = companies
        self._activity = activity

    def register(self, payload: Mapping[str, Any]) -> User:
        """Self-registration.

        The registrant always becomes ``admin`` of a company created for them;
        a ``role`` sent by the client is ignored.
        """
        reader = PayloadReader(payload)
        username, password, full_name, email = _read_account_fields(reader)
        company_name = reader.string("companyName", required=False)
        reader.raise_if_errors()

        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")

        if company_name:
            if self._companies.get_by_name(company_name):
                raise ConflictError("Company name already exists")
        else:
            company_name = f"{full_name}'s Company"
            if self._companies.get_by_name(company_name):
                company_name = f"{full_name}'s Company ({username})"

        company = self._companies.create(Company(id=None, name=company_name, email=email))
        try:
            user = self._users.create(
                User(
                    id=None,
                    username=username,
                    password_hash=generate_password_hash(password),
                    full_name=full_name,
                    email=email,
                    role=Role.ADMIN,
                    company_id=company.id,
                )
            )
        except Exception:
            # every company keeps at least its registering admin
            logger.warning("Registration of %r failed; removing company %s", username, company.id)
            self._companies.delete_by_id(company.id)
            raise

        self._activity.record_for(
            user_id=user.id,
            company_id=company.id,
            action="User Registration",
            details=f"New user {username} registered as admin of {company.name}",
        )
        return user

    def authenticate(self, username: str, password: str) -> User:
        user = self._users.get_by_username((username or "").strip())
        if not user:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        self._activity.record_for(
            user_id=user.id,
            company_id=user.company_id,
            action="User Login",
            details=f"User {user.username} logged in",
        )
        return user

    def logout(self, principal: Principal) -> None:
        self._activity.record(principal, "User Logout", f"User {principal.username} logged out")

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get_by_id(int(user_id))

    def load_principal(self, user_id: Optional[int]) -> Principal:
        """Session -> principal. Raises AuthenticationError when unusable."""
        if user_id is None:
            raise AuthenticationError("Unauthorized")
        return resolve_principal(self._users.get_by_id(int(user_id)))

    def update_profile(self, principal: Principal, payload: Mapping[str, Any]) -> User:
        reader = PayloadReader(payload)
        full_name = reader.string("fullName", min_len=MIN_FULL_NAME_LENGTH)
        email = reader.email("email")
        avatar = reader.string("avatar", required=False)
        new_password = reader.string("newPassword", required=False, min_len=MIN_PASSWORD_LENGTH)
        current_password = reader.string("currentPassword", required=new_password is not None)
        reader.raise_if_errors()

        user = self._users.get_by_id(principal.user_id)
        if user is None:
            raise AuthenticationError("Unauthorized")

        password_hash = user.password_hash
        if new_password:
            if not check_password_hash(user.password_hash, current_password or ""):
                raise ValidationError(
                    "Validation failed",
                    [{"field": "currentPassword", "message": "Current password is incorrect"}],
                )
            password_hash = generate_password_hash(new_password)

        updated = self._users.update(
            replace(user, full_name=full_name, email=email, avatar=avatar, password_hash=password_hash)
        )
        self._activity.record(principal, "Profile Updated", f"User {principal.username} updated their profile")
        return updated


class UserService:
    """Use cases: manage the accounts of one company (admin)."""

    def __init__(self, users: UserRepository, activity: ActivityService):
        self._users = users
        self._activity = activity

    def list_users(self, principal: Principal) -> Sequence[User]:
        authorize(principal, Role.ADMIN)
        return self._users.list_for_company(principal.company_id)

    def create_user(self, principal: Principal, payload: Mapping[str, Any]) -> User:
        authorize(principal, Role.ADMIN)
        reader = PayloadReader(payload)
        username, password, full_name, email = _read_account_fields(reader)
        role = reader.choice("role", Role, default=Role.USER)
        avatar = reader.string("avatar", required=False)
        reader.raise_if_errors()

        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")

        user = self._users.create(
            User(
                id=None,
                username=username,
                password_hash=generate_password_hash(password),
                full_name=full_name,
                email=email,
                role=role,
                company_id=principal.company_id,
                avatar=avatar,
            )
        )
        self._activity.record(principal, "User Created", f"User {username} created with role {role.value}")
        return user

    def update_user(self, principal: Principal, user_id: int, payload: Mapping[str, Any]) -> User:
        authorize(principal, Role.ADMIN)
        user = ensure_owned(self._users.get_by_id(int(user_id)), principal, "User")

        reader = PayloadReader(payload)
        full_name = reader.string("fullName", min_len=MIN_FULL_NAME_LENGTH)
        email = reader.email("email")
        role = reader.choice("role", Role)
        avatar = reader.string("avatar", required=False)
        reader.raise_if_errors()

        if user.id == principal.user_id and role != Role.ADMIN:
            raise ValidationError(
                "Validation failed",
                [{"field": "role", "message": "You cannot remove your own admin role"}],
            )

        updated = self._users.update(replace(user, full_name=full_name, email=email, role=role, avatar=avatar))
        self._activity.record(principal, "User Updated", f"User {user.username} updated (role {role.value})")
        return updated
