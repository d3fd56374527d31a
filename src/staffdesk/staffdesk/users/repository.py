from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """User repository interface.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_for_company(self, company_id: int) -> Sequence[User]:
        raise NotImplementedError

    def create(self, user: User) -> User:
        raise NotImplementedError

    def update(self, user: User) -> Optional[User]:
        raise NotImplementedError
