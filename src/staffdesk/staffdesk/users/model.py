from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a login account.

    Note: plain data object, no DB access here. ``password_hash`` must never
    leave the service layer.
    """

    id: Optional[int]
    username: str
    password_hash: str
    full_name: str
    email: str
    role: Role
    company_id: Optional[int]
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
