from __future__ import annotations

from typing import Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class TenantRepository(Protocol[T]):
    """Repository interface shared by every company-scoped entity.

    Note (DIP): services depend on this interface, never on a concrete DB.
    ``update`` is a full-record replace keyed by ``entity.id``.
    """

    def get_by_id(self, entity_id: int) -> Optional[T]:
        raise NotImplementedError

    def list_for_company(self, company_id: int) -> Sequence[T]:
        raise NotImplementedError

    def create(self, entity: T) -> T:
        raise NotImplementedError

    def update(self, entity: T) -> Optional[T]:
        raise NotImplementedError

    def delete_by_id(self, entity_id: int) -> bool:
        raise NotImplementedError
