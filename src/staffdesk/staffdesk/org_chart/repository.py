from __future__ import annotations

from typing import Protocol

from ..common.repository import TenantRepository
from .model import OrgChartNode


class OrgChartRepository(TenantRepository[OrgChartNode], Protocol):
    def count_children(self, parent_id: int) -> int:
        raise NotImplementedError
