from __future__ import annotations

from ..database.mysql_base import MySQLTableRepository
from .model import OrgChartNode
from .repository import OrgChartRepository


class MySQLOrgChartRepository(MySQLTableRepository[OrgChartNode], OrgChartRepository):
    table = "org_chart_nodes"
    model = OrgChartNode
    column_names = {"order": "sort_order"}
    converters = {"is_active": bool}
    default_order = "`level`, `sort_order`, `id`"

    def count_children(self, parent_id: int) -> int:
        return self._count_where("`parent_id`=%s", (int(parent_id),))
