from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..activity.service import ActivityService
from ..common.validators import PayloadReader
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.policy import Principal, authorize, ensure_owned, require_reference
from ..employees.repository import EmployeeRepository
from .model import OrgChartBranch, OrgChartNode, build_tree
from .repository import OrgChartRepository


class OrgChartService:
    def __init__(self, nodes: OrgChartRepository, employees: EmployeeRepository, activity: ActivityService):
        self._nodes = nodes
        self._employees = employees
        self._activity = activity

    def list_nodes(self, principal: Principal) -> Sequence[OrgChartNode]:
        authorize(principal, Role.USER)
        return self._nodes.list_for_company(principal.company_id)

    def tree(self, principal: Principal) -> List[OrgChartBranch]:
        authorize(principal, Role.USER)
        return build_tree(list(self._nodes.list_for_company(principal.company_id)))

    def get_node(self, principal: Principal, node_id: int) -> OrgChartNode:
        authorize(principal, Role.USER)
        return ensure_owned(self._nodes.get_by_id(int(node_id)), principal, "Org chart node")

    def create_node(self, principal: Principal, payload: Mapping[str, Any]) -> OrgChartNode:
        authorize(principal, Role.HR)
        values = self._read(payload)
        self._check_references(principal, values, node_id=None)

        created = self._nodes.create(OrgChartNode(id=None, company_id=principal.company_id, **values))
        self._activity.record(principal, "Org Chart Node Created", f'Org chart node "{created.name}" created')
        return created

    def update_node(self, principal: Principal, node_id: int, payload: Mapping[str, Any]) -> OrgChartNode:
        authorize(principal, Role.HR)
        existing = ensure_owned(self._nodes.get_by_id(int(node_id)), principal, "Org chart node")
        values = self._read(payload)
        self._check_references(principal, values, node_id=existing.id)

        updated = self._nodes.update(replace(existing, **values))
        if updated is None:
            raise NotFoundError("Org chart node not found")
        self._activity.record(principal, "Org Chart Node Updated", f'Org chart node "{updated.name}" updated')
        return updated

    def delete_node(self, principal: Principal, node_id: int) -> None:
        authorize(principal, Role.ADMIN)
        existing = ensure_owned(self._nodes.get_by_id(int(node_id)), principal, "Org chart node")
        if self._nodes.count_children(existing.id) > 0:
            raise ConflictError("Cannot delete a node that has child nodes")
        if not self._nodes.delete_by_id(existing.id):
            raise NotFoundError("Org chart node not found")
        self._activity.record(principal, "Org Chart Node Deleted", f'Org chart node "{existing.name}" deleted')

    # ----- helpers -----

    @staticmethod
    def _read(payload: Mapping[str, Any]) -> Dict[str, Any]:
        reader = PayloadReader(payload)
        values = {
            "name": reader.string("name"),
            "title": reader.string("title", required=False),
            "employee_id": reader.integer("employeeId", required=False, min_value=1),
            "parent_id": reader.integer("parentId", required=False, min_value=1),
            "level": reader.integer("level", required=False, min_value=0),
            "order": reader.integer("order", required=False, min_value=0),
            "is_active": reader.boolean("isActive", default=True),
        }
        reader.raise_if_errors()
        if values["order"] is None:
            values["order"] = 0
        return values

    def _check_references(self, principal: Principal, values: Dict[str, Any], node_id: Optional[int]) -> None:
        if values["employee_id"] is not None:
            require_reference(
                self._employees.get_by_id, values["employee_id"], principal,
                field="employeeId", label="Employee",
            )

        parent = None
        if values["parent_id"] is not None:
            parent = require_reference(
                self._nodes.get_by_id, values["parent_id"], principal,
                field="parentId", label="Org chart node",
            )
            if node_id is not None:
                self._ensure_not_ancestor(node_id, parent)

        if values["level"] is None:
            values["level"] = parent.level + 1 if parent else 0

    def _ensure_not_ancestor(self, node_id: int, parent: OrgChartNode) -> None:
        """Walk up from the new parent; meeting ``node_id`` means a cycle."""
        seen = set()
        current: Optional[OrgChartNode] = parent
        while current is not None and current.id not in seen:
            if current.id == node_id:
                raise ValidationError(
                    "Validation failed",
                    [{"field": "parentId", "message": "A node cannot be placed under itself or its descendants"}],
                )
            seen.add(current.id)
            current = self._nodes.get_by_id(current.parent_id) if current.parent_id is not None else None
