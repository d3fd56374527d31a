from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class OrgChartNode:
    id: Optional[int]
    company_id: int
    name: str
    title: Optional[str] = None
    employee_id: Optional[int] = None
    parent_id: Optional[int] = None
    level: int = 0
    order: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class OrgChartBranch:
    """Read-model: a node with its nested children."""

    node: OrgChartNode
    children: List["OrgChartBranch"] = field(default_factory=list)


def build_tree(nodes: List[OrgChartNode]) -> List[OrgChartBranch]:
    """Group nodes by parent and return the forest of roots.

    Siblings are sorted by ``order`` then id. A node whose parent is not in
    ``nodes`` is treated as a root.
    """
    ids = {n.id for n in nodes}
    by_parent: dict = {}
    for n in nodes:
        key = n.parent_id if n.parent_id in ids else None
        by_parent.setdefault(key, []).append(n)

    def branch(node: OrgChartNode, seen: frozenset) -> OrgChartBranch:
        kids = sorted(by_parent.get(node.id, []), key=lambda c: (c.order, c.id))
        return OrgChartBranch(node=node, children=[branch(c, seen | {node.id}) for c in kids if c.id not in seen])

    roots = sorted(by_parent.get(None, []), key=lambda r: (r.order, r.id))
    return [branch(r, frozenset()) for r in roots]
