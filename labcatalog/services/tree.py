"""
Arena view of the category hierarchy.

Rows are held in a dict keyed by id and every relation is an id that is
resolved through that dict. Nothing holds a reference to another node, so a
bad ``parent_id`` in the table can never produce a cyclic object graph; it
shows up as a dangling or self-parented node instead.
"""
from __future__ import annotations

from dataclasses import dataclass, field

import sqlalchemy as sa
from sqlalchemy.orm import Session

from labcatalog.models.category import Category


@dataclass
class CategoryNode:
    id: int
    name: str
    description: str | None
    image_url: str | None
    active: bool
    display_order: int
    parent_id: int | None
    child_ids: list[int] = field(default_factory=list)


class CategoryTree:
    """Nodes keep the order of the rows they were built from.

    ``load`` reads rows ordered by (display_order, name, id), the same order
    the single-category queries use.
    """

    def __init__(self, nodes: dict[int, CategoryNode]):
        self._nodes = nodes
        for node in nodes.values():
            node.child_ids.clear()
        for node in nodes.values():
            if node.parent_id is not None and node.parent_id != node.id and node.parent_id in nodes:
                nodes[node.parent_id].child_ids.append(node.id)

    @classmethod
    def from_rows(cls, rows) -> CategoryTree:
        return cls(
            {
                row.id: CategoryNode(
                    id=row.id,
                    name=row.name,
                    description=row.description,
                    image_url=row.image_url,
                    active=bool(row.active),
                    display_order=int(row.display_order or 0),
                    parent_id=row.parent_id,
                )
                for row in rows
            }
        )

    @classmethod
    def load(cls, db: Session, *, active_only: bool = False) -> CategoryTree:
        stmt = sa.select(Category).order_by(Category.display_order, Category.name, Category.id)
        if active_only:
            stmt = stmt.where(Category.active.is_(True))
        return cls.from_rows(db.scalars(stmt).all())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, category_id: int) -> bool:
        return category_id in self._nodes

    def get(self, category_id: int) -> CategoryNode | None:
        return self._nodes.get(category_id)

    def nodes(self) -> list[CategoryNode]:
        return list(self._nodes.values())

    def roots(self) -> list[CategoryNode]:
        return [n for n in self.nodes() if n.parent_id is None]

    def children(self, category_id: int) -> list[CategoryNode]:
        node = self.get(category_id)
        if node is None:
            return []
        return [self._nodes[c] for c in node.child_ids]

    def parent(self, category_id: int) -> CategoryNode | None:
        node = self.get(category_id)
        if node is None or node.parent_id is None:
            return None
        return self.get(node.parent_id)

    def depth(self, category_id: int) -> int:
        """1 for a root, 2 for a subcategory, and so on.

        Returns -1 when the parent chain loops or leaves the tree.
        """
        seen: set[int] = set()
        current = self.get(category_id)
        depth = 0
        while current is not None:
            if current.id in seen:
                return -1
            seen.add(current.id)
            depth += 1
            if current.parent_id is None:
                return depth
            current = self.get(current.parent_id)
        return -1

    def self_parented(self) -> list[CategoryNode]:
        return [n for n in self.nodes() if n.parent_id == n.id]

    def dangling(self) -> list[CategoryNode]:
        return [
            n for n in self.nodes()
            if n.parent_id is not None and n.parent_id != n.id and n.parent_id not in self._nodes
        ]

    def deeper_than(self, max_depth: int) -> list[CategoryNode]:
        return [n for n in self.nodes() if self.depth(n.id) > max_depth]
