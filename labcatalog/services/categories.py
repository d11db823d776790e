from __future__ import annotations

import logging
from dataclasses import dataclass

import sqlalchemy as sa
from sqlalchemy.orm import Session

from labcatalog.core.config import settings
from labcatalog.db.session import transaction
from labcatalog.models.category import Category
from labcatalog.models.lab_test import LabTest
from labcatalog.schemas.category import (
    AdminCategoryOut,
    CategoryCreateIn,
    CategoryDeleteOut,
    CategoryDetailOut,
    CategoryNodeOut,
    CategoryOut,
    CategorySummaryOut,
    CategoryUpdateIn,
    PublicCategoryOut,
)
from labcatalog.schemas.common import RefOut
from labcatalog.services.errors import NotFoundError, ValidationError
from labcatalog.services.lab_tests import lab_test_summary
from labcatalog.services.ordering import apply_display_order
from labcatalog.services.tree import CategoryNode, CategoryTree

logger = logging.getLogger(__name__)

NEEDS_DISPOSITION = (
    "Cannot delete category with subcategories. "
    "Please delete or reassign subcategories first."
)


@dataclass(frozen=True)
class DeleteAll:
    option = "deleteAll"


@dataclass(frozen=True)
class PromoteToMain:
    option = "promoteToMain"


@dataclass(frozen=True)
class MoveToParent:
    target_parent_id: int | None
    option = "moveToParent"


Disposition = DeleteAll | PromoteToMain | MoveToParent


def parse_disposition(option: str | None, target_parent_id: int | None = None) -> Disposition | None:
    # Unknown options behave like no option: only refused when subcategories exist
    if option == DeleteAll.option:
        return DeleteAll()
    if option == PromoteToMain.option:
        return PromoteToMain()
    if option == MoveToParent.option:
        return MoveToParent(target_parent_id=target_parent_id)
    return None


def _require_name(value: str | None) -> str:
    name = (value or "").strip()
    if not name:
        raise ValidationError("Please provide a category name")
    if len(name) > settings.CATEGORY_NAME_MAX_LENGTH:
        raise ValidationError(f"Category name must be at most {settings.CATEGORY_NAME_MAX_LENGTH} characters")
    return name


def _ordered(stmt):
    return stmt.order_by(Category.display_order, Category.name, Category.id)


def _get_or_404(db: Session, category_id: int, *, active_only: bool = False) -> Category:
    stmt = sa.select(Category).where(Category.id == category_id)
    if active_only:
        stmt = stmt.where(Category.active.is_(True))
    row = db.scalars(stmt).first()
    if row is None:
        raise NotFoundError("Category not found")
    return row


def _summary(row: Category | CategoryNode) -> CategorySummaryOut:
    return CategorySummaryOut(id=row.id, name=row.name, description=row.description, image_url=row.image_url)


def _parent_ref(db: Session, parent_id: int | None) -> RefOut | None:
    if parent_id is None:
        return None
    parent = db.get(Category, parent_id)
    if parent is None:
        return None
    return RefOut(id=parent.id, name=parent.name)


def _category_out(db: Session, row: Category) -> CategoryOut:
    return CategoryOut(
        id=row.id,
        name=row.name,
        description=row.description,
        image_url=row.image_url,
        active=row.active,
        display_order=row.display_order,
        parent_id=row.parent_id,
        parent=_parent_ref(db, row.parent_id),
    )


def list_public(db: Session) -> list[PublicCategoryOut]:
    tree = CategoryTree.load(db, active_only=True)
    return [
        PublicCategoryOut(
            **_summary(root).model_dump(),
            subcategories=[_summary(child) for child in tree.children(root.id)],
        )
        for root in tree.roots()
    ]


def get_public(db: Session, category_id: int) -> CategoryDetailOut:
    row = _get_or_404(db, category_id, active_only=True)

    tests = db.scalars(
        sa.select(LabTest)
        .where(LabTest.category_id == row.id, LabTest.active.is_(True))
        .order_by(LabTest.display_order, LabTest.name)
    ).all()
    subcategories = db.scalars(
        _ordered(sa.select(Category).where(Category.parent_id == row.id, Category.active.is_(True)))
    ).all()

    return CategoryDetailOut(
        **_category_out(db, row).model_dump(),
        tests=[lab_test_summary(t) for t in tests],
        subcategories=[_summary(s) for s in subcategories],
    )


def list_admin(db: Session) -> list[AdminCategoryOut]:
    tree = CategoryTree.load(db)
    tests_by_category: dict[int, list[RefOut]] = {}
    for test_id, test_name, category_id in db.execute(
        sa.select(LabTest.id, LabTest.name, LabTest.category_id).order_by(LabTest.display_order, LabTest.name)
    ):
        tests_by_category.setdefault(category_id, []).append(RefOut(id=test_id, name=test_name))

    out = []
    for node in tree.nodes():
        parent = tree.parent(node.id)
        out.append(
            AdminCategoryOut(
                **_summary(node).model_dump(),
                active=node.active,
                display_order=node.display_order,
                parent_id=node.parent_id,
                parent=RefOut(id=parent.id, name=parent.name) if parent else None,
                tests=tests_by_category.get(node.id, []),
                subcategories=[RefOut(id=c.id, name=c.name) for c in tree.children(node.id)],
            )
        )
    return out


def admin_tree(db: Session) -> list[CategoryNodeOut]:
    tree = CategoryTree.load(db)
    counts = dict(
        db.execute(sa.select(LabTest.category_id, sa.func.count()).group_by(LabTest.category_id)).all()
    )

    def build(node: CategoryNode, seen: frozenset) -> CategoryNodeOut:
        seen = seen | {node.id}
        return CategoryNodeOut(
            id=node.id,
            name=node.name,
            active=node.active,
            display_order=node.display_order,
            parent_id=node.parent_id,
            test_count=int(counts.get(node.id, 0)),
            children=[build(c, seen) for c in tree.children(node.id) if c.id not in seen],
        )

    return [build(root, frozenset()) for root in tree.roots()]


def create_category(db: Session, payload: CategoryCreateIn) -> CategoryOut:
    name = _require_name(payload.name)

    with transaction(db):
        row = Category(
            name=name,
            description=payload.description,
            image_url=payload.image_url or None,
            active=True,
            display_order=payload.display_order or 0,
            parent_id=payload.parent_id or None,
        )
        db.add(row)
        db.flush()
        category_id = row.id

    logger.info("Category %s created (parent=%s)", category_id, payload.parent_id or None)
    return _category_out(db, db.get(Category, category_id))


def update_category(db: Session, category_id: int, payload: CategoryUpdateIn) -> CategoryOut:
    patch = payload.model_dump(exclude_unset=True)

    with transaction(db):
        row = _get_or_404(db, category_id)

        if "name" in patch:
            row.name = _require_name(patch["name"])
        if "description" in patch:
            row.description = patch["description"]
        if "image_url" in patch:
            row.image_url = patch["image_url"] or None
        if patch.get("active") is not None:
            row.active = patch["active"]
        if patch.get("display_order") is not None:
            row.display_order = patch["display_order"]
        if "parent_id" in patch:
            parent_id = patch["parent_id"] or None
            if parent_id == row.id:
                raise ValidationError("A category cannot be its own parent")
            # No existence check here; the foreign key is the only guard
            row.parent_id = parent_id

    logger.info("Category %s updated (%s)", category_id, ", ".join(sorted(patch)) or "no fields")
    return _category_out(db, db.get(Category, category_id))


def _delete_tests(db: Session, category_ids: list[int]) -> int:
    result = db.execute(sa.delete(LabTest).where(LabTest.category_id.in_(category_ids)))
    return result.rowcount or 0


def _reparent_children(db: Session, category_id: int, new_parent_id: int | None) -> int:
    result = db.execute(
        sa.update(Category).where(Category.parent_id == category_id).values(parent_id=new_parent_id)
    )
    return result.rowcount or 0


def _check_move_target(db: Session, category_id: int, target_parent_id: int | None) -> None:
    if not target_parent_id:
        raise ValidationError("Target parent ID is required when moving subcategories")
    if target_parent_id == category_id:
        raise ValidationError("Target parent must be a different category")
    target = db.get(Category, target_parent_id)
    if target is None:
        raise ValidationError("Target parent category not found")
    if target.parent_id is not None:
        raise ValidationError("Target parent must be a main category (not a subcategory)")


def delete_category(db: Session, category_id: int, disposition: Disposition | None = None) -> CategoryDeleteOut:
    """Delete a category, its tests, and resolve its direct subcategories.

    Subcategories are handled according to ``disposition``; without one the
    delete is refused as soon as any subcategory exists. Everything happens in
    one transaction, so a refused or failed delete leaves no trace.
    """
    out = CategoryDeleteOut(id=category_id, option=disposition.option if disposition else None)

    with transaction(db):
        row = _get_or_404(db, category_id)
        sub_ids = list(db.scalars(sa.select(Category.id).where(Category.parent_id == category_id)))

        if sub_ids:
            if disposition is None:
                raise ValidationError(NEEDS_DISPOSITION)
            if isinstance(disposition, DeleteAll):
                out.deleted_tests += _delete_tests(db, sub_ids)
                result = db.execute(sa.delete(Category).where(Category.id.in_(sub_ids)))
                out.deleted_subcategories = result.rowcount or 0
            elif isinstance(disposition, PromoteToMain):
                out.moved_subcategories = _reparent_children(db, category_id, None)
            elif isinstance(disposition, MoveToParent):
                _check_move_target(db, category_id, disposition.target_parent_id)
                out.moved_subcategories = _reparent_children(db, category_id, disposition.target_parent_id)
            else:
                raise ValidationError(f"Unsupported delete option: {disposition!r}")

        out.deleted_tests += _delete_tests(db, [category_id])
        db.delete(row)

    logger.info(
        "Category %s deleted (option=%s, tests=%s, subcategories deleted=%s moved=%s)",
        category_id,
        out.option,
        out.deleted_tests,
        out.deleted_subcategories,
        out.moved_subcategories,
    )
    return out


def reorder_categories(db: Session, entries) -> int:
    return apply_display_order(
        db,
        Category,
        entries,
        invalid_message="Invalid request format. Expected an array of categories with id and displayOrder.",
    )
