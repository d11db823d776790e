from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.orm import Session

from labcatalog.api.deps import get_current_admin
from labcatalog.db.session import get_db
from labcatalog.schemas.category import (
    AdminCategoryOut,
    CategoryCreateIn,
    CategoryDeleteIn,
    CategoryDeleteOut,
    CategoryNodeOut,
    CategoryOut,
    CategoryReorderIn,
    CategoryUpdateIn,
)
from labcatalog.schemas.common import INT_MAX, Envelope
from labcatalog.services import categories

router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", response_model=Envelope[list[AdminCategoryOut]])
def list_categories_admin(db: Session = Depends(get_db)):
    rows = categories.list_admin(db)
    return Envelope(data=rows, count=len(rows))


@router.get("/tree", response_model=Envelope[list[CategoryNodeOut]])
def category_tree(db: Session = Depends(get_db)):
    roots = categories.admin_tree(db)
    return Envelope(data=roots, count=len(roots))


@router.post("", response_model=Envelope[CategoryOut], status_code=201)
def create_category(payload: CategoryCreateIn, db: Session = Depends(get_db)):
    row = categories.create_category(db, payload)
    return Envelope(data=row, message="Category created successfully")


@router.put("/reorder", response_model=Envelope)
def reorder_categories(payload: CategoryReorderIn, db: Session = Depends(get_db)):
    updated = categories.reorder_categories(db, payload.categories)
    return Envelope(message="Category order updated successfully", count=updated)


@router.put("/{category_id}", response_model=Envelope[CategoryOut])
def update_category(
    payload: CategoryUpdateIn,
    category_id: int = Path(le=INT_MAX),
    db: Session = Depends(get_db),
):
    row = categories.update_category(db, category_id, payload)
    return Envelope(data=row, message="Category updated successfully")


@router.delete("/{category_id}", response_model=Envelope[CategoryDeleteOut])
def delete_category(
    category_id: int = Path(le=INT_MAX),
    payload: CategoryDeleteIn | None = Body(default=None),
    db: Session = Depends(get_db),
):
    payload = payload or CategoryDeleteIn()
    disposition = categories.parse_disposition(payload.option, payload.target_parent_id)
    out = categories.delete_category(db, category_id, disposition)
    return Envelope(data=out, message="Category deleted successfully")
