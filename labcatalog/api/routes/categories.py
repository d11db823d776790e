from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from labcatalog.db.session import get_db
from labcatalog.schemas.category import CategoryDetailOut, PublicCategoryOut
from labcatalog.schemas.common import INT_MAX, Envelope
from labcatalog.services import categories

router = APIRouter()

@router.get("", response_model=Envelope[list[PublicCategoryOut]])
def list_categories(db: Session = Depends(get_db)):
    rows = categories.list_public(db)
    return Envelope(data=rows, count=len(rows))

@router.get("/{category_id}", response_model=Envelope[CategoryDetailOut])
def get_category(category_id: int = Path(le=INT_MAX), db: Session = Depends(get_db)):
    return Envelope(data=categories.get_public(db, category_id))
