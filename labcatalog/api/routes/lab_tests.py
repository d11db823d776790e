from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from labcatalog.db.session import get_db
from labcatalog.schemas.common import INT_MAX, Envelope
from labcatalog.schemas.lab_test import LabTestOut
from labcatalog.services import lab_tests

router = APIRouter()

@router.get("", response_model=Envelope[list[LabTestOut]])
def list_tests(
    category_id: int | None = Query(default=None, alias="categoryId", le=INT_MAX),
    db: Session = Depends(get_db),
):
    rows = lab_tests.list_public(db, category_id)
    return Envelope(data=rows, count=len(rows))

@router.get("/{test_id}", response_model=Envelope[LabTestOut])
def get_test(test_id: int = Path(le=INT_MAX), db: Session = Depends(get_db)):
    return Envelope(data=lab_tests.get_public(db, test_id))
