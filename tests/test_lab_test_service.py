from __future__ import annotations

from decimal import Decimal

import pytest
import sqlalchemy as sa

from labcatalog.models import LabTest
from labcatalog.schemas.category import CategoryCreateIn, CategoryUpdateIn
from labcatalog.schemas.lab_test import LabTestCreateIn, LabTestUpdateIn
from labcatalog.services import categories, lab_tests
from labcatalog.services.errors import NotFoundError, ValidationError


@pytest.fixture
def microbiology(db):
    return categories.create_category(db, CategoryCreateIn(name="Microbiology"))


def _test(db, name: str, category_id: int, **fields):
    return lab_tests.create_lab_test(db, LabTestCreateIn(name=name, category_id=category_id, **fields))


def _n_tests(db) -> int:
    return db.scalar(sa.select(sa.func.count()).select_from(LabTest))


def test_create_applies_defaults(db, microbiology):
    row = _test(db, "Total Plate Count", microbiology.id)

    assert row.price == Decimal("0")
    assert row.display_order == 0
    assert row.active is True
    assert row.category.id == microbiology.id
    assert row.category.name == "Microbiology"


@pytest.mark.parametrize(
    "payload",
    [
        LabTestCreateIn(name="No Category"),
        LabTestCreateIn(category_id=1),
        LabTestCreateIn(name="  ", category_id=1),
    ],
)
def test_create_requires_name_and_category(db, microbiology, payload):
    with pytest.raises(ValidationError) as err:
        lab_tests.create_lab_test(db, payload)
    assert err.value.message == "Please provide test name and category"
    assert _n_tests(db) == 0


def test_create_in_unknown_category_is_not_found(db):
    with pytest.raises(NotFoundError) as err:
        _test(db, "Salmonella", 321)
    assert err.value.message == "Category not found"
    assert _n_tests(db) == 0


def test_create_rejects_negative_price(db, microbiology):
    with pytest.raises(ValidationError):
        _test(db, "Yeast & Mold", microbiology.id, price=Decimal("-1"))


def test_list_public_filters_and_orders(db, microbiology):
    chemistry = categories.create_category(db, CategoryCreateIn(name="Chemistry"))
    _test(db, "Listeria", microbiology.id, display_order=2)
    _test(db, "E. coli", microbiology.id, display_order=2)
    _test(db, "Coliforms", microbiology.id, display_order=1)
    _test(db, "Heavy Metals", chemistry.id)
    retired = _test(db, "Retired Assay", microbiology.id)
    lab_tests.toggle_lab_test(db, retired.id)

    assert [t.name for t in lab_tests.list_public(db, microbiology.id)] == ["Coliforms", "E. coli", "Listeria"]
    assert len(lab_tests.list_public(db)) == 4
    assert lab_tests.list_public(db, 999) == []


def test_get_public_hides_inactive(db, microbiology):
    row = _test(db, "Salmonella", microbiology.id, turnaround_time="3-5 days", method_reference="ISO 6579")

    found = lab_tests.get_public(db, row.id)
    assert (found.turnaround_time, found.method_reference) == ("3-5 days", "ISO 6579")

    lab_tests.toggle_lab_test(db, row.id)
    with pytest.raises(NotFoundError):
        lab_tests.get_public(db, row.id)


def test_update_moves_between_categories(db, microbiology):
    chemistry = categories.create_category(db, CategoryCreateIn(name="Chemistry"))
    row = _test(db, "pH", microbiology.id, price=Decimal("25.50"))

    moved = lab_tests.update_lab_test(db, row.id, LabTestUpdateIn(category_id=chemistry.id, display_order=4))
    assert moved.category_id == chemistry.id
    assert moved.category.name == "Chemistry"
    assert moved.display_order == 4
    assert moved.price == Decimal("25.50")


def test_update_to_unknown_category_changes_nothing(db, microbiology):
    row = _test(db, "pH", microbiology.id)

    with pytest.raises(NotFoundError):
        lab_tests.update_lab_test(db, row.id, LabTestUpdateIn(category_id=555, name="Renamed"))

    stored = lab_tests.get_public(db, row.id)
    assert (stored.category_id, stored.name) == (microbiology.id, "pH")


def test_update_missing_is_not_found(db):
    with pytest.raises(NotFoundError):
        lab_tests.update_lab_test(db, 77, LabTestUpdateIn(name="Ghost"))


def test_delete_and_missing_delete(db, microbiology):
    row = _test(db, "Aflatoxin", microbiology.id)

    lab_tests.delete_lab_test(db, row.id)
    assert _n_tests(db) == 0
    with pytest.raises(NotFoundError):
        lab_tests.delete_lab_test(db, row.id)


def test_toggle_flips_active_flag(db, microbiology):
    row = _test(db, "Norovirus", microbiology.id)

    assert lab_tests.toggle_lab_test(db, row.id).active is False
    assert lab_tests.toggle_lab_test(db, row.id).active is True
    with pytest.raises(NotFoundError):
        lab_tests.toggle_lab_test(db, 4040)


def test_reorder_is_lenient(db, microbiology):
    a = _test(db, "A", microbiology.id)
    b = _test(db, "B", microbiology.id)

    updated = lab_tests.reorder_lab_tests(
        db, [{"id": b.id, "displayOrder": 1}, {"id": a.id, "displayOrder": 2}, {"id": a.id}, {"id": None, "displayOrder": 0}]
    )

    assert updated == 2
    assert [t.name for t in lab_tests.list_admin(db)] == ["B", "A"]


def test_admin_listing_includes_inactive_tests_and_categories(db, microbiology):
    row = _test(db, "Hidden", microbiology.id)
    lab_tests.toggle_lab_test(db, row.id)
    categories.update_category(db, microbiology.id, CategoryUpdateIn(active=False))

    listing = lab_tests.list_admin(db)
    assert [(t.name, t.active) for t in listing] == [("Hidden", False)]
    assert listing[0].category.name == "Microbiology"
