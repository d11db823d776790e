from __future__ import annotations

from dataclasses import dataclass, field

import sqlalchemy as sa
from sqlalchemy.orm import Session

from labcatalog.core.security import ADMIN_ROLES
from labcatalog.models.category import Category
from labcatalog.models.lab_test import LabTest
from labcatalog.models.user import User
from labcatalog.services.tree import CategoryTree

PROFESSIONAL_CATEGORIES = [
    {
        "name": "Chemical Testing",
        "description": "Comprehensive chemical analysis for pharmaceuticals, food, and environmental sectors.",
        "image_url": "/images/categories/chemical-testing.jpg",
    },
    {
        "name": "Microbiological Testing",
        "description": "Detection and identification of microorganisms for safety and quality control.",
        "image_url": "/images/categories/microbiological-testing.jpg",
    },
    {
        "name": "Environmental Analysis",
        "description": "Testing of soil, water, and air samples for monitoring and regulatory compliance.",
        "image_url": "/images/categories/environmental-analysis.jpg",
    },
    {
        "name": "Food & Beverage Testing",
        "description": "Nutritional analysis, contaminant detection, and shelf-life studies.",
        "image_url": "/images/categories/food-beverage-testing.jpg",
    },
    {
        "name": "Pharmaceutical Analysis",
        "description": "Testing and validation of pharmaceutical products and raw materials.",
        "image_url": "/images/categories/pharmaceutical-analysis.jpg",
    },
    {
        "name": "Material Characterization",
        "description": "Analysis of material properties and composition for research and quality control.",
        "image_url": "/images/categories/material-characterization.jpg",
    },
    {
        "name": "Forensic Analysis",
        "description": "Scientific analysis and reporting for legal and investigative purposes.",
        "image_url": "/images/categories/forensic-analysis.jpg",
    },
    {
        "name": "Toxicology Testing",
        "description": "Assessment of toxic substances and their effects on biological systems.",
        "image_url": "/images/categories/toxicology-testing.jpg",
    },
]


def seed_categories(db: Session, entries: list[dict] | None = None) -> tuple[int, int]:
    """Find-or-create root categories by name. Returns (created, existing).

    Does not commit; the caller owns the transaction.
    """
    created = existing = 0
    for order, entry in enumerate(entries or PROFESSIONAL_CATEGORIES, start=1):
        found = db.scalars(
            sa.select(Category).where(Category.name == entry["name"], Category.parent_id.is_(None))
        ).first()
        if found is not None:
            existing += 1
            continue
        db.add(
            Category(
                name=entry["name"],
                description=entry.get("description"),
                image_url=entry.get("image_url"),
                active=True,
                display_order=entry.get("display_order", order),
            )
        )
        created += 1
    db.flush()
    return created, existing


def ensure_admin(db: Session, username: str, email: str | None = None, role: str = "admin") -> User:
    if role not in ADMIN_ROLES:
        raise ValueError(f"role must be one of {sorted(ADMIN_ROLES)}")
    user = db.scalars(sa.select(User).where(User.username == username)).first()
    if user is None:
        user = User(username=username, email=email, role=role, active=True)
        db.add(user)
    else:
        user.role = role
        user.active = True
        if email:
            user.email = email
    db.flush()
    return user


@dataclass
class IntegrityReport:
    categories: int = 0
    tests: int = 0
    orphaned_tests: list[int] = field(default_factory=list)
    dangling_parents: list[int] = field(default_factory=list)
    self_parented: list[int] = field(default_factory=list)
    too_deep: list[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (self.orphaned_tests or self.dangling_parents or self.self_parented or self.too_deep)


def catalog_integrity_report(db: Session, max_depth: int = 2) -> IntegrityReport:
    tree = CategoryTree.load(db)
    test_rows = db.execute(sa.select(LabTest.id, LabTest.category_id).order_by(LabTest.id)).all()
    return IntegrityReport(
        categories=len(tree),
        tests=len(test_rows),
        orphaned_tests=[test_id for test_id, category_id in test_rows if category_id not in tree],
        dangling_parents=[n.id for n in tree.dangling()],
        self_parented=[n.id for n in tree.self_parented()],
        too_deep=[n.id for n in tree.deeper_than(max_depth)],
    )
