from typing import Any

from pydantic import Field

from labcatalog.schemas.common import CamelModel, Int32, RefOut
from labcatalog.schemas.lab_test import LabTestSummaryOut


class CategoryCreateIn(CamelModel):
    name: str | None = None
    description: str | None = None
    image_url: str | None = None
    display_order: Int32 | None = None
    parent_id: Int32 | None = None


class CategoryUpdateIn(CamelModel):
    name: str | None = None
    description: str | None = None
    image_url: str | None = None
    active: bool | None = None
    display_order: Int32 | None = None
    parent_id: Int32 | None = None


class CategoryDeleteIn(CamelModel):
    option: str | None = None
    target_parent_id: Int32 | None = None


class CategoryReorderIn(CamelModel):
    categories: Any = None


class CategorySummaryOut(CamelModel):
    id: int
    name: str
    description: str | None = None
    image_url: str | None = None


class PublicCategoryOut(CategorySummaryOut):
    subcategories: list[CategorySummaryOut] = Field(default_factory=list)


class CategoryOut(CategorySummaryOut):
    active: bool
    display_order: int
    parent_id: int | None = None
    parent: RefOut | None = None


class CategoryDetailOut(CategoryOut):
    tests: list[LabTestSummaryOut] = Field(default_factory=list)
    subcategories: list[CategorySummaryOut] = Field(default_factory=list)


class AdminCategoryOut(CategoryOut):
    tests: list[RefOut] = Field(default_factory=list)
    subcategories: list[RefOut] = Field(default_factory=list)


class CategoryNodeOut(CamelModel):
    id: int
    name: str
    active: bool
    display_order: int
    parent_id: int | None = None
    test_count: int = 0
    children: list["CategoryNodeOut"] = Field(default_factory=list)


class CategoryDeleteOut(CamelModel):
    id: int
    option: str | None = None
    deleted_tests: int = 0
    deleted_subcategories: int = 0
    moved_subcategories: int = 0
