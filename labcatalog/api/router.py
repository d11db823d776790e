from fastapi import APIRouter
from labcatalog.api.routes import admin_categories, admin_lab_tests, categories, lab_tests

router = APIRouter()
router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(lab_tests.router, prefix="/tests", tags=["tests"])
router.include_router(admin_categories.router, prefix="/admin/categories", tags=["admin"])
router.include_router(admin_lab_tests.router, prefix="/admin/tests", tags=["admin"])
