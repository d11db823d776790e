import sys

from labcatalog.db.session import SessionLocal
from labcatalog.services.maintenance import catalog_integrity_report


def main():
    db = SessionLocal()
    try:
        report = catalog_integrity_report(db)
    finally:
        db.close()

    print(f"categories={report.categories} tests={report.tests}")
    if report.orphaned_tests:
        print(f"orphaned tests: {report.orphaned_tests}")
    if report.dangling_parents:
        print(f"categories with missing parent: {report.dangling_parents}")
    if report.self_parented:
        print(f"self-parented categories: {report.self_parented}")
    if report.too_deep:
        print(f"categories nested deeper than two levels: {report.too_deep}")
    if not report.ok:
        sys.exit(1)
    print("ok: catalog integrity verified")


if __name__ == "__main__":
    main()
