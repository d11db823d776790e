from labcatalog.db.session import SessionLocal
from labcatalog.services.maintenance import seed_categories


def main():
    db = SessionLocal()
    try:
        created, existing = seed_categories(db)
        db.commit()
        print(f"ok: categories created={created} existing={existing}")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
