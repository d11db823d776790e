import argparse

from labcatalog.core.security import create_access_token
from labcatalog.db.session import SessionLocal
from labcatalog.services.maintenance import ensure_admin


def main():
    parser = argparse.ArgumentParser(description="Create or promote an admin user and print an access token.")
    parser.add_argument("username")
    parser.add_argument("--email", default=None)
    parser.add_argument("--role", default="admin", choices=["admin", "superadmin"])
    args = parser.parse_args()

    db = SessionLocal()
    try:
        user = ensure_admin(db, args.username, email=args.email, role=args.role)
        db.commit()
        token = create_access_token(str(user.id), user.role)
        print(f"ok: admin user={user.username} id={user.id} role={user.role}")
        print(token)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
