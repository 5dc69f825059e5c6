"""
Initialize the database: tables, the MASTER corporation and the MASTER user.
Optionally loads the shared reference data (municipality categories and
authorization types).

Usage:
    python scripts/init_db.py --email admin@hydro.co --password StrongPass123 --name "Platform Admin"
    python scripts/init_db.py --email admin@hydro.co --password StrongPass123 --name "Platform Admin" --seed-reference
"""
import sys
import os
import argparse
from decimal import Decimal

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hydro.database import engine, SessionLocal, Base
import hydro.models  # noqa: F401
from hydro.core.security import hash_password
from hydro.models.catalog import AuthorizationType
from hydro.models.corporation import Corporation
from hydro.models.geography import Category
from hydro.models.user import User, UserRole

MASTER_CODE = "MASTER"

CATEGORIES = [
    ("Special", Decimal("1.00")),
    ("First", Decimal("1.00")),
    ("Second", Decimal("2.12")),
    ("Third", Decimal("2.12")),
    ("Fourth", Decimal("3.25")),
    ("Fifth", Decimal("4.37")),
    ("Sixth", Decimal("5.50")),
]

AUTHORIZATION_TYPES = [
    "Discharge permit",
    "Environmental license",
    "Environmental management plan",
    "No permit",
]


def create_tables():
    print("[*] Creating tables...")
    Base.metadata.create_all(bind=engine)
    print("[+] Tables created")


def create_master_corporation():
    """Create the corporation that holds the platform administrators"""
    db = SessionLocal()
    try:
        existing = db.query(Corporation).filter(Corporation.code == MASTER_CODE).first()
        if existing:
            print("[!] MASTER corporation already exists")
            return existing.id

        corporation = Corporation(
            name="Platform Administration",
            code=MASTER_CODE,
            description="Platform administrators",
            is_active=True
        )
        db.add(corporation)
        db.commit()
        db.refresh(corporation)
        print(f"[+] MASTER corporation created with ID: {corporation.id}")
        return corporation.id
    finally:
        db.close()


def create_master_user(corporation_id: int, email: str, password: str, name: str):
    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"[!] User {email} already exists")
            return

        user = User(
            corporation_id=corporation_id,
            full_name=name,
            email=email,
            password_hash=hash_password(password),
            role=UserRole.MASTER,
            is_active=True
        )
        db.add(user)
        db.commit()
        print(f"[+] MASTER user created: {email}")
    finally:
        db.close()


def seed_reference_data():
    """Insert the missing categories and authorization types"""
    db = SessionLocal()
    try:
        created = 0
        for name, value in CATEGORIES:
            if not db.query(Category).filter(Category.name == name).first():
                db.add(Category(name=name, value=value))
                created += 1

        for name in AUTHORIZATION_TYPES:
            if not db.query(AuthorizationType).filter(AuthorizationType.name == name).first():
                db.add(AuthorizationType(name=name, is_active=True))
                created += 1

        db.commit()
        print(f"[+] Reference data loaded ({created} new records)")
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Initialize the database")
    parser.add_argument("--email", required=True, help="Email of the MASTER user")
    parser.add_argument("--password", required=True, help="Password of the MASTER user")
    parser.add_argument("--name", required=True, help="Full name of the MASTER user")
    parser.add_argument("--skip-tables", action="store_true", help="Do not create tables")
    parser.add_argument("--seed-reference", action="store_true", help="Load categories and authorization types")

    args = parser.parse_args()

    print("=" * 50)
    print("DATABASE INITIALIZATION")
    print("=" * 50)

    if len(args.password) < 8:
        print("[ERROR] Password must be at least 8 characters long")
        sys.exit(1)

    if not args.skip_tables:
        create_tables()

    corporation_id = create_master_corporation()
    create_master_user(corporation_id, args.email, args.password, args.name)

    if args.seed_reference:
        seed_reference_data()

    print("=" * 50)
    print("[+] Initialization finished")
    print(f"[*] Login: {args.email}")
    print("=" * 50)


if __name__ == "__main__":
    main()
