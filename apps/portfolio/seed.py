"""
Create the first ADMIN account.

Usage:
    ADMIN_EMAIL=me@example.com ADMIN_PASSWORD=... python -m apps.portfolio.seed
"""
import logging
import os
import sys

import apps.portfolio.schema  # noqa: F401  (registers every model before create_all)
from apps.shared.database import Base, SessionLocal, engine
from apps.shared.validators import validate_payload
from apps.users.models import UserRole
from apps.users.schemas import UserCreate
from apps.users.service import create_user, get_user_by_email

logger = logging.getLogger("portfolio-seed")


def seed_admin(db, email: str, password: str, name: str = "Admin"):
    """Create the admin unless a user with that email already exists. Returns the user."""
    existing = get_user_by_email(db, email)
    if existing:
        logger.info(f"User {existing.email} already exists, skipping")
        return existing

    payload = validate_payload(
        UserCreate,
        {"name": name, "email": email, "password": password, "role": UserRole.ADMIN},
    )
    return create_user(db, payload)


def main() -> int:
    logging.basicConfig(level=logging.INFO)

    email = os.getenv("ADMIN_EMAIL")
    password = os.getenv("ADMIN_PASSWORD")
    if not email or not password:
        logger.error("ADMIN_EMAIL and ADMIN_PASSWORD must be set")
        return 1

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_admin(db, email, password, os.getenv("ADMIN_NAME", "Admin"))
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
