"""
Seed data for the user directory.
"""
from sqlalchemy.orm import Session

from .logging_config import db_logger
from .models.user import User

SEED_USERS = [
    {"id": 1, "name": "Alice", "email": "alice@example.com", "age": 42},
    {"id": 2, "name": "Robert", "email": "robert@example.com", "age": 21},
]


def seed_users(db: Session) -> int:
    """Insert the sample users when the table is empty. Returns rows added."""
    if db.query(User).first() is not None:
        return 0

    db.add_all([User(**row) for row in SEED_USERS])
    db.commit()
    db_logger.info("Seeded user directory", count=len(SEED_USERS))
    return len(SEED_USERS)
