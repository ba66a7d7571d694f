"""
Create or refresh the admin account.

Run with: python -m hero_api.db.seed
"""

import logging
import sys

from sqlalchemy.orm import Session

from hero_api.config import ADMIN_EMAIL, ADMIN_NAME
from hero_api.db.models import Base, User, utcnow
from hero_api.db.session import SessionLocal, engine

logger = logging.getLogger(__name__)


def seed_admin(db: Session, email: str = ADMIN_EMAIL, name: str = ADMIN_NAME) -> User:
    user = db.query(User).filter(User.email == email).one_or_none()

    if user is None:
        user = User(email=email, name=name, role="ADMIN")
        db.add(user)
    else:
        user.name = name
        user.role = "ADMIN"
        user.updated_at = utcnow()

    db.commit()
    db.refresh(user)
    return user


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        user = seed_admin(db)
        logger.info("Admin user ready: %s (id=%s)", user.email, user.id)
        return 0
    except Exception:
        logger.exception("Seeding admin user failed")
        db.rollback()
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
