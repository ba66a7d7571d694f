from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from hero_api.db.models import User
from hero_api.db.session import get_db

ADMIN = "ADMIN"


def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")

    user = db.get(User, x_user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != ADMIN:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user
