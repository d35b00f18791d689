import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.database import commit_or_rollback
from app.core.exceptions import NotAuthenticatedError, ValidationError
from app.models.user import User
from app.schemas.user import UserUpdate
from app.services.access import require_caller

logger = logging.getLogger(__name__)


def get_profile(db: Session, caller_id: Optional[str]) -> User:
    caller_id = require_caller(caller_id)
    user = db.query(User).filter(User.id == caller_id).first()
    if not user:
        raise NotAuthenticatedError("User not found")
    return user


def update_profile(db: Session, caller_id: Optional[str], body: UserUpdate) -> User:
    """Change the caller's own name and/or email. Other users are never touched."""
    user = get_profile(db, caller_id)
    patch = body.model_dump(exclude_unset=True)

    # Sign-in looks users up by lowercased email, so store it the same way
    new_email = patch.get("email")
    if new_email:
        new_email = new_email.lower()
    if new_email and new_email != user.email:
        existing_user = db.query(User).filter(User.email == new_email).first()
        if existing_user:
            raise ValidationError("Email already registered")
        user.email = new_email

    # An empty or null name clears it
    if "name" in patch:
        user.name = (patch["name"] or "").strip() or None

    commit_or_rollback(db)
    db.refresh(user)
    logger.info(f"User {user.id} updated their profile")
    return user


def list_users(db: Session, caller_id: Optional[str]) -> List[User]:
    require_caller(caller_id)
    return db.query(User).order_by(User.name, User.email).all()
