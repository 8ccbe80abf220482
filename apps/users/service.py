"""
User management.

Admin accounts for the portfolio panel. Only the ADMIN role may call the
mutating functions here (enforced by the GraphQL layer).
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session

from apps.shared.auth import hash_password
from apps.shared.errors import BadRequestError, ConflictError, NotFoundError
from apps.users.models import User, UserRole
from apps.users.schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at.asc()).all()


def get_user(db: Session, user_id: str) -> User:
    """Get a user by id or raise NotFoundError."""
    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError(f"User with id {user_id} not found")
    return user


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_user(db: Session, payload: UserCreate) -> User:
    """
    Create a user with a hashed password.

    Raises:
        ConflictError: If the email is already registered
    """
    if get_user_by_email(db, payload.email):
        raise ConflictError("User with this email already exists")

    user = User(
        name=payload.name,
        email=payload.email,
        password=hash_password(payload.password),
        role=payload.role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created user {user.email} with role {user.role.value}")
    return user


def update_user(db: Session, user_id: str, payload: UserUpdate) -> User:
    """
    Update only provided fields. A new password is re-hashed.

    Raises:
        NotFoundError: If the user doesn't exist
        ConflictError: If the new email belongs to another user
        BadRequestError: If the change would demote the last admin
    """
    user = get_user(db, user_id)
    update_data = payload.model_dump(exclude_unset=True, exclude_none=True)

    new_email = update_data.get("email")
    if new_email and new_email != user.email and get_user_by_email(db, new_email):
        raise ConflictError("User with this email already exists")

    new_role = update_data.get("role")
    if user.is_admin and new_role and new_role != UserRole.ADMIN and _admin_count(db) <= 1:
        raise BadRequestError("Cannot demote the last admin")

    if "password" in update_data:
        update_data["password"] = hash_password(update_data["password"])

    for key, value in update_data.items():
        setattr(user, key, value)

    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: str, acting_user: Optional[User] = None) -> bool:
    """
    Delete a user.

    Raises:
        NotFoundError: If the user doesn't exist
        BadRequestError: If deleting yourself or the last admin
    """
    user = get_user(db, user_id)

    if acting_user is not None and acting_user.id == user.id:
        raise BadRequestError("You cannot delete your own account")
    if user.is_admin and _admin_count(db) <= 1:
        raise BadRequestError("Cannot delete the last admin")

    db.delete(user)
    db.commit()
    logger.info(f"Deleted user {user_id}")
    return True


def _admin_count(db: Session) -> int:
    return db.query(User).filter(User.role == UserRole.ADMIN).count()
