"""
User database model.

Admin panel accounts. Role decides which mutations a user may run.
"""
import enum
from sqlalchemy import Column, String, DateTime, Enum

from apps.shared.database import Base, generate_uuid, utc_now


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"


class User(Base):
    """
    Admin panel user.

    - email is unique and stored lower-cased
    - password holds the pbkdf2 hash, never the plain text
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.EDITOR)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
