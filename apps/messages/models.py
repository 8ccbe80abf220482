"""
Contact message database model.
"""
from sqlalchemy import Column, String, Text, Boolean, DateTime

from apps.shared.database import Base, generate_uuid, utc_now


class Message(Base):
    """
    Message sent through the public contact form.

    Inbox states:
    - active unread / active read (is_read toggles freely)
    - trashed (is_deleted=True), hidden from the inbox until restored
    """
    __tablename__ = "messages"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    full_name = Column(String(100), nullable=False)
    email = Column(String(255), index=True, nullable=False)
    city = Column(String(100), nullable=False)
    subject = Column(String(200), nullable=False)
    message_description = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime(timezone=True), nullable=True)
    is_deleted = Column(Boolean, default=False, index=True, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)
