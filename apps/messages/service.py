"""
Message inbox service.

State machine over contact messages:

    active-unread <-> active-read      (mark_as_read / mark_as_unread)
    active-*      ->  trashed          (soft_delete)
    trashed       ->  active-*         (restore, is_read preserved)
    trashed/any   ->  gone             (permanent_delete)

Every query against the inbox only sees active (not trashed) rows.
"""
import logging
from typing import Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from apps.shared.database import utc_now
from apps.shared.errors import NotFoundError
from apps.messages.models import Message
from apps.messages.schemas import MessageCreate, MessageFilters, MessageStats

logger = logging.getLogger(__name__)


def create_message(db: Session, payload: MessageCreate) -> Message:
    message = Message(**payload.model_dump(), is_read=False, is_deleted=False)
    db.add(message)
    db.commit()
    db.refresh(message)
    logger.info(f"New contact message {message.id} from {message.email}")
    return message


def contains_pattern(value: str) -> str:
    """LIKE pattern matching `value` anywhere, with % and _ taken literally."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def list_messages(db: Session, filters: Optional[MessageFilters] = None) -> list[Message]:
    """
    List active messages, newest first.

    Filters:
    - is_read: exact match
    - email: exact, case-insensitive
    - city: case-insensitive substring
    - search_term: case-insensitive substring of subject or description
    """
    query = db.query(Message).filter(Message.is_deleted == False)

    if filters is not None:
        if filters.is_read is not None:
            query = query.filter(Message.is_read == filters.is_read)
        if filters.email:
            query = query.filter(func.lower(Message.email) == filters.email)
        if filters.city:
            query = query.filter(Message.city.ilike(contains_pattern(filters.city), escape="\\"))
        if filters.search_term:
            pattern = contains_pattern(filters.search_term)
            query = query.filter(
                or_(
                    Message.subject.ilike(pattern, escape="\\"),
                    Message.message_description.ilike(pattern, escape="\\"),
                )
            )

    return query.order_by(Message.created_at.desc()).all()


def list_deleted_messages(db: Session) -> list[Message]:
    """Trashed messages, most recently deleted first."""
    return (
        db.query(Message)
        .filter(Message.is_deleted == True)
        .order_by(Message.deleted_at.desc())
        .all()
    )


def get_active_message(db: Session, message_id: str) -> Message:
    """
    Get a message that is not in the trash.

    Raises:
        NotFoundError: If the message is missing or trashed
    """
    message = (
        db.query(Message)
        .filter(Message.id == message_id, Message.is_deleted == False)
        .first()
    )
    if not message:
        raise NotFoundError(f"Message with id {message_id} not found")
    return message


def _get_any_message(db: Session, message_id: str) -> Message:
    message = db.query(Message).filter(Message.id == message_id).first()
    if not message:
        raise NotFoundError(f"Message with id {message_id} not found")
    return message


def mark_as_read(db: Session, message_id: str) -> Message:
    message = get_active_message(db, message_id)
    message.is_read = True
    message.read_at = utc_now()
    db.commit()
    db.refresh(message)
    return message


def mark_as_unread(db: Session, message_id: str) -> Message:
    message = get_active_message(db, message_id)
    message.is_read = False
    message.read_at = None
    db.commit()
    db.refresh(message)
    return message


def soft_delete(db: Session, message_id: str) -> bool:
    """Move an active message to the trash."""
    message = get_active_message(db, message_id)
    message.is_deleted = True
    message.deleted_at = utc_now()
    db.commit()
    logger.info(f"Moved message {message_id} to trash")
    return True


def restore(db: Session, message_id: str) -> Message:
    """
    Take a message out of the trash.

    Restoring an active message is a no-op that still returns it.
    """
    message = _get_any_message(db, message_id)
    message.is_deleted = False
    message.deleted_at = None
    db.commit()
    db.refresh(message)
    logger.info(f"Restored message {message_id}")
    return message


def permanent_delete(db: Session, message_id: str) -> bool:
    message = _get_any_message(db, message_id)
    db.delete(message)
    db.commit()
    logger.info(f"Permanently deleted message {message_id}")
    return True


def get_stats(db: Session) -> MessageStats:
    """Counts recomputed on every call: total/unread/read over active messages, deleted over trash."""
    active = db.query(Message).filter(Message.is_deleted == False)
    total = active.count()
    unread = active.filter(Message.is_read == False).count()
    deleted = db.query(Message).filter(Message.is_deleted == True).count()
    return MessageStats(total=total, unread=unread, read=total - unread, deleted=deleted)
