"""
Social media link CRUD.
"""
import logging
from sqlalchemy.orm import Session

from apps.about_me.service import get_about_me
from apps.shared.errors import NotFoundError
from apps.social_media.models import SocialMedia
from apps.social_media.schemas import SocialMediaCreate, SocialMediaUpdate

logger = logging.getLogger(__name__)


def list_social_media(db: Session) -> list[SocialMedia]:
    return db.query(SocialMedia).order_by(SocialMedia.name.asc()).all()


def get_social_media(db: Session, social_media_id: str) -> SocialMedia:
    social = db.query(SocialMedia).filter(SocialMedia.id == social_media_id).first()
    if not social:
        raise NotFoundError(f"Social media with id {social_media_id} not found")
    return social


def create_social_media(db: Session, payload: SocialMediaCreate) -> SocialMedia:
    """
    Attach a new link to the about-me profile.

    Raises:
        NotFoundError: If no about-me profile exists yet
    """
    about_me = get_about_me(db)
    if not about_me:
        raise NotFoundError("About me information not found. Create it before adding social links.")

    social = SocialMedia(**payload.model_dump(), about_me_id=about_me.id)
    db.add(social)
    db.commit()
    db.refresh(social)
    return social


def update_social_media(db: Session, social_media_id: str, payload: SocialMediaUpdate) -> SocialMedia:
    social = get_social_media(db, social_media_id)
    for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(social, key, value)
    db.commit()
    db.refresh(social)
    return social


def delete_social_media(db: Session, social_media_id: str) -> bool:
    social = get_social_media(db, social_media_id)
    db.delete(social)
    db.commit()
    logger.info(f"Deleted social media link {social_media_id}")
    return True
