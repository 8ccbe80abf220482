"""
About-me singleton.

At most one row exists. Social links hang off it and are removed with it.
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session

from apps.about_me.models import AboutMe
from apps.about_me.schemas import AboutMeCreate, AboutMeUpdate
from apps.shared.errors import ConflictError, NotFoundError
from apps.technologies.service import get_technologies_by_ids

logger = logging.getLogger(__name__)


def get_about_me(db: Session) -> Optional[AboutMe]:
    return db.query(AboutMe).order_by(AboutMe.created_at.asc()).first()


def require_about_me(db: Session) -> AboutMe:
    about_me = get_about_me(db)
    if not about_me:
        raise NotFoundError("About me information not found")
    return about_me


def create_about_me(db: Session, payload: AboutMeCreate) -> AboutMe:
    """
    Raises:
        ConflictError: If the profile already exists
        NotFoundError: If a technology id doesn't exist
    """
    if get_about_me(db):
        raise ConflictError("About me information already exists. Use update instead.")

    technologies = get_technologies_by_ids(db, payload.technology_ids)
    about_me = AboutMe(**payload.model_dump(exclude={"technology_ids"}))
    about_me.technologies = technologies

    db.add(about_me)
    db.commit()
    db.refresh(about_me)
    return about_me


def update_about_me(db: Session, payload: AboutMeUpdate) -> AboutMe:
    about_me = require_about_me(db)
    update_data = payload.model_dump(exclude_unset=True)

    technology_ids = update_data.pop("technology_ids", None)
    if technology_ids is not None:
        about_me.technologies = get_technologies_by_ids(db, technology_ids)

    for key, value in update_data.items():
        if value is None and key != "image_url":
            continue
        setattr(about_me, key, value)

    db.commit()
    db.refresh(about_me)
    return about_me


def set_about_me_image(db: Session, image_url: Optional[str]) -> tuple[AboutMe, Optional[str]]:
    """Replace the profile image. Returns the profile and the previous URL."""
    about_me = require_about_me(db)
    previous = about_me.image_url
    about_me.image_url = image_url
    db.commit()
    db.refresh(about_me)
    return about_me, previous


def delete_about_me(db: Session) -> bool:
    about_me = require_about_me(db)
    db.delete(about_me)
    db.commit()
    logger.info("Deleted about me information and its social links")
    return True
