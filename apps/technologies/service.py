"""
Technology CRUD.
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session

from apps.shared.errors import ConflictError, NotFoundError
from apps.technologies.models import Technology, TechnologyCategory
from apps.technologies.schemas import TechnologyCreate, TechnologyUpdate

logger = logging.getLogger(__name__)


def list_technologies(db: Session, category: Optional[TechnologyCategory] = None) -> list[Technology]:
    query = db.query(Technology)
    if category is not None:
        query = query.filter(Technology.category == category)
    return query.order_by(Technology.name.asc()).all()


def get_technology(db: Session, technology_id: str) -> Technology:
    technology = db.query(Technology).filter(Technology.id == technology_id).first()
    if not technology:
        raise NotFoundError(f"Technology with id {technology_id} not found")
    return technology


def get_technologies_by_ids(db: Session, ids: list[str]) -> list[Technology]:
    """
    Load technologies for a relation, keeping the requested order.

    Raises:
        NotFoundError: If any id doesn't exist
    """
    unique_ids = list(dict.fromkeys(ids))
    if not unique_ids:
        return []

    found = {t.id: t for t in db.query(Technology).filter(Technology.id.in_(unique_ids)).all()}
    missing = [i for i in unique_ids if i not in found]
    if missing:
        raise NotFoundError(f"Technologies not found: {', '.join(missing)}")
    return [found[i] for i in unique_ids]


def _get_by_name(db: Session, name: str) -> Optional[Technology]:
    return db.query(Technology).filter(Technology.name == name).first()


def create_technology(db: Session, payload: TechnologyCreate) -> Technology:
    if _get_by_name(db, payload.name):
        raise ConflictError(f"Technology '{payload.name}' already exists")

    technology = Technology(**payload.model_dump())
    db.add(technology)
    db.commit()
    db.refresh(technology)
    return technology


def update_technology(db: Session, technology_id: str, payload: TechnologyUpdate) -> Technology:
    """
    Update only provided fields.

    Raises:
        NotFoundError: If the technology doesn't exist
        ConflictError: If the new name is taken
    """
    technology = get_technology(db, technology_id)
    update_data = payload.model_dump(exclude_unset=True, exclude_none=True)

    new_name = update_data.get("name")
    if new_name and new_name != technology.name and _get_by_name(db, new_name):
        raise ConflictError(f"Technology '{new_name}' already exists")

    for key, value in update_data.items():
        setattr(technology, key, value)

    db.commit()
    db.refresh(technology)
    return technology


def delete_technology(db: Session, technology_id: str) -> bool:
    technology = get_technology(db, technology_id)
    db.delete(technology)
    db.commit()
    logger.info(f"Deleted technology {technology_id}")
    return True
