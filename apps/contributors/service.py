"""
Contributor CRUD.
"""
import logging
from sqlalchemy.orm import Session

from apps.contributors.models import Contributor
from apps.contributors.schemas import ContributorCreate, ContributorUpdate
from apps.shared.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def list_contributors(db: Session) -> list[Contributor]:
    return db.query(Contributor).order_by(Contributor.name.asc()).all()


def get_contributor(db: Session, contributor_id: str) -> Contributor:
    contributor = db.query(Contributor).filter(Contributor.id == contributor_id).first()
    if not contributor:
        raise NotFoundError(f"Contributor with id {contributor_id} not found")
    return contributor


def get_contributors_by_ids(db: Session, ids: list[str]) -> list[Contributor]:
    """
    Load contributors for a relation, keeping the requested order.

    Raises:
        NotFoundError: If any id doesn't exist
    """
    unique_ids = list(dict.fromkeys(ids))
    if not unique_ids:
        return []

    found = {c.id: c for c in db.query(Contributor).filter(Contributor.id.in_(unique_ids)).all()}
    missing = [i for i in unique_ids if i not in found]
    if missing:
        raise NotFoundError(f"Contributors not found: {', '.join(missing)}")
    return [found[i] for i in unique_ids]


def _check_unique(db: Session, email: str = None, github: str = None, exclude_id: str = None):
    """Raise ConflictError if email or github belongs to another contributor."""
    for column, value, label in (
        (Contributor.email, email, "email"),
        (Contributor.github, github, "github"),
    ):
        if not value:
            continue
        query = db.query(Contributor).filter(column == value)
        if exclude_id:
            query = query.filter(Contributor.id != exclude_id)
        if query.first():
            raise ConflictError(f"Contributor with this {label} already exists")


def create_contributor(db: Session, payload: ContributorCreate) -> Contributor:
    _check_unique(db, email=payload.email, github=payload.github)

    contributor = Contributor(**payload.model_dump())
    db.add(contributor)
    db.commit()
    db.refresh(contributor)
    return contributor


def update_contributor(db: Session, contributor_id: str, payload: ContributorUpdate) -> Contributor:
    contributor = get_contributor(db, contributor_id)
    update_data = payload.model_dump(exclude_unset=True, exclude_none=True)
    _check_unique(
        db,
        email=update_data.get("email"),
        github=update_data.get("github"),
        exclude_id=contributor.id,
    )

    for key, value in update_data.items():
        setattr(contributor, key, value)

    db.commit()
    db.refresh(contributor)
    return contributor


def delete_contributor(db: Session, contributor_id: str) -> bool:
    contributor = get_contributor(db, contributor_id)
    db.delete(contributor)
    db.commit()
    logger.info(f"Deleted contributor {contributor_id}")
    return True
