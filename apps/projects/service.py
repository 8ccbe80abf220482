"""
Project CRUD and gallery management.

Relation ids (technologies, contributors, creator) are resolved before any
write so a bad id never leaves a half-updated project behind.
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session

from apps.contributors.service import get_contributors_by_ids
from apps.projects.models import MAX_PROJECT_IMAGES, PROJECT_PROGRESS, Project
from apps.projects.schemas import ProjectCreate, ProjectUpdate
from apps.shared.errors import BadRequestError, NotFoundError
from apps.technologies.service import get_technologies_by_ids
from apps.users.models import User
from apps.users.service import get_user

logger = logging.getLogger(__name__)

# Columns that may be cleared with an explicit null on update
NULLABLE_FIELDS = {"live_url", "image_url"}


def list_projects(db: Session) -> list[Project]:
    return db.query(Project).order_by(Project.created_at.desc()).all()


def get_project(db: Session, project_id: str) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise NotFoundError(f"Project with id {project_id} not found")
    return project


def list_projects_by_creator(db: Session, creator_id: str) -> list[Project]:
    return (
        db.query(Project)
        .filter(Project.created_by_id == creator_id)
        .order_by(Project.created_at.desc())
        .all()
    )


def list_projects_by_progress(db: Session, progress: str) -> list[Project]:
    if progress not in PROJECT_PROGRESS:
        raise BadRequestError(f"Progress must be one of: {', '.join(PROJECT_PROGRESS)}")
    return (
        db.query(Project)
        .filter(Project.progress == progress)
        .order_by(Project.created_at.desc())
        .all()
    )


def create_project(db: Session, payload: ProjectCreate, current_user: Optional[User] = None) -> Project:
    """
    Create a project. The creator defaults to the calling user.

    Raises:
        NotFoundError: If a technology, contributor or creator id doesn't exist
        BadRequestError: If no creator can be determined
    """
    creator_id = payload.created_by_id or (current_user.id if current_user else None)
    if not creator_id:
        raise BadRequestError("createdById is required")
    creator = get_user(db, creator_id)
    technologies = get_technologies_by_ids(db, payload.technology_ids)
    contributors = get_contributors_by_ids(db, payload.contributor_ids)

    data = payload.model_dump(exclude={"technology_ids", "contributor_ids", "created_by_id"})
    project = Project(**data)
    project.created_by = creator
    project.technologies = technologies
    project.contributors = contributors

    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info(f"Created project {project.id} ({project.name})")
    return project


def update_project(
    db: Session,
    project_id: str,
    payload: ProjectUpdate,
    current_user: Optional[User] = None,
) -> Project:
    """
    Update only provided fields and record who edited the project.

    Raises:
        NotFoundError: If the project or a related id doesn't exist
    """
    project = get_project(db, project_id)
    update_data = payload.model_dump(exclude_unset=True)

    technology_ids = update_data.pop("technology_ids", None)
    contributor_ids = update_data.pop("contributor_ids", None)
    technologies = get_technologies_by_ids(db, technology_ids) if technology_ids is not None else None
    contributors = get_contributors_by_ids(db, contributor_ids) if contributor_ids is not None else None

    for key, value in update_data.items():
        if value is None and key not in NULLABLE_FIELDS:
            continue
        setattr(project, key, value)

    if technologies is not None:
        project.technologies = technologies
    if contributors is not None:
        project.contributors = contributors
    if current_user is not None:
        project.edited_by = current_user

    db.commit()
    db.refresh(project)
    return project


def delete_project(db: Session, project_id: str) -> bool:
    project = get_project(db, project_id)
    db.delete(project)
    db.commit()
    logger.info(f"Deleted project {project_id}")
    return True


def add_project_images(db: Session, project_id: str, urls: list[str]) -> Project:
    """
    Append uploaded image URLs to the gallery.

    Raises:
        BadRequestError: If the gallery would exceed MAX_PROJECT_IMAGES
    """
    project = get_project(db, project_id)
    check_image_capacity(project, len(urls))
    # Reassign so the JSON column is flagged dirty
    project.images = list(project.images or []) + urls
    db.commit()
    db.refresh(project)
    return project


def check_image_capacity(project: Project, incoming: int) -> None:
    current = len(project.images or [])
    if current + incoming > MAX_PROJECT_IMAGES:
        raise BadRequestError(
            f"A project can have at most {MAX_PROJECT_IMAGES} images "
            f"({current} already uploaded)"
        )


def remove_project_image(db: Session, project_id: str, url: str) -> Project:
    project = get_project(db, project_id)
    images = list(project.images or [])
    if url not in images:
        raise NotFoundError("Image not found on this project")
    images.remove(url)
    project.images = images
    db.commit()
    db.refresh(project)
    return project
