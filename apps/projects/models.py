"""
Projects database models.

Stores portfolio projects with their gallery, tags and relations to
technologies, contributors and the users who created/edited them.
"""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Table, JSON
from sqlalchemy.orm import relationship

from apps.shared.database import Base, generate_uuid, utc_now
from apps.contributors.models import Contributor
from apps.technologies.models import Technology
from apps.users.models import User

PROJECT_PROGRESS = ("pending", "in-progress", "finished")
MAX_PROJECT_IMAGES = 10

project_technologies = Table(
    "project_technologies",
    Base.metadata,
    Column("project_id", String(36), ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    Column("technology_id", String(36), ForeignKey("technologies.id", ondelete="CASCADE"), primary_key=True),
)

project_contributors = Table(
    "project_contributors",
    Base.metadata,
    Column("project_id", String(36), ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    Column("contributor_id", String(36), ForeignKey("contributors.id", ondelete="CASCADE"), primary_key=True),
)


class Project(Base):
    """
    Project model for portfolio projects.

    Stores all project data including:
    - Basic info (name, description, progress)
    - Links (GitHub, live demo)
    - Media (featured image URL and a gallery of at most 10 image URLs)
    - Relations (technologies, contributors, creator, last editor)
    """
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(200), nullable=False)
    github_link = Column(String(500), nullable=False)
    live_url = Column(String(500))
    progress = Column(String(20), nullable=False, default="pending")  # one of PROJECT_PROGRESS
    image_url = Column(String(500))
    images = Column(JSON, nullable=False, default=list)  # ["/uploads/projects/a.png", ...]
    description = Column(Text, nullable=False)
    tags = Column(JSON, nullable=False, default=list)  # ["web", "cli"]
    created_by_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), index=True)
    edited_by_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    technologies = relationship(Technology, secondary=project_technologies, order_by=Technology.name)
    contributors = relationship(
        Contributor,
        secondary=project_contributors,
        back_populates="projects",
        order_by=Contributor.name,
    )
    created_by = relationship(User, foreign_keys=[created_by_id])
    edited_by = relationship(User, foreign_keys=[edited_by_id])

    @property
    def technology_ids(self) -> list[str]:
        return [technology.id for technology in self.technologies]
