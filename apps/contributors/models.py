"""
Contributor database model.
"""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from apps.shared.database import Base, generate_uuid, utc_now


class Contributor(Base):
    """
    Person credited on one or more projects.

    email and github are unique; projects is the other side of
    project_contributors (defined in apps.projects.models).
    """
    __tablename__ = "contributors"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    github = Column(String(255), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    projects = relationship(
        "Project",
        secondary="project_contributors",
        back_populates="contributors",
        order_by="Project.created_at.desc()",
    )
