"""
Technology database model.

Skills shown on the portfolio, linked from projects and the about-me page.
"""
import enum
from sqlalchemy import Column, String, DateTime, Enum

from apps.shared.database import Base, generate_uuid, utc_now


class TechnologyLevel(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class TechnologyCategory(str, enum.Enum):
    LANGUAGES = "languages"
    FRAMEWORKS = "frameworks"
    DEVOPS = "devops"
    DATABASES = "databases"
    TOOLS = "tools"
    UI_DESIGN = "ui_design"


class Technology(Base):
    __tablename__ = "technologies"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), unique=True, index=True, nullable=False)
    icon = Column(String(500), nullable=False)  # icon url or icon identifier
    level = Column(Enum(TechnologyLevel, name="technology_level"), nullable=False)
    category = Column(
        Enum(TechnologyCategory, name="technology_category"),
        nullable=False,
        default=TechnologyCategory.LANGUAGES,
    )
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)
