"""
About-me database model.

Single-row table holding the portfolio owner's profile.
"""
from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship

from apps.shared.database import Base, generate_uuid, utc_now
from apps.social_media.models import SocialMedia
from apps.technologies.models import Technology

about_me_technologies = Table(
    "about_me_technologies",
    Base.metadata,
    Column("about_me_id", String(36), ForeignKey("about_me.id", ondelete="CASCADE"), primary_key=True),
    Column("technology_id", String(36), ForeignKey("technologies.id", ondelete="CASCADE"), primary_key=True),
)


class AboutMe(Base):
    __tablename__ = "about_me"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    full_name = Column(String(100), nullable=False)
    dob = Column(Date, nullable=False)
    started_coding = Column(Date, nullable=False)
    bio = Column(Text, nullable=False)
    image_url = Column(String(500))
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    technologies = relationship(Technology, secondary=about_me_technologies, order_by=Technology.name)
    social = relationship(
        SocialMedia,
        back_populates="about_me",
        cascade="all, delete-orphan",
        order_by=SocialMedia.name,
    )
