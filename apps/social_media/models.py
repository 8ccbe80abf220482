"""
Social media link database model.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from apps.shared.database import Base, generate_uuid, utc_now


class SocialMedia(Base):
    """Profile link shown on the about-me page. Deleted together with its AboutMe."""
    __tablename__ = "social_media"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)  # e.g. "GitHub"
    link = Column(String(255), nullable=False)
    icon = Column(String(255), nullable=False)
    about_me_id = Column(String(36), ForeignKey("about_me.id", ondelete="CASCADE"), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    about_me = relationship("AboutMe", back_populates="social")
