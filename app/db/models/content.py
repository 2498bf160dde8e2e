from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, JSON, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import BaseModel


class Content(BaseModel):
    __tablename__ = "contents"

    author_id = Column(Uuid(as_uuid=True), ForeignKey("users.uuid"), index=True, nullable=False)
    type = Column(String(32), index=True, nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    is_deleted = Column(Boolean, default=False, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    author = relationship("User", back_populates="contents")
    engagements = relationship("Engagement", back_populates="content", cascade="all, delete-orphan")


class Engagement(BaseModel):
    __tablename__ = "engagements"
    __table_args__ = (
        UniqueConstraint("content_id", "user_id", "type", name="uq_engagement_content_user_type"),
    )

    content_id = Column(Uuid(as_uuid=True), ForeignKey("contents.uuid"), index=True, nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.uuid"), nullable=False)
    type = Column(String(32), nullable=False)

    # Relationships
    content = relationship("Content", back_populates="engagements")
    user = relationship("User")
