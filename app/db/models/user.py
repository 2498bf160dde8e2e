from sqlalchemy import Column, String, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from app.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    owner_account = Column(Uuid(as_uuid=True), ForeignKey("accounts.uuid"), index=True, nullable=False)
    display_id = Column(String(100), unique=True, index=True, nullable=False)
    display_name = Column(String(255), nullable=False)
    avatar = Column(String(1024), nullable=True)
    verified = Column(Boolean, default=False)

    # Relationships
    account = relationship("Account", back_populates="users")
    contents = relationship("Content", back_populates="author", cascade="all, delete-orphan")
