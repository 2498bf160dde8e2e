from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from app.db.base import BaseModel


class Account(BaseModel):
    __tablename__ = "accounts"

    email = Column(String(255), unique=True, index=True, nullable=True)
    is_guest = Column(Boolean, default=True, nullable=False)
    activate_date = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    credentials = relationship("Credential", back_populates="account", cascade="all, delete-orphan")
    users = relationship("User", back_populates="account", cascade="all, delete-orphan")


class Credential(BaseModel):
    __tablename__ = "credentials"

    account_id = Column(Uuid(as_uuid=True), ForeignKey("accounts.uuid"), nullable=False)
    access_token = Column(String(1024), unique=True, index=True, nullable=False)
    access_token_expire_date = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    account = relationship("Account", back_populates="credentials")
