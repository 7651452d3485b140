"""SQLAlchemy model for the recipient directory."""

from sqlalchemy import Column, DateTime, String

from app.infrastructure.database import Base

from .common import generate_id, storage_now


class ProfileModel(Base):
    """Database representation of a user profile with contact details."""

    __tablename__ = "profile"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), nullable=False, index=True)
    full_name = Column(String(255), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=storage_now)


__all__ = ["ProfileModel"]
