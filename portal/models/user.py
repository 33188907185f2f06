"""User model."""

from sqlalchemy import Boolean, Column, String

from portal.db.base import Base


class User(Base):
    """Administrator account used to sign in to the dashboard."""

    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="admin")  # admin, viewer
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
