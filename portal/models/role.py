"""Internship role model."""

from sqlalchemy import Boolean, Column, Date, Integer, Numeric, String, Text

from portal.db.base import Base


class InternshipRole(Base):
    """An internship position open for application."""

    __tablename__ = "internship_roles"

    title = Column(String(255), nullable=False, index=True)
    department = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    requirements = Column(Text, nullable=False, default="")
    location = Column(String(255), nullable=False, default="Remote")
    duration = Column(Integer, nullable=False, default=3)  # months
    stipend = Column(Numeric(12, 2), nullable=False, default=25000)
    application_deadline = Column(Date, nullable=True)

    # Stored and counted in stats, never used to filter listings
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<InternshipRole {self.title} ({self.department})>"
