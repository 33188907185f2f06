"""Application model."""

from enum import Enum

from sqlalchemy import CheckConstraint, Column, Float, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from portal.db.base import Base

UNKNOWN_ROLE = "unknown"


class ApplicationStatus(str, Enum):
    """Lifecycle states of an application."""

    PENDING = "pending"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


class Application(Base):
    """A candidate's submission against one internship role."""

    __tablename__ = "applications"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'shortlisted', 'rejected', 'accepted')",
            name="ck_applications_status",
        ),
        CheckConstraint("ai_score BETWEEN 0 AND 100", name="ck_applications_ai_score"),
    )

    # Plain reference, no FK constraint: a deleted role leaves a dangling id
    role_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    # Applicant fields
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=False)
    university = Column(String(255), nullable=False)
    course = Column(String(255), nullable=False)
    year = Column(String(10), nullable=False)  # year of study, "1".."4"
    cgpa = Column(Float, nullable=False)
    motivation = Column(Text, nullable=False)

    # Resume + AI scoring
    resume_url = Column(String(500), nullable=False)
    ai_score = Column(Integer, nullable=False, default=0)  # 0 - 100
    ai_feedback = Column(String(500), nullable=False, default="")

    status = Column(String(20), nullable=False, default=ApplicationStatus.PENDING.value, index=True)

    role = relationship(
        "InternshipRole",
        primaryjoin="foreign(Application.role_id) == InternshipRole.id",
        lazy="joined",
        viewonly=True,
    )

    @property
    def role_title(self) -> str:
        return self.role.title if self.role is not None else UNKNOWN_ROLE

    @property
    def role_department(self) -> str:
        return self.role.department if self.role is not None else UNKNOWN_ROLE

    def __repr__(self):
        return f"<Application {self.full_name} -> {self.role_id} [{self.status}]>"
