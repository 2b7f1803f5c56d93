from sqlalchemy import CheckConstraint, Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base

JOB_STATUSES = ("pending", "interview", "decline")
DEFAULT_JOB_STATUS = "pending"


class Job(Base):
    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("length(role) <= 100", name="ck_jobs_role_length"),
        CheckConstraint("length(company) <= 50", name="ck_jobs_company_length"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    role = Column(String(100), nullable=False)
    company = Column(String(50), nullable=False)
    status = Column(
        Enum(*JOB_STATUSES, name="job_status", native_enum=False, create_constraint=True),
        nullable=False,
        default=DEFAULT_JOB_STATUS,
        server_default=DEFAULT_JOB_STATUS,
    )
    created_by = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", back_populates="jobs")
