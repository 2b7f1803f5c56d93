"""
Job store: job-application records, always scoped to the owning account.

Every read, update and delete filters on `created_by`, so a caller asking for
someone else's job gets the same answer as for a job that doesn't exist.
"""
from dataclasses import dataclass
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from ..database import Base
from ..models.job import Job
from ..models.user import User
from ..utils.error_handlers import NotFoundError, ValidationError, classify_database_error, get_error_message
from ..utils.validation import validate_job_status, validate_string_field

logger = logging.getLogger(__name__)

MAX_ROLE_LENGTH = 100
MAX_COMPANY_LENGTH = 50


def _validate_role(role) -> str:
    return validate_string_field(role, "Role", min_length=1, max_length=MAX_ROLE_LENGTH)


def _validate_company(company) -> str:
    return validate_string_field(company, "Company", min_length=1, max_length=MAX_COMPANY_LENGTH)


def _changed_text(value, field_name: str, max_length: int) -> str:
    if isinstance(value, str) and not value.strip():
        # Whitespace-only text is still set and non-empty, so it is applied as sent.
        if len(value) > max_length:
            raise ValidationError(f"{field_name} must not exceed {max_length} characters")
        return value
    return validate_string_field(value, field_name, min_length=1, max_length=max_length)


@dataclass
class JobChanges:
    """
    Partial update for a job. A field is applied only when it is set and
    non-empty; `status=""` leaves the current status in place.
    """
    role: str | None = None
    company: str | None = None
    status: str | None = None

    def to_values(self) -> dict:
        values = {}
        if self.role:
            values["role"] = _changed_text(self.role, "Role", MAX_ROLE_LENGTH)
        if self.company:
            values["company"] = _changed_text(self.company, "Company", MAX_COMPANY_LENGTH)
        if self.status:
            values["status"] = validate_job_status(self.status)
        return values


class JobStore:
    def __init__(self, db: Session):
        self.db = db

    def initialize(self) -> None:
        """Create the jobs table (with its cascading owner FK) if it doesn't exist."""
        Base.metadata.create_all(bind=self.db.get_bind(), tables=[Job.__table__], checkfirst=True)

    def create_job(self, *, role: str, company: str, owner_id: int, status: str | None = None) -> Job:
        job = Job(
            role=_validate_role(role),
            company=_validate_company(company),
            status=validate_job_status(status),
            created_by=owner_id,
        )
        try:
            self.db.add(job)
            self.db.commit()
            self.db.refresh(job)
        except SQLAlchemyError as e:
            self.db.rollback()
            if isinstance(e, IntegrityError) and "foreign key" in str(e.orig).lower():
                # Token outlived its account.
                logger.warning("Job create for missing account %s", owner_id)
                raise NotFoundError(get_error_message("account_not_found")) from e
            raise classify_database_error(e, "creating job") from e

        logger.info("Created job %s for account %s", job.id, owner_id)
        return job

    def list_jobs(self, owner_id: int) -> list[tuple[Job, str]]:
        """All of the owner's jobs, each paired with the owner's display name."""
        try:
            rows = (
                self.db.query(Job, User.name.label("creator_name"))
                .join(User, Job.created_by == User.id)
                .filter(Job.created_by == owner_id)
                .all()
            )
        except SQLAlchemyError as e:
            raise classify_database_error(e, "listing jobs") from e
        return [(job, creator_name) for job, creator_name in rows]

    def get_job(self, job_id: int, owner_id: int) -> Job | None:
        try:
            return (
                self.db.query(Job)
                .filter(Job.id == job_id, Job.created_by == owner_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise classify_database_error(e, "fetching job") from e

    def update_job(self, job_id: int, owner_id: int, changes: JobChanges) -> Job | None:
        values = changes.to_values()
        # Touch updated_at even when nothing else changes.
        values["updated_at"] = func.now()
        try:
            count = (
                self.db.query(Job)
                .filter(Job.id == job_id, Job.created_by == owner_id)
                .update(values, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise classify_database_error(e, "updating job") from e

        if not count:
            return None
        return self.get_job(job_id, owner_id)

    def delete_job(self, job_id: int, owner_id: int) -> int:
        try:
            count = (
                self.db.query(Job)
                .filter(Job.id == job_id, Job.created_by == owner_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise classify_database_error(e, "deleting job") from e
        return count
