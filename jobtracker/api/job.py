from datetime import datetime
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..config import API_PREFIX
from ..models.job import Job
from ..services.jobs import JobChanges, JobStore
from ..utils.dependencies import get_current_account, get_job_store
from ..utils.error_handlers import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{API_PREFIX}/jobs", tags=["Jobs"])


def _isoformat(value):
    return value.isoformat() if isinstance(value, datetime) else value


def _job_to_public(job: Job, *, creator_name: str | None = None) -> dict:
    payload = {
        "id": job.id,
        "role": job.role,
        "company": job.company,
        "status": job.status,
        "created_by": job.created_by,
        "created_at": _isoformat(job.created_at),
        "updated_at": _isoformat(job.updated_at),
    }
    if creator_name is not None:
        payload["creator_name"] = creator_name
    return payload


def _job_not_found(job_id: int) -> NotFoundError:
    return NotFoundError(f"No job with id {job_id}")


class JobCreate(BaseModel):
    role: str | None = None
    company: str | None = None
    status: str | None = None  # pending/interview/decline, defaults to pending


class JobUpdate(BaseModel):
    role: str | None = None
    company: str | None = None
    status: str | None = None


@router.get("")
def list_jobs(
    account=Depends(get_current_account),
    jobs: JobStore = Depends(get_job_store),
):
    rows = jobs.list_jobs(account["account_id"])
    items = [_job_to_public(job, creator_name=creator_name) for job, creator_name in rows]
    return {"success": True, "jobs": items, "count": len(items)}


@router.post("", status_code=201)
def create_job(
    payload: JobCreate,
    account=Depends(get_current_account),
    jobs: JobStore = Depends(get_job_store),
):
    job = jobs.create_job(
        role=payload.role,
        company=payload.company,
        status=payload.status,
        owner_id=account["account_id"],
    )
    return {"success": True, "job": _job_to_public(job)}


@router.get("/{job_id:int}")
def get_job(
    job_id: int,
    account=Depends(get_current_account),
    jobs: JobStore = Depends(get_job_store),
):
    job = jobs.get_job(job_id, account["account_id"])
    if not job:
        raise _job_not_found(job_id)
    return {"success": True, "job": _job_to_public(job)}


@router.patch("/{job_id:int}")
def update_job(
    job_id: int,
    payload: JobUpdate,
    account=Depends(get_current_account),
    jobs: JobStore = Depends(get_job_store),
):
    changes = JobChanges(role=payload.role, company=payload.company, status=payload.status)
    job = jobs.update_job(job_id, account["account_id"], changes)
    if not job:
        raise _job_not_found(job_id)
    return {"success": True, "job": _job_to_public(job)}


@router.delete("/{job_id:int}", status_code=200)
def delete_job(
    job_id: int,
    account=Depends(get_current_account),
    jobs: JobStore = Depends(get_job_store),
):
    if not jobs.delete_job(job_id, account["account_id"]):
        raise _job_not_found(job_id)
    return {"success": True, "deleted_job_id": job_id}
