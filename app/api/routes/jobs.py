"""
Job endpoints.

Public reads, admin-only writes. Bodies pass through the validation stage
before reaching the job store.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from app.core.auth_dependency import get_current_admin
from app.core.errors import RecordConflictError, RecordNotFoundError, RecordValidationError
from app.core.logging_config import sanitize_log_data
from app.db.session import StoreConnection, get_store
from app.schemas.base import normalize_slug
from app.schemas.job import JobListResponse, JobRecord
from app.services import job_store
from app.services.validation import validate_job_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])


@router.get("", status_code=status.HTTP_200_OK, response_model=JobListResponse, response_model_exclude_none=True)
def list_jobs(store: StoreConnection = Depends(get_store)):
    """
    List all jobs, newest first.
    """
    try:
        jobs = job_store.list_jobs(store)
        logger.debug(f"Jobs listed: total={len(jobs)}")
        return JobListResponse(jobs=jobs)

    except Exception as e:
        logger.error(f"Failed to list jobs: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list jobs"
        )


@router.get("/{slug}", status_code=status.HTTP_200_OK, response_model=JobRecord, response_model_exclude_none=True)
def get_job(slug: str, store: StoreConnection = Depends(get_store)):
    """
    Get a job by its slug. Exact match; returns 404 if not found.
    """
    job = job_store.get_job_by_slug(store, slug)
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found"
        )
    return job


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobRecord, response_model_exclude_none=True)
def create_job(
    payload: Any = Body(...),
    admin: str = Depends(get_current_admin),
    store: StoreConnection = Depends(get_store)
):
    """
    Publish a new job.

    Requires the admin token. Returns 409 if the slug or id is taken.
    """
    try:
        data = validate_job_payload(payload)
        return job_store.create_job(store, data)

    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except RecordConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create job: {e} payload={sanitize_log_data(payload)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create job"
        )


@router.delete("/{slug}", status_code=status.HTTP_200_OK, response_model=JobRecord, response_model_exclude_none=True)
def delete_job(
    slug: str,
    admin: str = Depends(get_current_admin),
    store: StoreConnection = Depends(get_store)
):
    """
    Delete a job and return the removed record.

    Returns 404 if no job has this slug.
    """
    try:
        return job_store.delete_job(store, normalize_slug(slug))

    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete job: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete job"
        )
