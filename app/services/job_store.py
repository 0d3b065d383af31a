"""
Job store: list, look up, create and delete job postings by slug.

Inputs are assumed validated (see app.services.validation); the store only
enforces slug uniqueness, through the unique index on jobs.slug.
"""
import logging
import uuid
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from app.core.errors import RecordConflictError, RecordNotFoundError, SlugConflictError
from app.core.timestamps import utc_timestamp
from app.db.mapper import to_job_record
from app.db.models.job import Job
from app.db.session import StoreConnection
from app.schemas.job import JobCreate, JobRecord

logger = logging.getLogger(__name__)

KIND = "Job"


def _conflict(db, fields: dict) -> RecordConflictError:
    """Name the unique field an insert collided on."""
    if db.query(Job.pk).filter(Job.slug == fields["slug"]).first():
        return SlugConflictError(KIND, fields["slug"])
    return RecordConflictError(KIND, "id", fields["id"])


def list_jobs(store: StoreConnection) -> List[JobRecord]:
    """All jobs, newest first."""
    collection = store.collection(Job)
    with collection.session() as db:
        rows = db.query(Job).order_by(Job.posted_at.desc()).all()
        return [to_job_record(row) for row in rows]


def get_job_by_slug(store: StoreConnection, slug: str) -> Optional[JobRecord]:
    """Exact, case-sensitive match against the stored slug. None when absent."""
    collection = store.collection(Job)
    with collection.session() as db:
        row = db.query(Job).filter(Job.slug == slug).first()
        return to_job_record(row) if row else None


def create_job(store: StoreConnection, data: JobCreate) -> JobRecord:
    """
    Insert a job, generating its id and postedAt when absent.

    Args:
        store: Connected store handle
        data: Validated job input

    Returns:
        The full stored record

    Raises:
        SlugConflictError: If a job with the same slug already exists
        RecordConflictError: If a supplied id is already taken
    """
    collection = store.collection(Job)
    fields = data.model_dump()
    fields["id"] = fields.get("id") or str(uuid.uuid4())
    fields["posted_at"] = fields.get("posted_at") or utc_timestamp()

    with collection.session() as db:
        row = Job(**fields)
        db.add(row)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            conflict = _conflict(db, fields)
            logger.info(f"Job conflict: {conflict}")
            raise conflict from e

        logger.info(f"Job created: id={row.id}, slug={row.slug}, company={row.company}")
        return to_job_record(row)


def delete_job(store: StoreConnection, slug: str) -> JobRecord:
    """
    Remove the job with this slug and return what was removed.

    Raises:
        RecordNotFoundError: If no job has this slug
    """
    collection = store.collection(Job)
    with collection.session() as db:
        row = db.query(Job).filter(Job.slug == slug).with_for_update().first()
        if not row:
            raise RecordNotFoundError(KIND, slug)

        removed = to_job_record(row)
        db.delete(row)
        db.commit()

        logger.info(f"Job deleted: id={removed.id}, slug={slug}")
        return removed
