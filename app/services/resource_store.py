"""
Resource store: prep resources with their embedded materials.

Same contract as the job store, plus partial updates by slug.
"""
import logging
import uuid
from typing import List, Optional, Union

from sqlalchemy.exc import IntegrityError

from app.core.errors import RecordConflictError, RecordNotFoundError, SlugConflictError
from app.core.timestamps import utc_timestamp
from app.db.mapper import to_resource_record
from app.db.models.resource import Resource
from app.db.session import StoreConnection
from app.schemas.resource import ResourceCreate, ResourceRecord, ResourceUpdate

logger = logging.getLogger(__name__)

KIND = "Resource"

# Identity fields an update may never touch
IMMUTABLE_FIELDS = frozenset({"id", "slug", "created_at"})
UPDATABLE_FIELDS = frozenset({"title", "summary", "description", "hero_image", "tags", "materials"})


def _conflict(db, fields: dict) -> RecordConflictError:
    if db.query(Resource.pk).filter(Resource.slug == fields["slug"]).first():
        return SlugConflictError(KIND, fields["slug"])
    return RecordConflictError(KIND, "id", fields["id"])


def list_resources(store: StoreConnection) -> List[ResourceRecord]:
    """All resources, newest first."""
    collection = store.collection(Resource)
    with collection.session() as db:
        rows = db.query(Resource).order_by(Resource.created_at.desc()).all()
        return [to_resource_record(row) for row in rows]


def get_resource_by_slug(store: StoreConnection, slug: str) -> Optional[ResourceRecord]:
    collection = store.collection(Resource)
    with collection.session() as db:
        row = db.query(Resource).filter(Resource.slug == slug).first()
        return to_resource_record(row) if row else None


def create_resource(store: StoreConnection, data: ResourceCreate) -> ResourceRecord:
    """
    Insert a resource. createdAt and updatedAt default to the same instant.

    Raises:
        SlugConflictError: If a resource with the same slug already exists
        RecordConflictError: If a supplied id is already taken
    """
    collection = store.collection(Resource)
    now = utc_timestamp()
    fields = data.model_dump()
    fields["id"] = fields.get("id") or str(uuid.uuid4())
    fields["created_at"] = fields.get("created_at") or now
    fields["updated_at"] = fields.get("updated_at") or now
    fields["materials"] = [material.model_dump(exclude_none=True) for material in data.materials]

    with collection.session() as db:
        row = Resource(**fields)
        db.add(row)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            conflict = _conflict(db, fields)
            logger.info(f"Resource conflict: {conflict}")
            raise conflict from e

        logger.info(f"Resource created: id={row.id}, slug={row.slug}, materials={len(row.materials)}")
        return to_resource_record(row)


def update_resource(
    store: StoreConnection,
    slug: str,
    patch: Union[ResourceUpdate, dict],
) -> ResourceRecord:
    """
    Merge the fields present in patch into the stored resource.

    updatedAt is always refreshed. slug, id and createdAt cannot change
    through this path. Read-merge-write: concurrent updates to one slug
    are last-write-wins.

    Returns:
        The record as stored after the write (a fresh read)

    Raises:
        RecordNotFoundError: If no resource has this slug
    """
    if isinstance(patch, ResourceUpdate):
        changes = patch.model_dump(exclude_unset=True)
        if patch.materials is not None and "materials" in changes:
            changes["materials"] = [material.model_dump(exclude_none=True) for material in patch.materials]
    else:
        changes = dict(patch)

    for field in sorted(changes.keys() - UPDATABLE_FIELDS):
        if field in IMMUTABLE_FIELDS:
            logger.warning(f"Ignoring attempt to change {field} of resource slug={slug}")
        changes.pop(field)
    changes["updated_at"] = utc_timestamp()

    collection = store.collection(Resource)
    with collection.session() as db:
        row = db.query(Resource).filter(Resource.slug == slug).first()
        if not row:
            raise RecordNotFoundError(KIND, slug)

        for field, value in changes.items():
            setattr(row, field, value)
        db.commit()

    with collection.session() as db:
        updated = db.query(Resource).filter(Resource.slug == slug).first()
        if not updated:
            # Deleted between the write and the read-back
            raise RecordNotFoundError(KIND, slug)

        logger.info(f"Resource updated: slug={slug}, fields={sorted(changes)}")
        return to_resource_record(updated)


def delete_resource(store: StoreConnection, slug: str) -> ResourceRecord:
    """
    Remove the resource with this slug and return the removed snapshot.

    Raises:
        RecordNotFoundError: If no resource has this slug
    """
    collection = store.collection(Resource)
    with collection.session() as db:
        row = db.query(Resource).filter(Resource.slug == slug).with_for_update().first()
        if not row:
            raise RecordNotFoundError(KIND, slug)

        removed = to_resource_record(row)
        db.delete(row)
        db.commit()

        logger.info(f"Resource deleted: id={removed.id}, slug={slug}")
        return removed
