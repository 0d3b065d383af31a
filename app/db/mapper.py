"""
Storage row -> public record conversion.

Rows carry a storage-internal primary key (pk) that must never leave this
layer; public records are identified by their opaque id and slug.
"""
import uuid

from sqlalchemy import inspect

from app.db.base import Base
from app.schemas.job import JobRecord
from app.schemas.resource import ResourceRecord

INTERNAL_FIELDS = frozenset({"pk"})


def to_document(row: Base) -> dict:
    """Column values of a row, keyed by attribute name, minus internal fields."""
    mapper = inspect(row).mapper
    return {
        attr.key: getattr(row, attr.key)
        for attr in mapper.column_attrs
        if attr.key not in INTERNAL_FIELDS
    }


def _ensure_public_id(document: dict, table: str) -> dict:
    if not document.get("id"):
        # Stable across reads for rows written without an id
        document["id"] = str(uuid.uuid5(uuid.NAMESPACE_URL, f"{table}/{document.get('slug')}"))
    return document


def to_job_record(row: Base) -> JobRecord:
    document = _ensure_public_id(to_document(row), row.__tablename__)
    return JobRecord.model_validate(document)


def to_resource_record(row: Base) -> ResourceRecord:
    document = _ensure_public_id(to_document(row), row.__tablename__)
    return ResourceRecord.model_validate(document)
