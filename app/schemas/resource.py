"""
Pydantic schemas for prep resources and their materials.
"""
import uuid
from typing import Any, List, Optional

from pydantic import Field, field_validator

from app.schemas.base import (
    CamelModel,
    clean_tags,
    normalize_slug,
    optional_text,
    optional_timestamp,
    require_text,
    split_tags,
)

MATERIALS_REQUIRED = "At least one material (title + URL) is required."


class Material(CamelModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    url: str
    type: Optional[str] = None
    description: Optional[str] = None

    @field_validator("title", "url")
    @classmethod
    def _required(cls, value: str) -> str:
        return require_text(value)

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return str(uuid.uuid4())
        return value

    @field_validator("type", "description")
    @classmethod
    def _optional(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)


def usable_materials(value: Any) -> Any:
    """Drop entries lacking a non-empty title or URL."""
    if not isinstance(value, list):
        return value
    kept = []
    for item in value:
        if not isinstance(item, dict):
            continue
        title, url = item.get("title"), item.get("url")
        if isinstance(title, str) and title.strip() and isinstance(url, str) and url.strip():
            kept.append(item)
    return kept


def require_materials(value: List[Material]) -> List[Material]:
    if not value:
        raise ValueError(MATERIALS_REQUIRED)
    return value


class ResourceCreate(CamelModel):
    slug: str
    title: str
    summary: str
    description: Optional[str] = None
    hero_image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    materials: List[Material]

    # Generated by the resource store when absent
    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("title", "summary")
    @classmethod
    def _required(cls, value: str) -> str:
        return require_text(value)

    @field_validator("slug")
    @classmethod
    def _slug(cls, value: str) -> str:
        return normalize_slug(require_text(value))

    @field_validator("description", "hero_image", "id")
    @classmethod
    def _optional(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _timestamps(cls, value: Optional[str]) -> Optional[str]:
        return optional_timestamp(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value):
        return split_tags(value)

    @field_validator("tags")
    @classmethod
    def _tags(cls, value: List[str]) -> List[str]:
        return clean_tags(value)

    @field_validator("materials", mode="before")
    @classmethod
    def _filter_materials(cls, value):
        return usable_materials(value)

    @field_validator("materials")
    @classmethod
    def _materials(cls, value: List[Material]) -> List[Material]:
        return require_materials(value)


class ResourceUpdate(CamelModel):
    """
    Partial update. Only fields the caller sent are applied, so read it
    with model_dump(exclude_unset=True).
    """
    title: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    hero_image: Optional[str] = None
    tags: Optional[List[str]] = None
    materials: Optional[List[Material]] = None

    @field_validator("title", "summary")
    @classmethod
    def _required(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("must not be blank")
        return require_text(value)

    @field_validator("description", "hero_image")
    @classmethod
    def _optional(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value):
        return split_tags(value)

    @field_validator("tags")
    @classmethod
    def _tags(cls, value: Optional[List[str]]) -> List[str]:
        return clean_tags(value or [])

    @field_validator("materials", mode="before")
    @classmethod
    def _filter_materials(cls, value):
        return usable_materials(value)

    @field_validator("materials")
    @classmethod
    def _materials(cls, value: Optional[List[Material]]) -> List[Material]:
        return require_materials(value or [])


class ResourceRecord(CamelModel):
    """Public shape of a stored resource."""
    id: str
    slug: str
    title: str
    summary: str
    description: Optional[str] = None
    hero_image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    materials: List[Material] = Field(default_factory=list)
    created_at: str
    updated_at: str


class ResourceListResponse(CamelModel):
    resources: List[ResourceRecord]
