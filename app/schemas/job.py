"""
Pydantic schemas for job postings.
"""
from typing import List, Optional

from pydantic import Field, field_validator

from app.core import config
from app.schemas.base import (
    CamelModel,
    clean_tags,
    normalize_slug,
    optional_text,
    optional_timestamp,
    require_text,
    split_tags,
    text_or_default,
)


class JobCreate(CamelModel):
    """Validated input for creating a job. Built by the validation stage."""
    slug: str = Field(..., description="Custom slug, lower-cased before storage")
    title: str = Field(..., description="Job title")
    company: str = Field(..., description="Company name")
    external_url: str = Field(..., description="Link to the official posting")
    location: str = Field(default_factory=lambda: config.DEFAULT_JOB_LOCATION)
    summary: str = Field(default_factory=lambda: config.DEFAULT_JOB_SUMMARY)
    tags: List[str] = Field(default_factory=list)
    batch: Optional[str] = None
    eligibility: Optional[str] = None
    ctc: Optional[str] = None
    other_details: Optional[str] = None

    # Generated by the job store when absent
    id: Optional[str] = None
    posted_at: Optional[str] = None

    @field_validator("title", "company", "external_url")
    @classmethod
    def _required(cls, value: str) -> str:
        return require_text(value)

    @field_validator("slug")
    @classmethod
    def _slug(cls, value: str) -> str:
        return normalize_slug(require_text(value))

    @field_validator("location", mode="before")
    @classmethod
    def _location(cls, value):
        return text_or_default(value, config.DEFAULT_JOB_LOCATION)

    @field_validator("summary", mode="before")
    @classmethod
    def _summary(cls, value):
        return text_or_default(value, config.DEFAULT_JOB_SUMMARY)

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value):
        return split_tags(value)

    @field_validator("tags")
    @classmethod
    def _tags(cls, value: List[str]) -> List[str]:
        return clean_tags(value)

    @field_validator("batch", "eligibility", "ctc", "other_details", "id")
    @classmethod
    def _optional(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)

    @field_validator("posted_at")
    @classmethod
    def _posted_at(cls, value: Optional[str]) -> Optional[str]:
        return optional_timestamp(value)


class JobRecord(CamelModel):
    """Public shape of a stored job."""
    id: str
    slug: str
    title: str
    company: str
    location: str
    external_url: str
    summary: str
    tags: List[str] = Field(default_factory=list)
    batch: Optional[str] = None
    eligibility: Optional[str] = None
    ctc: Optional[str] = None
    other_details: Optional[str] = None
    posted_at: str


class JobListResponse(CamelModel):
    jobs: List[JobRecord]
