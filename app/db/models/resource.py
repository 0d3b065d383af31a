"""
Resource model for interview-prep resources.

Materials have no lifecycle of their own, so they live inside the
resource row as a JSON list.
"""
from sqlalchemy import Column, Integer, String, Text, JSON, Index
from app.db.base import Base


class Resource(Base):
    __tablename__ = "resources"

    pk = Column(Integer, primary_key=True)  # storage-internal, never exposed
    id = Column(String(36), nullable=False, unique=True)
    slug = Column(String, nullable=False)

    title = Column(String, nullable=False)
    summary = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    hero_image = Column(String, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    materials = Column(JSON, nullable=False, default=list)  # [{id, title, url, type?, description?}]

    # Timestamps (ISO-8601 UTC)
    created_at = Column(String, nullable=False, index=True)
    updated_at = Column(String, nullable=False)

    __table_args__ = (
        Index("uq_resources_slug", "slug", unique=True),
    )

    def __repr__(self):
        return f"<Resource(slug='{self.slug}', title='{self.title}')>"
