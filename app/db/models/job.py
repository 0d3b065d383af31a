"""
Job model for short-link job postings.
"""
from sqlalchemy import Column, Integer, String, Text, JSON, Index
from app.db.base import Base


class Job(Base):
    """
    A published job posting, looked up externally by its slug.
    """
    __tablename__ = "jobs"

    pk = Column(Integer, primary_key=True)  # storage-internal, never exposed
    id = Column(String(36), nullable=False, unique=True)
    slug = Column(String, nullable=False)

    # Display fields
    title = Column(String, nullable=False)
    company = Column(String, nullable=False)
    location = Column(String, nullable=False)
    external_url = Column(String, nullable=False)
    summary = Column(Text, nullable=False)
    tags = Column(JSON, nullable=False, default=list)

    # Optional details
    batch = Column(String, nullable=True)
    eligibility = Column(Text, nullable=True)
    ctc = Column(String, nullable=True)
    other_details = Column(Text, nullable=True)

    posted_at = Column(String, nullable=False, index=True)  # ISO-8601 UTC

    __table_args__ = (
        Index("uq_jobs_slug", "slug", unique=True),
    )

    def __repr__(self):
        return f"<Job(slug='{self.slug}', company='{self.company}', title='{self.title}')>"
