"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.
"""
from app.db.models.job import Job
from app.db.models.resource import Resource

# Explicitly export all models for clarity
__all__ = [
    "Job",
    "Resource",
]
