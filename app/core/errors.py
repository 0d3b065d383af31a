"""
Error taxonomy for the job and resource stores.

Access modules raise these; routes translate them into HTTP responses.
"""
from typing import List


class StoreError(Exception):
    """Base class for store failures."""


class ConfigurationError(StoreError):
    """Storage is unconfigured or unreachable. Fatal at startup."""


class RecordConflictError(StoreError):
    """A unique field on the record is already taken."""

    def __init__(self, kind: str, field: str, value: str):
        self.kind = kind
        self.field = field
        self.value = value
        super().__init__(f'{kind} with {field} "{value}" already exists.')


class SlugConflictError(RecordConflictError):
    def __init__(self, kind: str, slug: str):
        self.slug = slug
        super().__init__(kind, "slug", slug)


class RecordNotFoundError(StoreError):
    def __init__(self, kind: str, slug: str):
        self.kind = kind
        self.slug = slug
        super().__init__(f'{kind} with slug "{slug}" not found.')


class RecordValidationError(StoreError):
    """Input rejected before reaching the access modules."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))
