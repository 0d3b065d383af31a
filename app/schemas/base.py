"""
Shared pydantic building blocks for request and record schemas.
"""
import re
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.core.timestamps import normalize_timestamp

_WHITESPACE = re.compile(r"\s+")


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def normalize_slug(raw: str) -> str:
    """Trim, lower-case, and hyphenate internal whitespace."""
    return _WHITESPACE.sub("-", raw.strip().lower())


def require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def text_or_default(value: Any, default: str) -> Any:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip() or default
    return value


def split_tags(value: Any) -> Any:
    if value is None:
        return []
    # Admin console posts tags as "a, b, c"
    if isinstance(value, str):
        return value.split(",")
    return value


def clean_tags(tags: List[str]) -> List[str]:
    return [tag.strip() for tag in tags if tag and tag.strip()]


def optional_timestamp(value: Optional[str]) -> Optional[str]:
    value = optional_text(value)
    return normalize_timestamp(value) if value else None
