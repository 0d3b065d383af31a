"""
Validation stage in front of the job and resource stores.

Everything the stores receive has passed through here, so they can assume
well-formed input and only enforce slug uniqueness themselves.
"""
import logging
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.errors import RecordValidationError
from app.schemas.job import JobCreate
from app.schemas.resource import ResourceCreate, ResourceUpdate

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _messages(error: ValidationError) -> List[str]:
    messages = []
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ()))
        msg = item.get("msg", "invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        messages.append(f"{field}: {msg}" if field else msg)
    return messages


def _validate(schema: Type[ModelT], payload: Any) -> ModelT:
    if not isinstance(payload, dict):
        raise RecordValidationError(["Request body must be a JSON object."])
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        errors = _messages(e)
        logger.info(f"{schema.__name__} rejected: {errors}")
        raise RecordValidationError(errors) from e


def validate_job_payload(payload: Any) -> JobCreate:
    """
    Validate a job submission.

    title, company, externalUrl and slug are required; location, summary and
    tags fall back to defaults.

    Raises:
        RecordValidationError: With one message per offending field
    """
    return _validate(JobCreate, payload)


def validate_resource_payload(payload: Any) -> ResourceCreate:
    """
    Validate a resource submission.

    Materials missing a title or URL are dropped; at least one must remain.
    """
    return _validate(ResourceCreate, payload)


def validate_resource_update(payload: Any) -> ResourceUpdate:
    return _validate(ResourceUpdate, payload)
