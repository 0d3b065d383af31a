"""
Resource endpoints.

Public reads, admin-only writes, partial updates via PUT.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from app.core.auth_dependency import get_current_admin
from app.core.errors import RecordConflictError, RecordNotFoundError, RecordValidationError
from app.core.logging_config import sanitize_log_data
from app.db.session import StoreConnection, get_store
from app.schemas.base import normalize_slug
from app.schemas.resource import ResourceListResponse, ResourceRecord
from app.services import resource_store
from app.services.validation import validate_resource_payload, validate_resource_update

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resources", tags=["Resources"])


@router.get("", status_code=status.HTTP_200_OK, response_model=ResourceListResponse, response_model_exclude_none=True)
def list_resources(store: StoreConnection = Depends(get_store)):
    try:
        resources = resource_store.list_resources(store)
        logger.debug(f"Resources listed: total={len(resources)}")
        return ResourceListResponse(resources=resources)

    except Exception as e:
        logger.error(f"Failed to list resources: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list resources"
        )


@router.get("/{slug}", status_code=status.HTTP_200_OK, response_model=ResourceRecord, response_model_exclude_none=True)
def get_resource(slug: str, store: StoreConnection = Depends(get_store)):
    resource = resource_store.get_resource_by_slug(store, slug)
    if not resource:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Resource not found"
        )
    return resource


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ResourceRecord, response_model_exclude_none=True)
def create_resource(
    payload: Any = Body(...),
    admin: str = Depends(get_current_admin),
    store: StoreConnection = Depends(get_store)
):
    """
    Publish a new resource.

    At least one material with a title and URL is required; incomplete
    materials are dropped.
    """
    try:
        data = validate_resource_payload(payload)
        return resource_store.create_resource(store, data)

    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except RecordConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create resource: {e} payload={sanitize_log_data(payload)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create resource"
        )


@router.put("/{slug}", status_code=status.HTTP_200_OK, response_model=ResourceRecord, response_model_exclude_none=True)
def update_resource(
    slug: str,
    payload: Any = Body(...),
    admin: str = Depends(get_current_admin),
    store: StoreConnection = Depends(get_store)
):
    """
    Update an existing resource.
    
    Only updates provided fields. Returns 404 if the resource does not exist.
    """
    try:
        patch = validate_resource_update(payload)
        return resource_store.update_resource(store, normalize_slug(slug), patch)

    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update resource: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update resource"
        )


@router.delete("/{slug}", status_code=status.HTTP_200_OK, response_model=ResourceRecord, response_model_exclude_none=True)
def delete_resource(
    slug: str,
    admin: str = Depends(get_current_admin),
    store: StoreConnection = Depends(get_store)
):
    try:
        return resource_store.delete_resource(store, normalize_slug(slug))

    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete resource: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete resource"
        )
