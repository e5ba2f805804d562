"""
Resources API endpoints.

CRUD operations for resource records. Input is validated by the pydantic
schemas and path/query typing before any repository call; storage failures
surface as ``StorageError`` from the repository.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.orm import Session

from resource_service.db import schemas
from resource_service.db.database import get_db
from resource_service.db.repositories import resources as repo
from resource_service.errors import NotFoundError

router = APIRouter(prefix="/resources", tags=["resources"])

# Ids are stored as signed 64-bit integers; anything wider is rejected as a bad id
MIN_RESOURCE_ID = -(2**63)
MAX_RESOURCE_ID = 2**63 - 1


@router.post("", response_model=schemas.Resource, status_code=status.HTTP_201_CREATED)
def create_resource_endpoint(
    resource: schemas.ResourceCreate,
    db: Session = Depends(get_db),
):
    return repo.create_resource(db, resource)


@router.get("", response_model=schemas.ResourceList)
def list_resources_endpoint(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    name: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    db: Session = Depends(get_db),
):
    filters = schemas.ResourceFilter(status=status_filter, name=name, limit=limit, offset=offset)
    resources = repo.get_resources(db, filters)
    total = repo.count_resources(db, filters)
    return schemas.ResourceList(
        data=[schemas.Resource.model_validate(r) for r in resources],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{resource_id}", response_model=schemas.Resource)
def get_resource_endpoint(
    resource_id: int = Path(ge=MIN_RESOURCE_ID, le=MAX_RESOURCE_ID),
    db: Session = Depends(get_db),
):
    db_resource = repo.get_resource(db, resource_id)
    if db_resource is None:
        raise NotFoundError("Resource not found")
    return db_resource


@router.put("/{resource_id}", response_model=schemas.Resource)
def update_resource_endpoint(
    resource_id: int = Path(ge=MIN_RESOURCE_ID, le=MAX_RESOURCE_ID),
    resource_update: Optional[schemas.ResourceUpdate] = Body(default=None),
    db: Session = Depends(get_db),
):
    # A missing body is an empty partial update
    updated = repo.update_resource(db, resource_id, resource_update or schemas.ResourceUpdate())
    if updated is None:
        raise NotFoundError("Resource not found")
    return updated


@router.delete("/{resource_id}", response_model=schemas.ResourceDeleted)
def delete_resource_endpoint(
    resource_id: int = Path(ge=MIN_RESOURCE_ID, le=MAX_RESOURCE_ID),
    db: Session = Depends(get_db),
):
    if not repo.delete_resource(db, resource_id):
        raise NotFoundError("Resource not found")
    return {"message": "Resource deleted successfully"}
