"""
Resource repository functions.

Implements create/read/update/delete for resource rows plus filtered list and
count queries. Every function takes the session explicitly; SQLAlchemy
failures are rolled back and re-raised as ``StorageError``.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from resource_service.db import models, schemas
from resource_service.errors import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(db: Session, message: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        underlying = getattr(exc, "orig", None) or exc
        logger.error("%s: %s", message, underlying)
        raise StorageError(message, detail=str(underlying)) from exc


def _status_value(status) -> str:
    return getattr(status, "value", status)


def _apply_filters(q: Query, filters: schemas.ResourceFilter) -> Query:
    if filters.status:
        q = q.filter(models.Resource.status == filters.status)
    if filters.name:
        q = q.filter(models.Resource.name.contains(filters.name, autoescape=True))
    return q


def create_resource(db: Session, resource: schemas.ResourceCreate) -> models.Resource:
    now = models.now_utc()
    db_resource = models.Resource(
        name=resource.name,
        description=resource.description,
        status=_status_value(resource.status),
        created_at=now,
        updated_at=now,
    )
    with _storage_errors(db, "Failed to create resource"):
        db.add(db_resource)
        db.commit()
        db.refresh(db_resource)
    logger.info("resource_created: id=%s status=%s", db_resource.id, db_resource.status)
    return db_resource


def get_resource(db: Session, resource_id: int) -> Optional[models.Resource]:
    with _storage_errors(db, "Failed to fetch resource"):
        return db.query(models.Resource).filter(models.Resource.id == resource_id).first()


def get_resources(db: Session, filters: Optional[schemas.ResourceFilter] = None) -> List[models.Resource]:
    """List resources, newest first.

    Rows sharing a ``created_at`` keep insertion order. ``limit`` and
    ``offset`` are handed to the engine unchanged whenever they are set.
    """
    filters = filters or schemas.ResourceFilter()
    q = _apply_filters(db.query(models.Resource), filters)
    q = q.order_by(models.Resource.created_at.desc(), models.Resource.id.asc())
    if filters.limit is not None:
        q = q.limit(filters.limit)
    if filters.offset is not None:
        q = q.offset(filters.offset)
    with _storage_errors(db, "Failed to fetch resources"):
        return q.all()


def count_resources(db: Session, filters: Optional[schemas.ResourceFilter] = None) -> int:
    """Count rows matching the status/name filters; limit and offset are ignored."""
    filters = filters or schemas.ResourceFilter()
    q = _apply_filters(db.query(func.count(models.Resource.id)), filters)
    with _storage_errors(db, "Failed to count resources"):
        return int(q.scalar() or 0)


def update_resource(
    db: Session,
    resource_id: int,
    resource: schemas.ResourceUpdate,
) -> Optional[models.Resource]:
    """Apply a partial update.

    An empty update returns the stored row untouched, ``updated_at``
    included. The read and the write share one transaction and the row is
    locked on engines that support ``SELECT ... FOR UPDATE``.
    """
    changes = resource.model_dump(exclude_unset=True)
    with _storage_errors(db, "Failed to update resource"):
        db_resource = (
            db.query(models.Resource)
            .filter(models.Resource.id == resource_id)
            .with_for_update()
            .first()
        )
        if db_resource is None:
            db.rollback()
            return None
        if not changes:
            return db_resource
        for key, value in changes.items():
            setattr(db_resource, key, _status_value(value))
        db_resource.updated_at = max(models.now_utc(), db_resource.created_at)
        db.commit()
        db.refresh(db_resource)
    logger.info("resource_updated: id=%s fields=%s", resource_id, sorted(changes))
    return db_resource


def delete_resource(db: Session, resource_id: int) -> bool:
    with _storage_errors(db, "Failed to delete resource"):
        db_resource = db.query(models.Resource).filter(models.Resource.id == resource_id).first()
        if db_resource is None:
            return False
        db.delete(db_resource)
        db.commit()
    logger.info("resource_deleted: id=%s", resource_id)
    return True
