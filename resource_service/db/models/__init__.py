"""
SQLAlchemy models for the resource service.
"""
from .base import Base, now_utc  # noqa: F401
from .resources import Resource  # noqa: F401

__all__ = ["Base", "now_utc", "Resource"]
