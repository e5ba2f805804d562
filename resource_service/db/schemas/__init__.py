"""
Pydantic schemas for request bodies and API responses.
"""
from .resources import (
    ResourceBase,
    ResourceCreate,
    ResourceUpdate,
    Resource,
    ResourceFilter,
    ResourceList,
    ResourceDeleted,
)
from .prices import PriceEntry, PriceList, Conversion

__all__ = [
    "ResourceBase",
    "ResourceCreate",
    "ResourceUpdate",
    "Resource",
    "ResourceFilter",
    "ResourceList",
    "ResourceDeleted",
    "PriceEntry",
    "PriceList",
    "Conversion",
]
