from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from resource_service.utils.statuses import ResourceStatusEnum


class ResourceBase(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    status: ResourceStatusEnum


class ResourceCreate(ResourceBase):
    pass


class ResourceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    status: Optional[ResourceStatusEnum] = None

    @field_validator("name", "description", "status", mode="before")
    @classmethod
    def _reject_explicit_null(cls, value):
        # Absent fields keep their value; an explicit null would clear a NOT NULL column
        if value is None:
            raise ValueError("must not be null")
        return value


class Resource(BaseModel):
    id: int
    name: str
    description: str
    status: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)


class ResourceFilter(BaseModel):
    status: Optional[str] = None
    name: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


class ResourceList(BaseModel):
    data: List[Resource]
    total: int
    limit: Optional[int] = None
    offset: Optional[int] = None


class ResourceDeleted(BaseModel):
    message: str
