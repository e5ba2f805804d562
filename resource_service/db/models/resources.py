from sqlalchemy import CheckConstraint, Column, Index, Integer, Text

from resource_service.utils.statuses import STATUS_ACTIVE, STATUS_INACTIVE
from ..types import UTCDateTime
from .base import Base, now_utc


class Resource(Base):
    __tablename__ = 'resources'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    status = Column(Text, nullable=False)
    created_at = Column(UTCDateTime(), nullable=False, default=now_utc)
    updated_at = Column(UTCDateTime(), nullable=False, default=now_utc)

    __table_args__ = (
        CheckConstraint(
            f"status IN ('{STATUS_ACTIVE}', '{STATUS_INACTIVE}')",
            name='ck_resources_status',
        ),
        CheckConstraint("length(name) > 0", name='ck_resources_name_not_empty'),
        CheckConstraint("length(description) > 0", name='ck_resources_description_not_empty'),
        Index('idx_resources_status', 'status'),
        Index('idx_resources_created_at', 'created_at'),
        # Never hand out a deleted row's id again
        {'sqlite_autoincrement': True},
    )

    def __repr__(self) -> str:
        return f"<Resource id={self.id} name={self.name!r} status={self.status}>"
