"""
Resource status constants.

Centralized definitions for the two-value status enumeration shared by the
schemas and the storage constraint.
"""

from enum import Enum

# Canonical status values stored in the database
STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"


class ResourceStatusEnum(str, Enum):
    """Enum for resource statuses used in schemas and validation."""
    active = STATUS_ACTIVE
    inactive = STATUS_INACTIVE
