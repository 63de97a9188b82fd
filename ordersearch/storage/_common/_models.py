from enum import Enum

from ...core import DataModel


class CollectionStatus(str, Enum):
    """Collection status."""

    CREATED = "created"
    EXISTS = "exists"


class CollectionResult(DataModel):
    """Collection result."""

    status: CollectionStatus
    """Collection status."""
