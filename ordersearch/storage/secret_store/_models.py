from ...core import DataModel


class SecretKey(DataModel):
    """Secret key."""

    id: str
    """Secret id."""

    version: str | None = None
    """Secret version."""


class SecretItem(DataModel):
    """Secret item."""

    key: SecretKey
    """Secret key."""

    value: str | None = None
    """Secret value."""
