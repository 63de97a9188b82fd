from ordersearch.core.exceptions import NotFoundError

from ._models import SecretItem, SecretKey
from .component import SecretStore

__all__ = [
    "SecretItem",
    "SecretKey",
    "SecretStore",
    "NotFoundError",
]
