from ._bootstrap import ainit_search_store
from ._config import Settings
from ._models import (
    Customer,
    CustomerUpdate,
    Order,
    OrderDocument,
    OrderFilter,
    OrderUpdate,
    ProductItem,
)
from .api import create_app
from .service import OrdersService

__all__ = [
    "Customer",
    "CustomerUpdate",
    "Order",
    "OrderDocument",
    "OrderFilter",
    "OrderUpdate",
    "OrdersService",
    "ProductItem",
    "Settings",
    "ainit_search_store",
    "create_app",
]
