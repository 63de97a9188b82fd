from ._component import StoreComponent
from ._models import CollectionResult, CollectionStatus
from ._operation import StoreOperation
from ._operation_parser import StoreOperationParser
from ._provider import StoreProvider

__all__ = [
    "CollectionResult",
    "CollectionStatus",
    "StoreComponent",
    "StoreOperation",
    "StoreOperationParser",
    "StoreProvider",
]
