from ordersearch.core.exceptions import (
    BadRequestError,
    InternalError,
    LoadError,
    NotReadyError,
)

from .._common import CollectionResult, CollectionStatus
from ._constants import DEFAULT_MAX_RESULTS, NO_RESULT
from ._index_manager import IndexManager
from ._models import (
    MutationResult,
    MutationStatus,
    Script,
    ScriptOperation,
    SearchItem,
    SearchKey,
    SearchList,
    TypedItem,
)
from ._query_builder import QueryBuilder
from ._schema_loader import SchemaLoader
from ._script_builder import ScriptBuilder
from .component import SearchStore

__all__ = [
    "CollectionResult",
    "CollectionStatus",
    "DEFAULT_MAX_RESULTS",
    "IndexManager",
    "MutationResult",
    "MutationStatus",
    "NO_RESULT",
    "QueryBuilder",
    "SchemaLoader",
    "Script",
    "ScriptBuilder",
    "ScriptOperation",
    "SearchItem",
    "SearchKey",
    "SearchList",
    "SearchStore",
    "TypedItem",
    "BadRequestError",
    "InternalError",
    "LoadError",
    "NotReadyError",
]
