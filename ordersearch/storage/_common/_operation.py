from __future__ import annotations

from typing import Any

from ...core import Operation


class StoreOperation:
    GET = "get"
    PUT = "put"
    UPDATE = "update"
    DELETE = "delete"
    QUERY = "query"
    CLOSE = "close"

    CREATE_COLLECTION = "create_collection"
    HAS_COLLECTION = "has_collection"

    @staticmethod
    def get(
        key: Any = None,
        collection: str | None = None,
        **kwargs,
    ) -> Operation:
        return Operation.normalize(StoreOperation.GET, locals())
