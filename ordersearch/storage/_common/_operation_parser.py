from __future__ import annotations

from typing import Any

from ...core import DataModel, Operation, OperationParser
from ...core.exceptions import BadRequestError


class StoreOperationParser(OperationParser):
    def __init__(self, operation: Operation | None):
        super().__init__(operation)

    def get_collection_name(self) -> str | None:
        return self.get_arg("collection")

    def get_key(self) -> Any:
        return self.get_arg("key")

    def get_id_as_str(self) -> str:
        key = self.get_key()
        if isinstance(key, str):
            return key
        if isinstance(key, DataModel):
            key = key.to_dict()
        if isinstance(key, dict) and "id" in key:
            return str(key["id"])
        raise BadRequestError("Key format error")

    def get_where(self) -> dict | None:
        return self._as_dict(self.get_arg("where"))

    def get_set(self) -> dict | None:
        return self._as_dict(self.get_arg("set"))

    def get_limit(self) -> int | None:
        return self.get_arg("limit")

    def get_schema(self) -> dict | None:
        return self.get_arg("schema")

    @staticmethod
    def _as_dict(value: Any) -> dict | None:
        if value is None:
            return None
        if isinstance(value, DataModel):
            return value.to_dict(exclude_none=True, by_alias=True)
        if isinstance(value, dict):
            return value
        raise BadRequestError("Expected a mapping")
