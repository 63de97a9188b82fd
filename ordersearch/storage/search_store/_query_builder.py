from typing import Any

from ...core import DataModel
from ...core.exceptions import BadRequestError
from ._constants import ID_FIELD


class QueryBuilder:
    """Builds Elasticsearch query DSL from flat field/value filters.

    An empty filter yields ``None``, which callers must treat as
    "no filter supplied". It is never widened to a match-all query.
    """

    @staticmethod
    def build(filter: dict[str, Any] | DataModel | None) -> dict | None:
        if isinstance(filter, DataModel):
            filter = filter.to_dict(exclude_none=True, by_alias=True)
        if not filter:
            return None

        clauses: list[dict[str, Any]] = []
        id = filter.get(ID_FIELD)
        if isinstance(id, str) and id.strip():
            clauses.append({"ids": {"values": [id]}})

        for field, value in filter.items():
            if field == ID_FIELD or value is None:
                continue
            if isinstance(value, dict):
                raise BadRequestError(
                    f"Filter value for [{field}] must not be an object"
                )
            if isinstance(value, (list, tuple, set)):
                raise BadRequestError(
                    f"Filter value for [{field}] must be a single value"
                )
            clauses.append({"term": {field: value}})

        if not clauses:
            raise BadRequestError("Filter does not contain any usable value")
        if len(clauses) == 1:
            return clauses[0]
        return {"bool": {"must": clauses}}

    @staticmethod
    def match_all() -> dict:
        return {"match_all": {}}
