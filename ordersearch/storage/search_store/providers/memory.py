"""
In Memory Search Store.
"""

from __future__ import annotations

__all__ = ["Memory"]

import copy
import logging
import uuid
from threading import Lock
from typing import Any

from ....core import Context, Operation, Response
from ....core.exceptions import BadRequestError, NotSupportedError
from ..._common import (
    CollectionResult,
    CollectionStatus,
    StoreOperation,
    StoreOperationParser,
    StoreProvider,
)
from .._constants import DEFAULT_MAX_RESULTS
from .._helper import Helper
from .._models import (
    MutationResult,
    Script,
    SearchItem,
    SearchKey,
    SearchList,
)
from .._query_builder import QueryBuilder
from .._script_builder import ScriptBuilder

logger = logging.getLogger(__name__)


class Memory(StoreProvider):
    collection: str | None

    # (collection, id, document)
    _db: dict[str, dict[str, dict]]
    _schemas: dict[str, dict | None]
    _lock: Lock

    def __init__(
        self,
        collection: str | None = None,
        **kwargs,
    ):
        """Initialize.

        Args:
            collection:
                Collection name.
        """
        self.collection = collection

        self._db = dict()
        self._schemas = dict()
        self._lock = Lock()
        super().__init__(**kwargs)

    def __setup__(self, context: Context | None = None) -> None:
        self._set_ready(True)

    def __run__(
        self,
        operation: Operation | None = None,
        context: Context | None = None,
        **kwargs,
    ) -> Any:
        op_parser = self.get_op_parser(operation)
        result: Any = None

        # CLOSE
        if op_parser.op_equals(StoreOperation.CLOSE):
            return Response(result=None)

        self._ensure_ready()
        collection = self._get_collection_name(op_parser)

        # HAS COLLECTION
        if op_parser.op_equals(StoreOperation.HAS_COLLECTION):
            result = collection in self._db
        # CREATE COLLECTION
        elif op_parser.op_equals(StoreOperation.CREATE_COLLECTION):
            with self._lock:
                if collection in self._db:
                    raise BadRequestError(
                        f"Index [{collection}] already exists"
                    )
                self._db[collection] = dict()
                self._schemas[collection] = op_parser.get_schema()
            result = CollectionResult(status=CollectionStatus.CREATED)
        # PUT
        elif op_parser.op_equals(StoreOperation.PUT):
            document = Helper.get_value(op_parser.get_arg("value"))
            key = op_parser.get_key()
            id = op_parser.get_id_as_str() if key is not None else ""
            if not id:
                id = str(uuid.uuid4())
            with self._lock:
                self._db.setdefault(collection, dict())[id] = copy.deepcopy(
                    document
                )
            result = SearchItem(key=SearchKey(id=id))
        # GET
        elif op_parser.op_equals(StoreOperation.GET):
            id = Helper.require_name(op_parser.get_id_as_str(), "Document id")
            document = self._db.get(collection, {}).get(id)
            if document is None:
                logger.warning(
                    "Document [%s] not found in index [%s]", id, collection
                )
                result = None
            else:
                result = SearchItem(
                    key=SearchKey(id=id), value=copy.deepcopy(document)
                )
        # QUERY
        elif op_parser.op_equals(StoreOperation.QUERY):
            limit = op_parser.get_limit()
            if limit is None:
                limit = DEFAULT_MAX_RESULTS
            if limit < 0:
                raise BadRequestError("Limit must not be negative")
            items: list[SearchItem] = []
            for id, document in list(self._db.get(collection, {}).items()):
                if len(items) >= limit:
                    break
                items.append(
                    SearchItem(
                        key=SearchKey(id=id), value=copy.deepcopy(document)
                    )
                )
            result = SearchList(items=items)
        # UPDATE
        elif op_parser.op_equals(StoreOperation.UPDATE):
            update_set = op_parser.get_set()
            if not update_set:
                raise BadRequestError("Update cannot be empty or null")
            query = QueryBuilder.build(op_parser.get_where())
            if query is None:
                result = MutationResult.no_filter()
            else:
                script = ScriptBuilder.build(update_set)
                count = 0
                with self._lock:
                    for id, document in self._db.get(collection, {}).items():
                        if _matches(query, id, document):
                            _apply(script, document)
                            count = count + 1
                result = MutationResult.completed(count)
        # DELETE
        elif op_parser.op_equals(StoreOperation.DELETE):
            query = QueryBuilder.build(op_parser.get_where())
            if query is None:
                result = MutationResult.no_filter()
            else:
                with self._lock:
                    documents = self._db.get(collection, {})
                    ids = [
                        id
                        for id, document in documents.items()
                        if _matches(query, id, document)
                    ]
                    for id in ids:
                        documents.pop(id)
                result = MutationResult.completed(len(ids))
        else:
            raise NotSupportedError(
                operation.to_json() if operation is not None else None
            )
        return Response(result=result)

    def _get_collection_name(self, op_parser: StoreOperationParser) -> str:
        collection_name = op_parser.get_collection_name()
        if collection_name is None:
            collection_name = self.collection or self.__component__.collection
        return Helper.require_name(collection_name, "Index name")


def _matches(query: dict, id: str, document: dict) -> bool:
    if "match_all" in query:
        return True
    if "ids" in query:
        return id in query["ids"]["values"]
    if "term" in query:
        field, value = next(iter(query["term"].items()))
        actual = _get_path(document, field)
        if isinstance(actual, list):
            return value in actual
        return actual == value
    if "bool" in query:
        return all(_matches(q, id, document) for q in query["bool"]["must"])
    raise NotSupportedError(f"Query {query} is not supported")


def _get_path(document: dict, field: str) -> Any:
    value: Any = document
    for part in field.split("."):
        if isinstance(value, list):
            value = [
                v.get(part) for v in value if isinstance(v, dict)
            ]
        elif isinstance(value, dict):
            value = value.get(part)
        else:
            return None
    return value


def _apply(script: Script, document: dict) -> None:
    for op in script.operations:
        parts = op.field.split(".")
        target = document
        for part in parts[:-1]:
            if not isinstance(target.get(part), dict):
                target[part] = dict()
            target = target[part]
        target[parts[-1]] = copy.deepcopy(script.params[op.param])
