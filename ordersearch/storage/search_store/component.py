from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, TypeVar

from ...core import DataModel, Response, operation
from .._common import CollectionResult, StoreComponent
from ._constants import DEFAULT_MAX_RESULTS
from ._helper import Helper
from ._index_manager import IndexManager
from ._models import (
    MutationResult,
    SearchItem,
    SearchKey,
    SearchList,
    TypedItem,
)
from ._schema_loader import SchemaLoader

T = TypeVar("T")


class SearchStore(StoreComponent):
    collection: str | None
    mappings_path: str | Path

    def __init__(
        self,
        collection: str | None = None,
        mappings_path: str | Path = "mappings",
        **kwargs,
    ):
        """Initialize.

        Args:
            collection:
                Default collection (index) name.
            mappings_path:
                Directory the index mappings are loaded from.
        """
        self.collection = collection
        self.mappings_path = mappings_path
        super().__init__(**kwargs)

    def ensure_collection(
        self,
        collection: str,
        schema_source: str,
    ) -> CollectionResult:
        """Create the collection from a mapping file if it does not exist.

        Args:
            collection:
                Collection name.
            schema_source:
                Mapping file name, relative to ``mappings_path``.

        Returns:
            Collection result.
        """
        Helper.require_name(collection, "Index name")
        Helper.require_name(schema_source, "Schema name")
        schema = SchemaLoader(self.mappings_path).load(schema_source)
        return IndexManager(self).ensure(collection, schema)

    async def aensure_collection(
        self,
        collection: str,
        schema_source: str,
    ) -> CollectionResult:
        """Create the collection from a mapping file if it does not exist.

        Args:
            collection:
                Collection name.
            schema_source:
                Mapping file name, relative to ``mappings_path``.

        Returns:
            Collection result.
        """
        Helper.require_name(collection, "Index name")
        Helper.require_name(schema_source, "Schema name")
        schema = SchemaLoader(self.mappings_path).load(schema_source)
        return await IndexManager(self).aensure(collection, schema)

    def get_item(
        self,
        id: str,
        collection: str | None = None,
        shape: type[T] | Callable[[dict[str, Any]], T] | None = None,
    ) -> TypedItem | None:
        """Get a document by id and decode it into ``shape``.

        Returns:
            Typed item, or None when the document does not exist.
        """
        Helper.require_name(id, "Document id")
        item = self.get(key=SearchKey(id=id), collection=collection).result
        if item is None:
            return None
        return Helper.materialize(item, shape)

    async def aget_item(
        self,
        id: str,
        collection: str | None = None,
        shape: type[T] | Callable[[dict[str, Any]], T] | None = None,
    ) -> TypedItem | None:
        """Get a document by id and decode it into ``shape``.

        Returns:
            Typed item, or None when the document does not exist.
        """
        Helper.require_name(id, "Document id")
        response = await self.aget(key=SearchKey(id=id), collection=collection)
        if response.result is None:
            return None
        return Helper.materialize(response.result, shape)

    def get_items(
        self,
        collection: str | None = None,
        shape: type[T] | Callable[[dict[str, Any]], T] | None = None,
        limit: int = DEFAULT_MAX_RESULTS,
    ) -> list[TypedItem]:
        """List up to ``limit`` documents decoded into ``shape``."""
        result = self.query(collection=collection, limit=limit).result
        return [Helper.materialize(item, shape) for item in result.items]

    async def aget_items(
        self,
        collection: str | None = None,
        shape: type[T] | Callable[[dict[str, Any]], T] | None = None,
        limit: int = DEFAULT_MAX_RESULTS,
    ) -> list[TypedItem]:
        """List up to ``limit`` documents decoded into ``shape``."""
        result = (await self.aquery(collection=collection, limit=limit)).result
        return [Helper.materialize(item, shape) for item in result.items]

    @operation()
    def has_collection(
        self,
        collection: str | None = None,
    ) -> Response[bool]:
        """Check if collection exists.

        Args:
            collection:
                Collection name.

        Returns:
            A value indicating whether collection exists.
        """
        raise NotImplementedError

    @operation()
    def create_collection(
        self,
        collection: str | None = None,
        schema: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Response[CollectionResult]:
        """Create collection.

        Args:
            collection:
                Collection name.
            schema:
                Index mappings.

        Returns:
            Collection result.
        """
        raise NotImplementedError

    @operation()
    def get(
        self,
        key: str | dict | SearchKey,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[SearchItem | None]:
        """Get document.

        Args:
            key:
                Document key.
            collection:
                Collection name.

        Returns:
            Document item, or None when not found.
        """
        raise NotImplementedError

    @operation()
    def put(
        self,
        value: dict[str, Any] | DataModel,
        key: str | dict | SearchKey | None = None,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[SearchItem]:
        """Put document.

        Args:
            value:
                Document value.
            key:
                Document key. Generated by the store when not set.
            collection:
                Collection name.

        Returns:
            Document item with the assigned key.
        """
        raise NotImplementedError

    @operation()
    def query(
        self,
        collection: str | None = None,
        limit: int | None = DEFAULT_MAX_RESULTS,
        **kwargs: Any,
    ) -> Response[SearchList]:
        """Query all documents, bounded by limit.

        Args:
            collection:
                Collection name.
            limit:
                Maximum number of documents returned.

        Returns:
            Document list with items.
        """
        raise NotImplementedError

    @operation()
    def update(
        self,
        where: dict[str, Any] | DataModel,
        set: dict[str, Any] | DataModel,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[MutationResult]:
        """Update all documents matching a filter.

        Args:
            where:
                Field/value filter. Empty filters update nothing.
            set:
                Partial update. Null values are skipped.
            collection:
                Collection name.

        Returns:
            Mutation result.
        """
        raise NotImplementedError

    @operation()
    def delete(
        self,
        where: dict[str, Any] | DataModel,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[MutationResult]:
        """Delete all documents matching a filter.

        Args:
            where:
                Field/value filter. Empty filters delete nothing.
            collection:
                Collection name.

        Returns:
            Mutation result.
        """
        raise NotImplementedError

    @operation()
    def close(
        self,
        **kwargs: Any,
    ) -> Response[None]:
        """Close client.

        Returns:
            None.
        """
        raise NotImplementedError

    @operation()
    async def ahas_collection(
        self,
        collection: str | None = None,
    ) -> Response[bool]:
        """Check if collection exists.

        Args:
            collection:
                Collection name.

        Returns:
            A value indicating whether collection exists.
        """
        raise NotImplementedError

    @operation()
    async def acreate_collection(
        self,
        collection: str | None = None,
        schema: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Response[CollectionResult]:
        """Create collection.

        Args:
            collection:
                Collection name.
            schema:
                Index mappings.

        Returns:
            Collection result.
        """
        raise NotImplementedError

    @operation()
    async def aget(
        self,
        key: str | dict | SearchKey,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[SearchItem | None]:
        """Get document.

        Args:
            key:
                Document key.
            collection:
                Collection name.

        Returns:
            Document item, or None when not found.
        """
        raise NotImplementedError

    @operation()
    async def aput(
        self,
        value: dict[str, Any] | DataModel,
        key: str | dict | SearchKey | None = None,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[SearchItem]:
        """Put document.

        Args:
            value:
                Document value.
            key:
                Document key. Generated by the store when not set.
            collection:
                Collection name.

        Returns:
            Document item with the assigned key.
        """
        raise NotImplementedError

    @operation()
    async def aquery(
        self,
        collection: str | None = None,
        limit: int | None = DEFAULT_MAX_RESULTS,
        **kwargs: Any,
    ) -> Response[SearchList]:
        """Query all documents, bounded by limit.

        Args:
            collection:
                Collection name.
            limit:
                Maximum number of documents returned.

        Returns:
            Document list with items.
        """
        raise NotImplementedError

    @operation()
    async def aupdate(
        self,
        where: dict[str, Any] | DataModel,
        set: dict[str, Any] | DataModel,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[MutationResult]:
        """Update all documents matching a filter.

        Args:
            where:
                Field/value filter. Empty filters update nothing.
            set:
                Partial update. Null values are skipped.
            collection:
                Collection name.

        Returns:
            Mutation result.
        """
        raise NotImplementedError

    @operation()
    async def adelete(
        self,
        where: dict[str, Any] | DataModel,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[MutationResult]:
        """Delete all documents matching a filter.

        Args:
            where:
                Field/value filter. Empty filters delete nothing.
            collection:
                Collection name.

        Returns:
            Mutation result.
        """
        raise NotImplementedError

    @operation()
    async def aclose(
        self,
        **kwargs: Any,
    ) -> Response[None]:
        """Close async client.

        Returns:
            None.
        """
        raise NotImplementedError
