"""
Elasticsearch.
"""

from __future__ import annotations

__all__ = ["Elasticsearch"]

import logging
from typing import Any

from elasticsearch import ApiError, AsyncElasticsearch
from elasticsearch import Elasticsearch as SyncElasticsearch
from elasticsearch import TransportError
from elasticsearch.exceptions import NotFoundError as ESNotFoundError

from ....core import Context, DataModel, Response
from ....core.exceptions import BadRequestError, InternalError
from ..._common import CollectionResult, CollectionStatus, StoreProvider
from .._constants import DEFAULT_MAX_RESULTS
from .._helper import Helper
from .._models import (
    MutationResult,
    SearchItem,
    SearchKey,
    SearchList,
)
from .._query_builder import QueryBuilder
from .._script_builder import ScriptBuilder

logger = logging.getLogger(__name__)

StoreError = (ApiError, TransportError)


class Elasticsearch(StoreProvider):
    hosts: str | list[str] | dict[str, str | int]
    cloud_id: str | None
    api_key: str | list[str] | None
    basic_auth: str | list[str] | None
    bearer_auth: str | None
    headers: dict[str, str] | None
    verify_certs: bool | None
    ca_certs: str | None
    index: str | None
    nparams: dict[str, Any]

    _client: SyncElasticsearch | None
    _aclient: AsyncElasticsearch | None

    def __init__(
        self,
        hosts: str | list[str] | dict[str, str | int],
        cloud_id: str | None = None,
        api_key: str | list[str] | None = None,
        basic_auth: str | list[str] | None = None,
        bearer_auth: str | None = None,
        headers: dict[str, str] | None = None,
        verify_certs: bool | None = None,
        ca_certs: str | None = None,
        index: str | None = None,
        nparams: dict[str, Any] = dict(),
        **kwargs,
    ):
        """Initialize.

        Args:
            hosts:
                Elasticsearch hosts.
            cloud_id:
                Elasticsearch cloud id.
            api_key:
                Elasticsearch api key. Requests are
                unauthenticated when no credential is set.
            basic_auth:
                Elasticsearch basic auth.
            bearer_auth:
                Elasticsearch bearer auth.
            headers:
                Elasticsearch http headers.
            verify_certs:
                Elasticsearch verify certs.
            ca_certs:
                Elasticsearch ca certs.
            index:
                Elasticsearch index mapped to
                search store collection.
            nparams:
                Native parameters to Elasticsearch client.
        """
        self.hosts = hosts
        self.cloud_id = cloud_id
        self.api_key = api_key
        self.basic_auth = basic_auth
        self.bearer_auth = bearer_auth
        self.headers = headers
        self.verify_certs = verify_certs
        self.ca_certs = ca_certs
        self.index = index
        self.nparams = nparams

        self._client = None
        self._aclient = None
        super().__init__(**kwargs)

    @property
    def client(self) -> SyncElasticsearch:
        self._ensure_ready()
        return self._client

    @property
    def aclient(self) -> AsyncElasticsearch:
        self._ensure_ready()
        return self._aclient

    def __setup__(self, context: Context | None = None) -> None:
        with self._ready_lock:
            if self._ready:
                return
            if not self.hosts and not self.cloud_id:
                raise BadRequestError("Elasticsearch hosts must be specified")
            params = self._get_client_params()
            self._client = SyncElasticsearch(**params)
            self._aclient = AsyncElasticsearch(**params)
            self._ready = True
        logger.info("Elasticsearch client initialized")

    async def __asetup__(self, context: Context | None = None) -> None:
        self.__setup__(context=context)

    def _get_client_params(self) -> dict:
        def _add_if_not_none(key, value):
            return {key: value} if value is not None else {}

        def _convert_if_list(value):
            return tuple(value) if isinstance(value, list) else value

        args = {
            **_add_if_not_none("hosts", self.hosts or None),
            **_add_if_not_none("cloud_id", self.cloud_id),
            **_add_if_not_none("api_key", _convert_if_list(self.api_key)),
            **_add_if_not_none(
                "basic_auth", _convert_if_list(self.basic_auth)
            ),
            **_add_if_not_none("bearer_auth", self.bearer_auth),
            **_add_if_not_none("headers", self.headers),
            **_add_if_not_none("verify_certs", self.verify_certs),
            **_add_if_not_none("ca_certs", self.ca_certs),
        }

        if self.nparams is not None:
            args.update(self.nparams)

        return args

    def _get_collection_name(
        self,
        collection_name: str | None,
    ) -> str:
        if collection_name is None:
            collection_name = self.index or self.__component__.collection
        return Helper.require_name(collection_name, "Index name")

    def has_collection(
        self,
        collection: str | None = None,
    ) -> Response[bool]:
        self._ensure_ready()
        index = self._get_collection_name(collection)
        exists = bool(self.client.indices.exists(index=index))
        return Response(result=exists)

    async def ahas_collection(
        self,
        collection: str | None = None,
    ) -> Response[bool]:
        self._ensure_ready()
        index = self._get_collection_name(collection)
        exists = bool(await self.aclient.indices.exists(index=index))
        return Response(result=exists)

    def create_collection(
        self,
        collection: str | None = None,
        schema: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Response[CollectionResult]:
        self._ensure_ready()
        args = OperationConverter.convert_create_collection(
            index=self._get_collection_name(collection), schema=schema
        )
        self.client.indices.create(**args)
        result = CollectionResult(status=CollectionStatus.CREATED)
        return Response(result=result)

    async def acreate_collection(
        self,
        collection: str | None = None,
        schema: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Response[CollectionResult]:
        self._ensure_ready()
        args = OperationConverter.convert_create_collection(
            index=self._get_collection_name(collection), schema=schema
        )
        await self.aclient.indices.create(**args)
        result = CollectionResult(status=CollectionStatus.CREATED)
        return Response(result=result)

    def get(
        self,
        key: str | dict | SearchKey,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[SearchItem | None]:
        self._ensure_ready()
        args = OperationConverter.convert_get(
            index=self._get_collection_name(collection), key=key
        )
        try:
            resp = self.client.get(**args)
        except ESNotFoundError:
            logger.warning(
                "Document [%s] not found in index [%s] (status 404)",
                args["id"],
                args["index"],
            )
            return Response(result=None)
        except StoreError as e:
            raise _internal_error(
                f"Failed to fetch item with ID [{args['id']}] "
                f"from index [{args['index']}]",
                e,
            ) from e
        item = ResultConverter.convert_get(response=resp)
        if item is None:
            logger.warning(
                "Document [%s] not found in index [%s]",
                args["id"],
                args["index"],
            )
        return Response(result=item, native=dict(result=resp))

    async def aget(
        self,
        key: str | dict | SearchKey,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[SearchItem | None]:
        self._ensure_ready()
        args = OperationConverter.convert_get(
            index=self._get_collection_name(collection), key=key
        )
        try:
            resp = await self.aclient.get(**args)
        except ESNotFoundError:
            logger.warning(
                "Document [%s] not found in index [%s] (status 404)",
                args["id"],
                args["index"],
            )
            return Response(result=None)
        except StoreError as e:
            raise _internal_error(
                f"Failed to fetch item with ID [{args['id']}] "
                f"from index [{args['index']}]",
                e,
            ) from e
        item = ResultConverter.convert_get(response=resp)
        if item is None:
            logger.warning(
                "Document [%s] not found in index [%s]",
                args["id"],
                args["index"],
            )
        return Response(result=item, native=dict(result=resp))

    def put(
        self,
        value: dict[str, Any] | DataModel,
        key: str | dict | SearchKey | None = None,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[SearchItem]:
        self._ensure_ready()
        args = OperationConverter.convert_put(
            index=self._get_collection_name(collection), value=value, key=key
        )
        resp = self.client.index(**args)
        item = ResultConverter.convert_put(response=resp)
        logger.info("Document [%s] indexed", item.key.id)
        return Response(result=item, native=dict(result=resp))

    async def aput(
        self,
        value: dict[str, Any] | DataModel,
        key: str | dict | SearchKey | None = None,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[SearchItem]:
        self._ensure_ready()
        args = OperationConverter.convert_put(
            index=self._get_collection_name(collection), value=value, key=key
        )
        resp = await self.aclient.index(**args)
        item = ResultConverter.convert_put(response=resp)
        logger.info("Document [%s] indexed", item.key.id)
        return Response(result=item, native=dict(result=resp))

    def query(
        self,
        collection: str | None = None,
        limit: int | None = None,
        **kwargs: Any,
    ) -> Response[SearchList]:
        self._ensure_ready()
        args = OperationConverter.convert_query(
            index=self._get_collection_name(collection), limit=limit
        )
        try:
            resp = self.client.search(**args)
        except StoreError as e:
            raise _internal_error(
                f"Failed to fetch items from index [{args['index']}]", e
            ) from e
        result = ResultConverter.convert_query(response=resp)
        logger.info(
            "Fetched %s items from index [%s]",
            len(result.items),
            args["index"],
        )
        return Response(result=result, native=dict(result=resp))

    async def aquery(
        self,
        collection: str | None = None,
        limit: int | None = None,
        **kwargs: Any,
    ) -> Response[SearchList]:
        self._ensure_ready()
        args = OperationConverter.convert_query(
            index=self._get_collection_name(collection), limit=limit
        )
        try:
            resp = await self.aclient.search(**args)
        except StoreError as e:
            raise _internal_error(
                f"Failed to fetch items from index [{args['index']}]", e
            ) from e
        result = ResultConverter.convert_query(response=resp)
        logger.info(
            "Fetched %s items from index [%s]",
            len(result.items),
            args["index"],
        )
        return Response(result=result, native=dict(result=resp))

    def update(
        self,
        where: dict[str, Any] | DataModel,
        set: dict[str, Any] | DataModel,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[MutationResult]:
        self._ensure_ready()
        args = OperationConverter.convert_update(
            index=self._get_collection_name(collection), where=where, set=set
        )
        if args is None:
            return Response(result=MutationResult.no_filter())
        try:
            resp = self.client.update_by_query(**args)
        except StoreError as e:
            raise _internal_error(
                f"Failed to update items in index [{args['index']}]", e
            ) from e
        result = ResultConverter.convert_mutation(resp, "updated")
        logger.info(
            "Updated %s items in index [%s]", result.count, args["index"]
        )
        return Response(result=result, native=dict(result=resp))

    async def aupdate(
        self,
        where: dict[str, Any] | DataModel,
        set: dict[str, Any] | DataModel,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[MutationResult]:
        self._ensure_ready()
        args = OperationConverter.convert_update(
            index=self._get_collection_name(collection), where=where, set=set
        )
        if args is None:
            return Response(result=MutationResult.no_filter())
        try:
            resp = await self.aclient.update_by_query(**args)
        except StoreError as e:
            raise _internal_error(
                f"Failed to update items in index [{args['index']}]", e
            ) from e
        result = ResultConverter.convert_mutation(resp, "updated")
        logger.info(
            "Updated %s items in index [%s]", result.count, args["index"]
        )
        return Response(result=result, native=dict(result=resp))

    def delete(
        self,
        where: dict[str, Any] | DataModel,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[MutationResult]:
        self._ensure_ready()
        args = OperationConverter.convert_delete(
            index=self._get_collection_name(collection), where=where
        )
        if args is None:
            return Response(result=MutationResult.no_filter())
        try:
            resp = self.client.delete_by_query(**args)
        except StoreError as e:
            raise _internal_error(
                f"Failed to delete items from index [{args['index']}]", e
            ) from e
        result = ResultConverter.convert_mutation(resp, "deleted")
        logger.info(
            "Deleted %s items from index [%s]", result.count, args["index"]
        )
        return Response(result=result, native=dict(result=resp))

    async def adelete(
        self,
        where: dict[str, Any] | DataModel,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[MutationResult]:
        self._ensure_ready()
        args = OperationConverter.convert_delete(
            index=self._get_collection_name(collection), where=where
        )
        if args is None:
            return Response(result=MutationResult.no_filter())
        try:
            resp = await self.aclient.delete_by_query(**args)
        except StoreError as e:
            raise _internal_error(
                f"Failed to delete items from index [{args['index']}]", e
            ) from e
        result = ResultConverter.convert_mutation(resp, "deleted")
        logger.info(
            "Deleted %s items from index [%s]", result.count, args["index"]
        )
        return Response(result=result, native=dict(result=resp))

    def close(
        self,
        **kwargs: Any,
    ) -> Response[None]:
        if self._client is not None:
            self._client.close()
        return Response(result=None)

    async def aclose(
        self,
        **kwargs: Any,
    ) -> Response[None]:
        if self._aclient is not None:
            await self._aclient.close()
        return Response(result=None)


class OperationConverter:
    @staticmethod
    def convert_create_collection(
        index: str,
        schema: dict[str, Any] | None,
    ) -> dict:
        args: dict[str, Any] = {"index": index}
        if not schema:
            return args
        if "mappings" in schema or "settings" in schema:
            if "mappings" in schema:
                args["mappings"] = schema["mappings"]
            if "settings" in schema:
                args["settings"] = schema["settings"]
        else:
            args["mappings"] = schema
        return args

    @staticmethod
    def convert_get(index: str, key: str | dict | SearchKey) -> dict:
        if isinstance(key, SearchKey):
            key = key.id
        elif isinstance(key, dict):
            key = key.get("id")
        id = Helper.require_name(key, "Document id")
        return {"index": index, "id": id}

    @staticmethod
    def convert_put(
        index: str,
        value: dict[str, Any] | DataModel,
        key: str | dict | SearchKey | None = None,
    ) -> dict:
        args: dict[str, Any] = {
            "index": index,
            "document": Helper.get_value(value),
        }
        if isinstance(key, SearchKey):
            key = key.id
        elif isinstance(key, dict):
            key = key.get("id")
        if key:
            args["id"] = key
        return args

    @staticmethod
    def convert_query(index: str, limit: int | None) -> dict:
        if limit is None:
            limit = DEFAULT_MAX_RESULTS
        if limit < 0:
            raise BadRequestError("Limit must not be negative")
        return {
            "index": index,
            "query": QueryBuilder.match_all(),
            "size": limit,
        }

    @staticmethod
    def convert_update(
        index: str,
        where: dict[str, Any] | DataModel,
        set: dict[str, Any] | DataModel,
    ) -> dict | None:
        if not set:
            raise BadRequestError("Update cannot be empty or null")
        query = QueryBuilder.build(where)
        if query is None:
            logger.warning("No filter supplied, nothing is updated")
            return None
        script = ScriptBuilder.build(set)
        return {
            "index": index,
            "query": query,
            "script": {
                "source": script.source,
                "lang": "painless",
                "params": script.params,
            },
            "refresh": True,
        }

    @staticmethod
    def convert_delete(
        index: str,
        where: dict[str, Any] | DataModel,
    ) -> dict | None:
        query = QueryBuilder.build(where)
        if query is None:
            logger.warning("No filter supplied, nothing is deleted")
            return None
        return {"index": index, "query": query, "refresh": True}


class ResultConverter:
    @staticmethod
    def convert_get(response: Any) -> SearchItem | None:
        if not response.get("found", False):
            return None
        return SearchItem(
            key=SearchKey(id=response["_id"]),
            value=response.get("_source") or {},
        )

    @staticmethod
    def convert_put(response: Any) -> SearchItem:
        return SearchItem(key=SearchKey(id=response["_id"]))

    @staticmethod
    def convert_query(response: Any) -> SearchList:
        hits = response.get("hits", {}).get("hits", [])
        items: list[SearchItem] = []
        for hit in hits:
            items.append(
                SearchItem(
                    key=SearchKey(id=hit.get("_id") or ""),
                    value=hit.get("_source", {}),
                )
            )
        return SearchList(items=items)

    @staticmethod
    def convert_mutation(response: Any, field: str) -> MutationResult:
        return MutationResult.completed(response.get(field))


def _internal_error(message: str, error: Exception) -> InternalError:
    text = _error_text(error)
    logger.error("%s: %s", message, text)
    return InternalError(f"{message}: {text}")


def _error_text(error: Exception) -> str:
    # str() of a transport error is only its class label
    text = str(getattr(error, "message", None) or error)
    if isinstance(error, ApiError) and error.body:
        text = f"{text} {error.body}"
    return text
