import pytest
from common.fake_elasticsearch import (
    get_fake,
    not_found_error,
    patch_clients,
    set_response,
)
from common.sync_and_async_client import SearchStoreSyncAndAsyncClient
from elasticsearch import ConnectionError as ESConnectionError

from ordersearch.core import DataModel
from ordersearch.orders._config import MAPPINGS_DIR
from ordersearch.storage.search_store import (
    NO_RESULT,
    BadRequestError,
    CollectionStatus,
    InternalError,
    MutationStatus,
    NotReadyError,
    SearchStore,
)


class Product(DataModel):
    name: str
    quantity: int


def get_client(
    monkeypatch, async_call: bool, hosts: str = "http://localhost:9200"
) -> SearchStoreSyncAndAsyncClient:
    patch_clients(monkeypatch)
    store = SearchStore(
        collection="orders",
        mappings_path=MAPPINGS_DIR,
        __provider__=dict(
            type="elasticsearch",
            parameters={"hosts": hosts, "api_key": "secret-key"},
        ),
    )
    return SearchStoreSyncAndAsyncClient(store, async_call)


async def get_ready_client(monkeypatch, async_call: bool):
    client = get_client(monkeypatch, async_call)
    await client.__setup__()
    return client, get_fake(client.client, async_call)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_not_ready(monkeypatch, async_call: bool):
    client = get_client(monkeypatch, async_call)
    with pytest.raises(NotReadyError):
        await client.has_collection(collection="orders")
    with pytest.raises(NotReadyError):
        await client.put(value={"name": "milk"})
    with pytest.raises(NotReadyError):
        await client.get(key="abc")
    with pytest.raises(NotReadyError):
        await client.get_items()
    with pytest.raises(NotReadyError):
        await client.update(where={"id": "abc"}, set={"a": 1})
    with pytest.raises(NotReadyError):
        await client.delete(where={"id": "abc"})


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_setup(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    assert client.client.__provider__.ready
    assert fake.params == {
        "hosts": "http://localhost:9200",
        "api_key": "secret-key",
    }
    # a second setup keeps the same clients
    await client.__setup__()
    assert get_fake(client.client, async_call) is fake


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_setup_without_hosts(monkeypatch, async_call: bool):
    client = get_client(monkeypatch, async_call, hosts="")
    with pytest.raises(BadRequestError):
        await client.__setup__()
    assert not client.client.__provider__.ready


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_ensure_collection_creates_index(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    result = await client.ensure_collection(
        collection="orders", schema_source="orders.mapping.json"
    )
    assert result.status == CollectionStatus.CREATED
    assert fake.call_names() == ["indices.exists", "indices.create"]
    name, args = fake.calls[1]
    assert args["index"] == "orders"
    assert "customer" in args["mappings"]["properties"]
    assert "settings" not in args


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_ensure_collection_exists(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    set_response(client.client, "indices.exists", True)
    result = await client.ensure_collection(
        collection="orders", schema_source="orders.mapping.json"
    )
    assert result.status == CollectionStatus.EXISTS
    assert fake.call_names() == ["indices.exists"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_ensure_collection_errors(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    with pytest.raises(BadRequestError):
        await client.ensure_collection(
            collection=" ", schema_source="orders.mapping.json"
        )
    with pytest.raises(BadRequestError):
        await client.ensure_collection(collection="orders", schema_source="")
    error = ESConnectionError("connection refused")
    set_response(client.client, "indices.exists", error)
    with pytest.raises(ESConnectionError):
        await client.ensure_collection(
            collection="orders", schema_source="orders.mapping.json"
        )
    set_response(client.client, "indices.exists", False)
    set_response(client.client, "indices.create", error)
    with pytest.raises(ESConnectionError):
        await client.ensure_collection(
            collection="orders", schema_source="orders.mapping.json"
        )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_put(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    item = (
        await client.put(value=Product(name="milk", quantity=2))
    ).result
    assert item.key.id == "generated-1"
    assert fake.calls == [
        (
            "index",
            {"index": "orders", "document": {"name": "milk", "quantity": 2}},
        )
    ]

    await client.put(value={"name": "tea"}, key="p1", collection="products")
    assert fake.calls[1] == (
        "index",
        {"index": "products", "document": {"name": "tea"}, "id": "p1"},
    )

    await client.put(value={"name": "tea"}, key="")
    assert fake.calls[2] == (
        "index",
        {"index": "orders", "document": {"name": "tea"}},
    )

    set_response(client.client, "index", ESConnectionError("down"))
    with pytest.raises(ESConnectionError):
        await client.put(value={"name": "tea"})


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_get(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    set_response(
        client.client,
        "get",
        {
            "found": True,
            "_id": "abc",
            "_source": {"name": "milk", "quantity": 2},
        },
    )
    item = await client.get_item(id="abc", shape=Product)
    assert item.id == "abc"
    assert item.value == Product(name="milk", quantity=2)
    assert fake.calls == [("get", {"index": "orders", "id": "abc"})]

    raw = await client.get_item(id="abc")
    assert raw.value == {"name": "milk", "quantity": 2}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
@pytest.mark.parametrize(
    "response",
    [{"found": False, "_id": "abc"}, not_found_error()],
)
async def test_get_missing(monkeypatch, async_call: bool, response):
    client, fake = await get_ready_client(monkeypatch, async_call)
    set_response(client.client, "get", response)
    assert await client.get_item(id="abc", shape=Product) is None
    assert (await client.get(key="abc")).result is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_get_errors(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    with pytest.raises(BadRequestError):
        await client.get_item(id="  ")
    with pytest.raises(BadRequestError):
        await client.get_item(id="abc", collection=" ")
    assert fake.calls == []

    error = ESConnectionError("connection refused")
    set_response(client.client, "get", error)
    with pytest.raises(InternalError) as e:
        await client.get_item(id="abc")
    assert "connection refused" in str(e.value)
    assert e.value.__cause__ is error


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_get_items(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    set_response(
        client.client,
        "search",
        {
            "hits": {
                "hits": [
                    {"_id": "1", "_source": {"name": "a", "quantity": 1}},
                    {"_id": "2", "_source": {"name": "b", "quantity": 2}},
                ]
            }
        },
    )
    items = await client.get_items(shape=Product, limit=2)
    assert [item.id for item in items] == ["1", "2"]
    assert items[1].value == Product(name="b", quantity=2)
    assert fake.calls == [
        (
            "search",
            {"index": "orders", "query": {"match_all": {}}, "size": 2},
        )
    ]

    await client.get_items()
    assert fake.calls[1][1]["size"] == 1000

    await client.query(limit=None)
    assert fake.calls[2] == (
        "search",
        {"index": "orders", "query": {"match_all": {}}, "size": 1000},
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_get_items_errors(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    with pytest.raises(BadRequestError):
        await client.get_items(collection="   ")
    set_response(client.client, "search", ESConnectionError("timed out"))
    with pytest.raises(InternalError) as e:
        await client.get_items()
    assert "timed out" in str(e.value)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_update(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    set_response(client.client, "update_by_query", {"updated": 1})
    result = (
        await client.update(
            where={"id": "abc"}, set={"customer": {"email": "x@y.com"}}
        )
    ).result
    assert result.status == MutationStatus.COMPLETED
    assert result.as_count() == 1

    assert fake.call_names() == ["update_by_query"]
    args = fake.calls[0][1]
    assert args["index"] == "orders"
    assert args["query"] == {"ids": {"values": ["abc"]}}
    assert args["refresh"] is True
    assert args["script"]["lang"] == "painless"
    assert args["script"]["params"] == {"customer_email": "x@y.com"}
    assert "params['customer_email']" in args["script"]["source"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_update_outcomes(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    result = (await client.update(where={}, set={"a": 1})).result
    assert result.status == MutationStatus.NO_FILTER
    assert result.as_count() == NO_RESULT
    assert fake.calls == []

    set_response(client.client, "update_by_query", {"updated": 0})
    result = (await client.update(where={"a": 2}, set={"a": 1})).result
    assert result.status == MutationStatus.COMPLETED
    assert result.as_count() == 0

    set_response(client.client, "update_by_query", {"took": 3})
    result = (await client.update(where={"a": 2}, set={"a": 1})).result
    assert result.status == MutationStatus.UNKNOWN
    assert result.as_count() == NO_RESULT


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_update_errors(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    with pytest.raises(BadRequestError):
        await client.update(where={"id": "abc"}, set={})
    with pytest.raises(BadRequestError):
        await client.update(where={"id": "abc"}, set={"a": None})
    with pytest.raises(BadRequestError):
        await client.update(where={"a": {"b": 1}}, set={"a": 1})
    with pytest.raises(BadRequestError):
        await client.update(where={"id": "abc"}, set={"a": 1}, collection="")
    assert fake.calls == []

    error = ESConnectionError("connection refused")
    set_response(client.client, "update_by_query", error)
    with pytest.raises(InternalError) as e:
        await client.update(where={"id": "abc"}, set={"a": 1})
    assert "connection refused" in str(e.value)
    assert e.value.__cause__ is error


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_delete(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    result = (await client.delete(where={})).result
    assert result.status == MutationStatus.NO_FILTER
    assert fake.calls == []

    set_response(client.client, "delete_by_query", {"deleted": 3})
    result = (
        await client.delete(
            where={"status": "new", "customer.email": "x@y.com"}
        )
    ).result
    assert result.as_count() == 3
    assert fake.calls == [
        (
            "delete_by_query",
            {
                "index": "orders",
                "query": {
                    "bool": {
                        "must": [
                            {"term": {"status": "new"}},
                            {"term": {"customer.email": "x@y.com"}},
                        ]
                    }
                },
                "refresh": True,
            },
        )
    ]

    set_response(client.client, "delete_by_query", ESConnectionError("down"))
    with pytest.raises(InternalError):
        await client.delete(where={"id": "abc"})

    set_response(client.client, "delete_by_query", not_found_error())
    with pytest.raises(InternalError) as e:
        await client.delete(where={"id": "abc"})
    assert "not_found" in str(e.value)
    assert "'found': False" in str(e.value)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_close(monkeypatch, async_call: bool):
    client, fake = await get_ready_client(monkeypatch, async_call)
    await client.close()
    assert fake.closed
