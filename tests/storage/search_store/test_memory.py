import pytest
from common.sync_and_async_client import SearchStoreSyncAndAsyncClient

from ordersearch.core import DataModel
from ordersearch.storage.search_store import (
    DEFAULT_MAX_RESULTS,
    CollectionStatus,
    MutationStatus,
    NotReadyError,
    SearchStore,
)


class Product(DataModel):
    name: str
    quantity: int


def get_client(async_call: bool) -> SearchStoreSyncAndAsyncClient:
    store = SearchStore(collection="test", __provider__="memory")
    return SearchStoreSyncAndAsyncClient(store, async_call)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_not_ready(async_call: bool):
    client = get_client(async_call)
    with pytest.raises(NotReadyError):
        await client.put(value={"name": "milk"})
    with pytest.raises(NotReadyError):
        await client.get(key="any")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_collection(async_call: bool):
    client = get_client(async_call)
    await client.__setup__()
    assert not (await client.has_collection(collection="test")).result
    result = (await client.create_collection(collection="test")).result
    assert result.status == CollectionStatus.CREATED
    assert (await client.has_collection(collection="test")).result


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_put_get(async_call: bool):
    client = get_client(async_call)
    await client.__setup__()
    document = {"name": "milk", "quantity": 2, "tags": ["dairy"]}
    item = (await client.put(value=document)).result
    assert item.key.id

    response = await client.get(key=item.key.id)
    assert response.result.value == document

    typed = await client.get_item(id=item.key.id, shape=Product)
    assert typed.id == item.key.id
    assert typed.value == Product(name="milk", quantity=2)

    assert client.client[item.key.id] == document

    assert (await client.get(key="missing")).result is None
    assert await client.get_item(id="missing") is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_put_with_key(async_call: bool):
    client = get_client(async_call)
    await client.__setup__()
    item = (await client.put(value={"name": "tea"}, key="p1")).result
    assert item.key.id == "p1"
    typed = await client.get_item(id="p1", shape=lambda d: d["name"])
    assert typed.value == "tea"

    item = (await client.put(value={"name": "milk"}, key="")).result
    assert item.key.id
    assert (await client.get(key=item.key.id)).result.value == {
        "name": "milk"
    }
    items = await client.get_items()
    assert "" not in [item.id for item in items]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
@pytest.mark.parametrize("limit", [0, 1, 3, 10])
async def test_get_items_limit(async_call: bool, limit: int):
    client = get_client(async_call)
    await client.__setup__()
    for i in range(5):
        await client.put(value={"name": f"p{i}", "quantity": i})
    items = await client.get_items(shape=Product, limit=limit)
    assert len(items) == min(limit, 5)
    assert all(isinstance(item.value, Product) for item in items)


def test_query_default_limit():
    store = SearchStore(collection="test", __provider__="memory")
    store.__setup__()
    for i in range(DEFAULT_MAX_RESULTS + 1):
        store.put(value={"name": f"p{i}"})
    assert len(store.query(limit=None).result.items) == DEFAULT_MAX_RESULTS
    assert len(store.query().result.items) == DEFAULT_MAX_RESULTS


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "async_call",
    [False, True],
)
async def test_update_delete(async_call: bool):
    client = get_client(async_call)
    await client.__setup__()
    await client.put(
        value={"customer": {"email": "a@x.com"}, "status": "new"}, key="o1"
    )
    await client.put(
        value={"customer": {"email": "b@x.com"}, "status": "new"}, key="o2"
    )
    await client.put(value={"status": "old"}, key="o3")

    result = (
        await client.update(
            where={"status": "new"}, set={"customer": {"name": "N"}}
        )
    ).result
    assert result.status == MutationStatus.COMPLETED
    assert result.count == 2
    assert (await client.get(key="o1")).result.value == {
        "customer": {"email": "a@x.com", "name": "N"},
        "status": "new",
    }

    result = (
        await client.update(
            where={"id": "o3"}, set={"customer": {"email": "c@x.com"}}
        )
    ).result
    assert result.count == 1
    assert (await client.get(key="o3")).result.value == {
        "status": "old",
        "customer": {"email": "c@x.com"},
    }

    result = (
        await client.update(where={"status": "none"}, set={"status": "x"})
    ).result
    assert result.status == MutationStatus.COMPLETED
    assert result.count == 0

    result = (await client.update(where={}, set={"status": "x"})).result
    assert result.status == MutationStatus.NO_FILTER
    assert result.as_count() == -1

    result = (await client.delete(where={})).result
    assert result.status == MutationStatus.NO_FILTER

    result = (
        await client.delete(where={"customer.email": "b@x.com"})
    ).result
    assert result.count == 1
    assert (await client.get(key="o2")).result is None
    assert len(await client.get_items()) == 2
