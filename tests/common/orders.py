from ordersearch.orders import OrdersService
from ordersearch.orders._config import MAPPINGS_DIR
from ordersearch.storage.search_store import SearchStore


def get_order_payload(email: str = "gila.cohen@example.com") -> dict:
    return {
        "customer": {
            "fullName": "Gila Cohen",
            "fullAddress": "10 Herzl St, Tel Aviv",
            "email": email,
        },
        "products": [
            {"category": "dairy", "name": "milk 3% 1L", "quantity": 2},
            {"category": "bakery", "name": "bread", "quantity": 1},
        ],
        "orderDate": "2025-07-17T12:30:00.000Z",
    }


def get_store(ready: bool = True) -> SearchStore:
    store = SearchStore(
        collection="orders",
        mappings_path=MAPPINGS_DIR,
        __provider__="memory",
    )
    if ready:
        store.__setup__()
    return store


def get_service(ready: bool = True, max_results: int = 1000) -> OrdersService:
    return OrdersService(
        get_store(ready), index_name="orders", max_results=max_results
    )
