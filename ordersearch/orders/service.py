import logging

from ..storage.search_store import (
    NO_RESULT,
    MutationStatus,
    SearchStore,
    TypedItem,
)
from ._models import Order, OrderDocument, OrderFilter, OrderUpdate

logger = logging.getLogger(__name__)


class OrdersService:
    """Order repository over a search store."""

    store: SearchStore
    index_name: str
    mapping_file: str
    max_results: int

    def __init__(
        self,
        store: SearchStore,
        index_name: str = "orders",
        max_results: int = 1000,
        mapping_file: str = "orders.mapping.json",
    ):
        self.store = store
        self.index_name = index_name
        self.max_results = max_results
        self.mapping_file = mapping_file

    async def ainit(self) -> None:
        logger.info("Ensuring index [%s]", self.index_name)
        await self.store.aensure_collection(
            self.index_name, self.mapping_file
        )

    async def create_order(self, order: OrderDocument) -> Order:
        item = (
            await self.store.aput(value=order, collection=self.index_name)
        ).result
        logger.info("Order indexed with id [%s]", item.key.id)
        return Order(id=item.key.id, **order.model_dump())

    async def get_all_orders(self) -> list[Order]:
        items = await self.store.aget_items(
            collection=self.index_name,
            shape=OrderDocument,
            limit=self.max_results,
        )
        return [_to_order(item) for item in items]

    async def find_order_by_id(self, id: str) -> Order | None:
        item = await self.store.aget_item(
            id, collection=self.index_name, shape=OrderDocument
        )
        if item is None:
            return None
        return _to_order(item)

    async def update_order(
        self, filter: OrderFilter, update: OrderUpdate
    ) -> int:
        """Update matching orders.

        Returns:
            Number of updated orders, or ``NO_RESULT``
            when nothing was attempted or the update failed.
        """
        try:
            result = (
                await self.store.aupdate(
                    where=filter, set=update, collection=self.index_name
                )
            ).result
        except Exception as e:
            logger.error("Order update failed: %s", e)
            return NO_RESULT
        if result.status != MutationStatus.COMPLETED:
            logger.warning(
                "Order update was not completed: %s", result.status
            )
        return result.as_count()

    async def delete_order(self, filter: OrderFilter) -> int:
        """Delete matching orders.

        Returns:
            Number of deleted orders, or ``NO_RESULT``
            when nothing was attempted or the delete failed.
        """
        try:
            result = (
                await self.store.adelete(
                    where=filter, collection=self.index_name
                )
            ).result
        except Exception as e:
            logger.error("Order delete failed: %s", e)
            return NO_RESULT
        if result.status != MutationStatus.COMPLETED:
            logger.warning(
                "Order delete was not completed: %s", result.status
            )
        return result.as_count()


def _to_order(item: TypedItem) -> Order:
    return Order(id=item.id, **item.value.model_dump())
