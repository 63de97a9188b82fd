from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .._common import CollectionResult, CollectionStatus
from ._helper import Helper

if TYPE_CHECKING:
    from .component import SearchStore

logger = logging.getLogger(__name__)


class IndexManager:
    """Create-if-absent for indexes. Store errors are not caught."""

    store: SearchStore

    def __init__(self, store: SearchStore):
        self.store = store

    def ensure(self, name: str, schema: dict[str, Any]) -> CollectionResult:
        Helper.require_name(name, "Index name")
        if self.store.has_collection(collection=name).result:
            logger.info("Index [%s] already exists", name)
            return CollectionResult(status=CollectionStatus.EXISTS)
        logger.info("Index [%s] does not exist, creating it", name)
        self.store.create_collection(collection=name, schema=schema)
        logger.info("Index [%s] created", name)
        return CollectionResult(status=CollectionStatus.CREATED)

    async def aensure(
        self, name: str, schema: dict[str, Any]
    ) -> CollectionResult:
        Helper.require_name(name, "Index name")
        if (await self.store.ahas_collection(collection=name)).result:
            logger.info("Index [%s] already exists", name)
            return CollectionResult(status=CollectionStatus.EXISTS)
        logger.info("Index [%s] does not exist, creating it", name)
        await self.store.acreate_collection(collection=name, schema=schema)
        logger.info("Index [%s] created", name)
        return CollectionResult(status=CollectionStatus.CREATED)
