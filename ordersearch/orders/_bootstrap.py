from __future__ import annotations

import asyncio
import logging
import weakref

from ..core.exceptions import InitializationError
from ..storage.search_store import SearchStore
from ..storage.secret_store import SecretStore
from ._config import Settings

logger = logging.getLogger(__name__)

_locks: weakref.WeakKeyDictionary[
    asyncio.AbstractEventLoop, asyncio.Lock
] = weakref.WeakKeyDictionary()


def _get_lock() -> asyncio.Lock:
    # an asyncio.Lock is bound to the loop it is first contended on
    loop = asyncio.get_running_loop()
    lock = _locks.get(loop)
    if lock is None:
        lock = _locks[loop] = asyncio.Lock()
    return lock


async def ainit_search_store(
    settings: Settings,
    secrets: SecretStore,
) -> SearchStore:
    """Resolve the connection secrets and return a ready search store.

    The orders index is created from the configured mapping
    if it does not exist yet.

    Raises:
        InitializationError:
            Endpoint or API key secret is missing.
    """
    async with _get_lock():
        url = await secrets.aget_value(settings.elastic_url_secret)
        api_key = await secrets.aget_value(settings.elastic_api_key_secret)
        missing = [
            name
            for name, value in (
                (settings.elastic_url_secret, url),
                (settings.elastic_api_key_secret, api_key),
            )
            if not value or not value.strip()
        ]
        if missing:
            message = (
                f"Secrets [{', '.join(missing)}] are missing or empty, "
                "search store cannot be initialized"
            )
            logger.error(message)
            raise InitializationError(message)

        store = SearchStore(
            collection=settings.index_name,
            mappings_path=settings.mappings_path,
            __provider__={
                "type": "elasticsearch",
                "parameters": {"hosts": url, "api_key": api_key},
            },
        )
        await store.__asetup__()
        logger.info("Search store connected")
        await store.aensure_collection(
            settings.index_name, settings.mapping_file
        )
        return store
