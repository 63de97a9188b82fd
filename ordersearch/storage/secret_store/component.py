import logging
from typing import Any

from ...core import Response, operation
from ...core.exceptions import NotFoundError
from .._common import StoreComponent
from ._models import SecretItem, SecretKey

logger = logging.getLogger(__name__)


class SecretStore(StoreComponent):
    _cache: dict[str, str]

    def __init__(self, **kwargs):
        self._cache = dict()
        super().__init__(**kwargs)

    def get_value(self, key: str) -> str | None:
        """Get secret value, cached for the lifetime of the store.

        Args:
            key: Secret name.

        Returns:
            Secret value, or None when the secret
            does not exist or has no value.
        """
        if key in self._cache:
            return self._cache[key]
        try:
            item: SecretItem = self.get(key=key).result
        except NotFoundError:
            logger.warning("Secret [%s] not found", key)
            return None
        return self._cache_value(key, item)

    async def aget_value(self, key: str) -> str | None:
        """Get secret value, cached for the lifetime of the store.

        Args:
            key: Secret name.

        Returns:
            Secret value, or None when the secret
            does not exist or has no value.
        """
        if key in self._cache:
            return self._cache[key]
        try:
            item: SecretItem = (await self.aget(key=key)).result
        except NotFoundError:
            logger.warning("Secret [%s] not found", key)
            return None
        return self._cache_value(key, item)

    def _cache_value(self, key: str, item: SecretItem) -> str | None:
        if not item.value:
            logger.warning("Secret [%s] found but has no value", key)
            return None
        self._cache[key] = item.value
        logger.info("Secret [%s] retrieved", key)
        return item.value

    @operation()
    def get(
        self,
        key: str | dict | SecretKey,
        **kwargs: Any,
    ) -> Response[SecretItem]:
        """Get secret value.

        Args:
            key: Secret key.

        Returns:
            Secret item with value.

        Raises:
            NotFoundError: Key not found.
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
    async def aget(
        self,
        key: str | dict | SecretKey,
        **kwargs: Any,
    ) -> Response[SecretItem]:
        """Get secret value.

        Args:
            key: Secret key.

        Returns:
            Secret item with value.

        Raises:
            NotFoundError: Key not found.
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
