"""
Secret Store on Azure Key Vault.
"""

__all__ = ["AzureKeyVault"]

import logging
from typing import Any

from azure.core.exceptions import ResourceNotFoundError

from ...._common.azure_provider import AzureProvider
from ....core import Context, Response
from ....core.exceptions import BadRequestError, NotFoundError
from ..._common import StoreProvider
from .._models import SecretItem, SecretKey

logger = logging.getLogger(__name__)


class AzureKeyVault(AzureProvider, StoreProvider):
    vault_url: str
    nparams: dict[str, Any]

    _client: Any
    _aclient: Any

    def __init__(
        self,
        vault_url: str,
        credential_type: str | None = "default",
        tenant_id: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        certificate_path: str | None = None,
        nparams: dict[str, Any] = dict(),
        **kwargs,
    ):
        """Initialize.

        Args:
            vault_url:
                Azure Key Vault url.
            credential_type:
                Azure credential type.
                Credential types are default, client_secret, certificate,
                azure_cli, managed_identity.
            tenant_id:
                Azure tenant id for client_secret credential type.
            client_id:
                Azure client id for client_secret credential type.
            client_secret:
                Azure client secret for client_secret credential type.
            certificate_path:
                Certificate path for certificate credential type.
            nparams:
                Native parameters to Azure Key Vault client.
        """
        self.vault_url = vault_url
        self.nparams = nparams

        self._client = None
        self._aclient = None
        AzureProvider.__init__(
            self,
            credential_type=credential_type,
            tenant_id=tenant_id,
            client_id=client_id,
            client_secret=client_secret,
            certificate_path=certificate_path,
            **kwargs,
        )

    def __setup__(self, context: Context | None = None) -> None:
        if self._client is not None:
            return
        if not self.vault_url:
            raise BadRequestError("Key Vault url must be specified")

        from azure.keyvault.secrets import SecretClient

        self._client = SecretClient(
            vault_url=self.vault_url,
            credential=self._get_credential(),
            **self.nparams,
        )
        logger.info("Key Vault client initialized for %s", self.vault_url)

    async def __asetup__(self, context: Context | None = None) -> None:
        if self._aclient is not None:
            return
        if not self.vault_url:
            raise BadRequestError("Key Vault url must be specified")

        from azure.keyvault.secrets.aio import SecretClient

        self._aclient = SecretClient(
            vault_url=self.vault_url,
            credential=self._aget_credential(),
            **self.nparams,
        )
        logger.info("Key Vault client initialized for %s", self.vault_url)

    def get(
        self,
        key: str | dict | SecretKey,
        **kwargs: Any,
    ) -> Response[SecretItem]:
        self.__setup__()
        name = _get_name(key)
        try:
            secret = self._client.get_secret(name)
        except ResourceNotFoundError as e:
            raise NotFoundError(f"Secret [{name}] not found") from e
        return Response(
            result=_convert_secret(name, secret),
            native=dict(result=secret),
        )

    async def aget(
        self,
        key: str | dict | SecretKey,
        **kwargs: Any,
    ) -> Response[SecretItem]:
        await self.__asetup__()
        name = _get_name(key)
        try:
            secret = await self._aclient.get_secret(name)
        except ResourceNotFoundError as e:
            raise NotFoundError(f"Secret [{name}] not found") from e
        return Response(
            result=_convert_secret(name, secret),
            native=dict(result=secret),
        )

    def close(self, **kwargs: Any) -> Response[None]:
        if self._client is not None:
            self._client.close()
        return Response(result=None)

    async def aclose(self, **kwargs: Any) -> Response[None]:
        if self._aclient is not None:
            await self._aclient.close()
        if self._acredential is not None:
            await self._acredential.close()
        return Response(result=None)


def _get_name(key: str | dict | SecretKey) -> str:
    if isinstance(key, SecretKey):
        return key.id
    if isinstance(key, dict):
        return key["id"]
    return key


def _convert_secret(name: str, secret: Any) -> SecretItem:
    return SecretItem(
        key=SecretKey(id=name, version=secret.properties.version),
        value=secret.value,
    )
