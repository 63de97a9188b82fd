from typing import Any

from ..core import Provider
from ..core.exceptions import BadRequestError


class AzureProvider(Provider):
    credential_type: str | None
    tenant_id: str | None
    client_id: str | None
    client_secret: str | None
    certificate_path: str | None

    _credential: Any
    _acredential: Any

    def __init__(
        self,
        credential_type: str | None = "default",
        tenant_id: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        certificate_path: str | None = None,
        **kwargs,
    ):
        self.credential_type = credential_type
        self.tenant_id = tenant_id
        self.client_id = client_id
        self.client_secret = client_secret
        self.certificate_path = certificate_path
        self._credential = None
        self._acredential = None
        super().__init__(**kwargs)

    def _get_credential(self):
        if self._credential:
            return self._credential
        from azure import identity

        self._credential = self._create_credential(identity)
        return self._credential

    def _aget_credential(self):
        if self._acredential:
            return self._acredential
        from azure.identity import aio

        self._acredential = self._create_credential(aio)
        return self._acredential

    def _create_credential(self, module: Any) -> Any:
        credential_type = self.credential_type or "default"
        if credential_type == "default":
            return module.DefaultAzureCredential()
        elif credential_type == "client_secret":
            return module.ClientSecretCredential(
                tenant_id=self.tenant_id,
                client_id=self.client_id,
                client_secret=self.client_secret,
            )
        elif credential_type == "certificate":
            return module.CertificateCredential(
                tenant_id=self.tenant_id,
                client_id=self.client_id,
                certificate_path=self.certificate_path,
            )
        elif credential_type == "azure_cli":
            return module.AzureCliCredential()
        elif credential_type == "managed_identity":
            return module.ManagedIdentityCredential(client_id=self.client_id)
        raise BadRequestError(
            f"Credential type {credential_type} is not supported"
        )
