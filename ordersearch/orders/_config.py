from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from ..core import warn
from ..storage.search_store import DEFAULT_MAX_RESULTS

logger = logging.getLogger(__name__)

MAPPINGS_DIR = Path(__file__).parent / "mappings"


@dataclass
class Settings:
    """Service settings, read from the environment."""

    index_name: str = "orders"
    max_results: int = DEFAULT_MAX_RESULTS
    mapping_file: str = "orders.mapping.json"
    mappings_path: str = str(MAPPINGS_DIR)
    secret_provider: str = "env"
    key_vault_uri: str | None = None
    secrets_file: str = ".env"
    elastic_url_secret: str = "OrderService-Elastic-Url"
    elastic_api_key_secret: str = "OrderService-Elastic-ApiKey"
    cors_origins: list[str] = field(default_factory=list)
    log_level: str = "INFO"
    port: int = 3000

    @staticmethod
    def from_env(dotenv_path: str | None = None) -> Settings:
        load_dotenv(dotenv_path)
        settings = Settings(
            index_name=os.environ.get("ELASTICSEARCH_INDEX_NAME") or "orders",
            max_results=_get_int("FETCH_RESULTS_MAX", DEFAULT_MAX_RESULTS),
            mapping_file=os.environ.get("ELASTICSEARCH_MAPPING")
            or "orders.mapping.json",
            mappings_path=os.environ.get("MAPPINGS_PATH") or str(MAPPINGS_DIR),
            secret_provider=os.environ.get("SECRET_PROVIDER") or "env",
            key_vault_uri=os.environ.get("KEY_VAULT_URI") or None,
            secrets_file=os.environ.get("SECRETS_FILE") or ".env",
            elastic_url_secret=os.environ.get("ELASTIC_URL_SECRET")
            or "OrderService-Elastic-Url",
            elastic_api_key_secret=os.environ.get("ELASTIC_API_KEY_SECRET")
            or "OrderService-Elastic-ApiKey",
            cors_origins=[
                o.strip()
                for o in (os.environ.get("CORS_ORIGIN") or "").split(",")
                if o.strip()
            ],
            log_level=os.environ.get("LOG_LEVEL") or "INFO",
            port=_get_int("PORT", 3000),
        )
        logger.info(
            "Settings: index=%s max_results=%s mapping=%s secrets=%s",
            settings.index_name,
            settings.max_results,
            settings.mapping_file,
            settings.secret_provider,
        )
        return settings

    def get_secret_provider(self) -> dict:
        if self.secret_provider == "azure_key_vault":
            return {
                "type": "azure_key_vault",
                "parameters": {"vault_url": self.key_vault_uri},
            }
        if self.secret_provider == "env_file":
            return {
                "type": "env_file",
                "parameters": {"path": self.secrets_file},
            }
        return {"type": self.secret_provider}


def _get_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        warn(f"{name}={value!r} is not a number, using {default}")
        return default
    if parsed <= 0:
        warn(f"{name}={value!r} is not positive, using {default}")
        return default
    return parsed
