import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ...core.exceptions import LoadError
from ._helper import Helper

logger = logging.getLogger(__name__)


class SchemaLoader:
    """Reads index mappings from a mappings directory."""

    base_path: Path

    def __init__(self, base_path: str | Path = "mappings"):
        self.base_path = Path(base_path)

    def load(self, name: str) -> dict[str, Any]:
        Helper.require_name(name, "Schema name")
        path = self.base_path / name
        logger.info("Loading mapping from %s", path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise LoadError(f"Could not read mapping [{path}]: {e}") from e
        try:
            if path.suffix in (".yaml", ".yml"):
                schema = yaml.safe_load(content)
            else:
                schema = json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise LoadError(f"Mapping [{path}] is malformed: {e}") from e
        if not isinstance(schema, dict):
            raise LoadError(f"Mapping [{path}] must be an object")
        logger.info("Mapping [%s] loaded", name)
        return schema
