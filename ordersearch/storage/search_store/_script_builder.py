from typing import Any

from ...core import DataModel
from ...core.exceptions import BadRequestError
from ._models import Script, ScriptOperation

_FORBIDDEN = ("'", '"', "\\", ".")


class ScriptBuilder:
    """Flattens partial updates into a painless assignment script."""

    @staticmethod
    def build(update: dict[str, Any] | DataModel | None) -> Script:
        if isinstance(update, DataModel):
            update = update.to_dict(exclude_none=True, by_alias=True)
        operations: list[ScriptOperation] = []
        params: dict[str, Any] = {}
        for path, value in ScriptBuilder.flatten(update or {}):
            param = path.replace(".", "_")
            if param in params:
                raise BadRequestError(
                    f"Update field [{path}] collides with another field "
                    f"on parameter [{param}]"
                )
            operations.append(ScriptOperation(field=path, param=param))
            params[param] = value
        if not operations:
            raise BadRequestError("Update does not contain any value to set")
        return Script(operations=operations, params=params)

    @staticmethod
    def flatten(
        value: dict[str, Any], prefix: str = ""
    ) -> list[tuple[str, Any]]:
        pairs: list[tuple[str, Any]] = []
        for key, item in value.items():
            ScriptBuilder._check_key(key)
            if item is None:
                continue
            path = f"{prefix}.{key}" if prefix else key
            if isinstance(item, DataModel):
                item = item.to_dict(exclude_none=True, by_alias=True)
            if isinstance(item, dict):
                pairs = pairs + ScriptBuilder.flatten(item, path)
            else:
                pairs.append((path, item))
        return pairs

    @staticmethod
    def _check_key(key: Any) -> None:
        if not isinstance(key, str) or not key.strip():
            raise BadRequestError("Update field names must be non-empty")
        if any(c in key for c in _FORBIDDEN):
            raise BadRequestError(f"Update field name [{key}] is not allowed")
