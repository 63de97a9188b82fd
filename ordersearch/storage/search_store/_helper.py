from typing import Any, Callable, TypeVar

from ...core import DataModel
from ...core.exceptions import BadRequestError
from ._models import SearchItem, TypedItem

T = TypeVar("T")


class Helper:
    @staticmethod
    def require_name(value: str | None, what: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise BadRequestError(f"{what} cannot be empty or null")
        return value

    @staticmethod
    def get_value(value: dict[str, Any] | DataModel) -> dict[str, Any]:
        if isinstance(value, DataModel):
            return value.to_dict(exclude_none=True, by_alias=True)
        return value

    @staticmethod
    def decode(
        source: dict[str, Any] | None,
        shape: type[T] | Callable[[dict[str, Any]], T] | None,
    ) -> Any:
        source = source or {}
        if shape is None:
            return source
        if isinstance(shape, type) and issubclass(shape, DataModel):
            return shape.from_dict(source)
        return shape(source)

    @staticmethod
    def materialize(
        item: SearchItem,
        shape: type[T] | Callable[[dict[str, Any]], T] | None,
    ) -> TypedItem:
        return TypedItem(
            id=item.key.id or "",
            value=Helper.decode(item.value, shape),
        )
