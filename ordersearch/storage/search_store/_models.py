from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from ...core import DataModel
from ._constants import NO_RESULT

T = TypeVar("T")


class SearchKey(DataModel):
    """Search key."""

    id: str
    """Document id."""


class SearchItem(DataModel):
    """Search item."""

    key: SearchKey
    """Search key."""

    value: dict[str, Any] | None = None
    """Document source."""


class SearchList(DataModel):
    """Search list."""

    items: list[SearchItem]
    """List of search items."""


class TypedItem(DataModel, Generic[T]):
    """Document decoded into a caller-supplied shape."""

    id: str
    """Document id assigned by the store."""

    value: T
    """Decoded document."""


class MutationStatus(str, Enum):
    COMPLETED = "completed"
    NO_FILTER = "no_filter"
    UNKNOWN = "unknown"


class MutationResult(DataModel):
    """Outcome of an update or delete by filter.

    A completed mutation carries the number of affected documents,
    which can be zero. The other statuses carry the ``NO_RESULT``
    sentinel as count.
    """

    status: MutationStatus
    count: int = NO_RESULT

    @staticmethod
    def completed(count: int | None) -> MutationResult:
        if count is None:
            return MutationResult(status=MutationStatus.UNKNOWN)
        return MutationResult(status=MutationStatus.COMPLETED, count=count)

    @staticmethod
    def no_filter() -> MutationResult:
        return MutationResult(status=MutationStatus.NO_FILTER)

    def as_count(self) -> int:
        if self.status == MutationStatus.COMPLETED:
            return self.count
        return NO_RESULT


class ScriptOperation(DataModel):
    """Single field assignment in an update script."""

    field: str
    param: str

    def __str__(self) -> str:
        return f"{self.field} := {self.param}"


class Script(DataModel):
    """Update script with out-of-band parameters."""

    operations: list[ScriptOperation]
    params: dict[str, Any]

    @property
    def source(self) -> str:
        lines: list[str] = []
        guarded: set[str] = set()
        for op in self.operations:
            parts = op.field.split(".")
            for i in range(1, len(parts)):
                parent = _source_expr(parts[:i])
                if parent in guarded:
                    continue
                guarded.add(parent)
                lines.append(
                    f"if ({parent} == null) {{ {parent} = new HashMap(); }}"
                )
            lines.append(f"{_source_expr(parts)} = params['{op.param}'];")
        return " ".join(lines)


def _source_expr(parts: list[str]) -> str:
    expr = "ctx._source"
    for p in parts:
        expr += f"['{p}']"
    return expr
