from __future__ import annotations

from typing import Any

from .data_model import DataModel


class Operation(DataModel):
    """Operation.

    Attributes:
        name: Operation name.
        args: Operation arguments.
    """

    name: str | None = None
    args: dict[str, Any] | None = None

    @staticmethod
    def normalize(
        name: str | None,
        args: dict[str, Any] | None,
    ) -> Operation:
        if args is None:
            return Operation(name=name)
        if "self" in args:
            args.pop("self")
        rargs: dict = {}
        for k, v in args.items():
            if k == "kwargs":
                rargs.update(v)
            elif v is not None:
                rargs[k] = v
        return Operation(name=name, args=rargs)
