"""
Secret Store on Environment variables.
"""

__all__ = ["Env"]

import os
from typing import Any

from ....core import Context, Operation, Response
from ....core.exceptions import NotFoundError
from ..._common import StoreOperation, StoreProvider
from .._constants import LATEST_VERSION
from .._models import SecretItem, SecretKey


class Env(StoreProvider):
    uppercase: bool

    def __init__(self, uppercase: bool = True, **kwargs):
        """Initialize.

        Args:
            uppercase:
                Look up uppercased variable names.
        """
        self.uppercase = uppercase
        super().__init__(**kwargs)

    def __run__(
        self,
        operation: Operation | None = None,
        context: Context | None = None,
        **kwargs,
    ) -> Any:
        op_parser = self.get_op_parser(operation)
        result = None
        # GET value
        if op_parser.op_equals(StoreOperation.GET):
            id = self._normalize_id(op_parser.get_id_as_str())
            val = os.environ.get(id)
            if val is None:
                raise NotFoundError(f"Secret [{id}] not found")
            result = SecretItem(
                key=SecretKey(id=id, version=LATEST_VERSION), value=val
            )
        # CLOSE
        elif op_parser.op_equals(StoreOperation.CLOSE):
            result = None
        else:
            return super().__run__(
                operation,
                context,
                **kwargs,
            )
        return Response(result=result)

    def _normalize_id(self, id: str) -> str:
        id = id.replace("-", "_")
        if self.uppercase:
            id = id.upper()
        return id
