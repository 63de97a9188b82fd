from threading import Lock

from ...core import Operation, Provider
from ...core.exceptions import NotReadyError
from ._operation_parser import StoreOperationParser


class StoreProvider(Provider):
    _ready: bool
    _ready_lock: Lock

    def __init__(self, **kwargs):
        self._ready = False
        self._ready_lock = Lock()
        super().__init__(**kwargs)

    def get_op_parser(
        self, operation: Operation | None
    ) -> StoreOperationParser:
        return StoreOperationParser(operation)

    @property
    def ready(self) -> bool:
        return self._ready

    def _set_ready(self, ready: bool) -> None:
        with self._ready_lock:
            self._ready = ready

    def _ensure_ready(self) -> None:
        if not self._ready:
            raise NotReadyError(
                f"{self.__class__.__name__} is not initialized"
            )
