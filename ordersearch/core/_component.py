from __future__ import annotations

import uuid
from typing import Any

from ._async_helper import run_async, run_sync
from ._context import Context
from ._operation import Operation
from ._provider import Provider
from ._response import Response
from ._type_converter import TypeConverter
from .exceptions import NotSupportedError


class Component:
    __provider__: Provider
    __handle__: str | None
    __type__: str
    __unpack__: bool
    __native__: bool

    def __init__(
        self,
        **kwargs,
    ):
        self.__native__ = kwargs.pop("__native__", False)
        self.__unpack__ = kwargs.pop("__unpack__", False)
        self.__handle__ = kwargs.pop("__handle__", None)
        self.__type__ = kwargs.pop("__type__", self.__class__.__module__)
        if "__provider__" in kwargs:
            self.__bind__(kwargs.pop("__provider__"))

    def __bind__(
        self,
        provider: Provider | dict | str | None,
    ) -> None:
        if provider is None:
            return
        if isinstance(provider, Provider):
            provider.__component__ = self
            self.__provider__ = provider
        else:
            if isinstance(provider, dict):
                type = provider.pop("type")
                parameters = provider.pop("parameters", dict())
            else:
                type = provider
                parameters = dict()
            from ._loader import Loader

            module_name = self.__class__.__module__.rsplit(".", 1)[0]
            provider_instance = Loader.load_provider_instance(
                path=f"{module_name}.providers.{type}",
                parameters=parameters,
            )
            self.__bind__(provider=provider_instance)

    def __setup__(self, context: Context | None = None) -> None:
        self.__provider__.__setup__(context=context)

    async def __asetup__(self, context: Context | None = None) -> None:
        await self.__provider__.__asetup__(context=context)

    def __run__(
        self,
        operation: dict | str | Operation | None = None,
        context: dict | Context | None = None,
        **kwargs,
    ) -> Any:
        current_context = self._init_context(context)
        operation = self._convert_operation(operation)
        if hasattr(self, "__provider__"):
            response = self.__provider__.__run__(
                operation=operation,
                context=current_context,
                **kwargs,
            )
        elif operation and operation.name:
            func = getattr(self, operation.name, None)
            afunc = getattr(self, f"a{operation.name}", None)
            if func and callable(func):
                args = TypeConverter.convert_args(func, operation.args or {})
                response = func(**args)
            elif afunc and callable(afunc):
                args = TypeConverter.convert_args(afunc, operation.args or {})
                response = run_sync(afunc, **args)
            else:
                raise NotSupportedError(operation.to_json())
        else:
            raise NotSupportedError()
        return self._convert_response(response)

    async def __arun__(
        self,
        operation: dict | str | Operation | None = None,
        context: dict | Context | None = None,
        **kwargs,
    ) -> Any:
        current_context = self._init_context(context)
        operation = self._convert_operation(operation)
        if hasattr(self, "__provider__"):
            response = await self.__provider__.__arun__(
                operation=operation,
                context=current_context,
                **kwargs,
            )
        else:
            afunc = (
                getattr(self, f"a{operation.name}", None)
                if operation and operation.name
                else None
            )
            if afunc and callable(afunc):
                args = TypeConverter.convert_args(afunc, operation.args or {})
                response = await afunc(**args)
            else:
                response = await run_async(
                    func=self.__run__,
                    operation=operation,
                    context=current_context,
                    **kwargs,
                )
        return self._convert_response(response)

    def _convert_response(self, response: Any) -> Any:
        if not self.__native__ and isinstance(response, Response):
            response.native = None
        if self.__unpack__ and isinstance(response, Response):
            return response.result
        return response

    def _convert_operation(
        self,
        operation: dict | str | Operation | None,
    ) -> Operation | None:
        if isinstance(operation, dict):
            return Operation.from_dict(operation)
        elif isinstance(operation, str):
            return Operation(name=operation)
        return operation

    def _init_context(
        self,
        context: dict | Context | None,
    ) -> Context:
        if isinstance(context, dict):
            context = Context.from_dict(context)
        return Context(
            id=context.id if context is not None else str(uuid.uuid4()),
            data=context.data if context else None,
        )
