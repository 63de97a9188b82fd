"""
HTTP surface of the order service.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..core import DataModel
from ..core._log_helper import configure
from ..core.exceptions import (
    BaseError,
    InitializationError,
    InternalError,
    LoadError,
)
from ..storage.secret_store import SecretStore
from ._bootstrap import ainit_search_store
from ._config import Settings
from ._models import OrderDocument, OrderFilter, OrderUpdate
from .service import OrdersService

logger = logging.getLogger(__name__)


class UpdateOrdersRequest(DataModel):
    filter: OrderFilter
    update: OrderUpdate


class DeleteOrdersRequest(DataModel):
    filter: OrderFilter


def create_app(
    service: OrdersService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create the orders app.

    When no service is given, one is built on startup
    from the settings and the configured secret provider.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if service is None:
            secrets = SecretStore(
                __provider__=settings.get_secret_provider()
            )
            store = await ainit_search_store(settings, secrets)
            app.state.service = OrdersService(
                store,
                index_name=settings.index_name,
                max_results=settings.max_results,
                mapping_file=settings.mapping_file,
            )
            yield
            await store.aclose()
            await secrets.aclose()
        else:
            app.state.service = service
            yield

    app = FastAPI(title="ordersearch", lifespan=lifespan)
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
            allow_headers=["*"],
            allow_credentials=True,
        )

    async def handle_error(request: Request, exc: Exception) -> JSONResponse:
        status_code = getattr(exc, "status_code", 500)
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url, exc)
        return JSONResponse(
            status_code=status_code, content={"detail": str(exc)}
        )

    for error in (BaseError, InternalError, LoadError, InitializationError):
        app.add_exception_handler(error, handle_error)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_errors(exc)},
        )

    def get_service(request: Request) -> OrdersService:
        return request.app.state.service

    @app.post("/orders", status_code=status.HTTP_201_CREATED)
    async def create_order(order: OrderDocument, request: Request) -> dict:
        logger.info("Received order")
        result = await get_service(request).create_order(order)
        return {
            "message": "Order received and processed successfully!",
            "orderId": result.id,
            "status": "success",
        }

    @app.get("/orders")
    async def get_orders(request: Request) -> list[dict]:
        orders = await get_service(request).get_all_orders()
        return [order.to_dict(by_alias=True) for order in orders]

    @app.get("/orders/{id}")
    async def get_order(id: str, request: Request) -> dict:
        order = await get_service(request).find_order_by_id(id)
        if order is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Order [{id}] not found",
            )
        return order.to_dict(by_alias=True)

    @app.patch("/orders")
    async def update_orders(
        body: UpdateOrdersRequest, request: Request
    ) -> dict:
        updated = await get_service(request).update_order(
            body.filter, body.update
        )
        return {"updated": updated}

    @app.delete("/orders")
    async def delete_orders(
        body: DeleteOrdersRequest, request: Request
    ) -> dict:
        deleted = await get_service(request).delete_order(body.filter)
        return {"deleted": deleted}

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
        for e in exc.errors()
    ]


def main() -> None:
    settings = Settings.from_env()
    configure(settings.log_level.upper())
    uvicorn.run(
        create_app(settings=settings), host="0.0.0.0", port=settings.port
    )


if __name__ == "__main__":
    main()
