from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from chemlab.app.api.v1.router import router as v1_router
from chemlab.app.core.config import Settings, get_settings
from chemlab.app.core.errors import (
    InsufficientStock,
    InventoryError,
    LastUserError,
    NotFound,
)
from chemlab.app.models.inventory import AppSettings
from chemlab.app.seed import build_seeded_service, default_users
from chemlab.services.inventory import InventoryService
from chemlab.services.procurement import ReportClient

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    NotFound: 404,
    LastUserError: 409,
}


def _status_for(exc: InventoryError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 400


async def inventory_error_handler(request: Request, exc: InventoryError):
    status = _status_for(exc)
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.detail)
    body = {"error": exc.code, "detail": exc.detail}
    if isinstance(exc, InsufficientStock):
        body["available"] = exc.available
    return JSONResponse(status_code=status, content=jsonable_encoder(body))


def build_inventory(settings: Settings) -> InventoryService:
    if settings.seed:
        return build_seeded_service(currency=settings.currency, org_name=settings.org_name)
    return InventoryService(
        users=default_users(),
        settings=AppSettings(currency=settings.currency, org_name=settings.org_name),
    )


def create_app(
    inventory: InventoryService | None = None,
    report_client: ReportClient | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="CHEMLAB INVENTORY", version="0.1.0")
    app.state.inventory = inventory or build_inventory(settings)
    app.state.report_client = report_client or ReportClient.from_settings(settings)
    app.add_exception_handler(InventoryError, inventory_error_handler)
    app.include_router(v1_router, prefix="/v1")
    return app
