from fastapi import APIRouter

from chemlab.app.api.v1.endpoints.health import router as health_router
from chemlab.app.api.v1.endpoints.chemicals import router as chemicals_router
from chemlab.app.api.v1.endpoints.units import router as units_router
from chemlab.app.api.v1.endpoints.transactions import router as transactions_router
from chemlab.app.api.v1.endpoints.users import router as users_router
from chemlab.app.api.v1.endpoints.reorder import router as reorder_router
from chemlab.app.api.v1.endpoints.settings import router as settings_router
from chemlab.app.api.v1.endpoints.dashboard import router as dashboard_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(chemicals_router, tags=["chemicals"])
router.include_router(units_router, tags=["units_in_use"])
router.include_router(transactions_router, tags=["transactions"])
router.include_router(users_router, tags=["users"])
router.include_router(reorder_router, tags=["reorder"])
router.include_router(settings_router, tags=["settings"])
router.include_router(dashboard_router, tags=["dashboard"])
