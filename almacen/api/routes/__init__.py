"""API route modules."""

from almacen.api.routes.finance import router as finance_router
from almacen.api.routes.health import router as health_router
from almacen.api.routes.parts import router as parts_router
from almacen.api.routes.warehouses import router as warehouses_router

__all__ = [
    "health_router",
    "warehouses_router",
    "parts_router",
    "finance_router",
]
