"""HTTP routers."""

from routes.auth import router as auth_router
from routes.orders import router as orders_router

__all__ = ["auth_router", "orders_router"]
