"""
API Routers Package

Contains all FastAPI routers grouped by functionality.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Routers are thin wrappers around Application Layer services and queries
    - All routers follow dependency injection pattern (src.api.dependencies)

Available Routers:
    - carts_router: Shopping cart endpoints
    - orders_router: Order lifecycle endpoints
"""

from .carts import router as carts_router
from .orders import router as orders_router

__all__ = ["carts_router", "orders_router"]
