"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.orders import router as orders_router
from routes.estimates import router as estimates_router
from routes.settings import router as settings_router

__all__ = [
    "orders_router",
    "estimates_router",
    "settings_router",
]
