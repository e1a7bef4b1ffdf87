# src/radio_calico/api/endpoints/__init__.py
"""API endpoint modules."""

from .ratings import router as ratings_router
from .system import router as system_router
from .users import router as users_router

__all__ = [
    "ratings_router",
    "system_router",
    "users_router",
]
