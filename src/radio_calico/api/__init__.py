# src/radio_calico/api/__init__.py
"""HTTP API routers and error handling."""

from .endpoints import ratings_router, system_router, users_router
from .errors import register_exception_handlers

__all__ = [
    "ratings_router",
    "system_router",
    "users_router",
    "register_exception_handlers",
]
