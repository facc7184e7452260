"""
Endpoint handlers for the relay server.
"""
from .health import router as health_router
from .accounts import router as accounts_router
from .relay import router as relay_router

__all__ = [
    'health_router',
    'accounts_router',
    'relay_router',
]
