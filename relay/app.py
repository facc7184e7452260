"""
FastAPI application factory.
"""
import logging
from typing import Optional

import httpx
from fastapi import FastAPI

from .dispatcher import RequestDispatcher
from .endpoints import accounts_router, health_router, relay_router
from .middleware import log_requests_middleware
from .runtime import RelayConfig

logger = logging.getLogger(__name__)


def create_app(config: RelayConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """Build the relay application around an immutable RelayConfig

    Args:
        config: Runtime configuration built at process start
        transport: Optional httpx transport for outbound calls (tests)
    """
    app = FastAPI(title="Realm Relay", version="1.0.0")

    app.state.relay_config = config
    app.state.dispatcher = RequestDispatcher(config, transport=transport)

    app.middleware("http")(log_requests_middleware)

    app.include_router(health_router)
    app.include_router(accounts_router)
    app.include_router(relay_router)

    logger.debug(f"FastAPI application initialized for realms: {config.credentials.realms()}")
    return app
