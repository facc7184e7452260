"""
Health check endpoints.
"""
import time
from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint, with the number of configured realms and accounts"""
    config = request.app.state.relay_config
    return {
        "status": "healthy",
        "realms": len(config.credentials),
        "accounts": len(config.accounts),
        "timestamp": time.time(),
    }


@router.get("/healthz")
async def healthz_check():
    """Liveness probe (Kubernetes style)"""
    return {"status": "ok"}
