"""
Blog Backend: Health Check Route
==================================

What:  Reports whether the Data Store is reachable.
Who:   Container health checks and humans poking at a deployment.

Always HTTP 200; the body says healthy or unhealthy. The probe itself is
the store's lightweight health_check(), which never raises.
"""

import time

from fastapi import APIRouter, Depends

from blog_api import __version__
from blog_api.dependencies import get_data_store
from blog_api.schemas.blog import HealthResponse
from blog_api.services.store_base import DataStore

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: DataStore = Depends(get_data_store)) -> HealthResponse:
    reachable = await store.health_check()
    return HealthResponse(
        status="healthy" if reachable else "unhealthy",
        version=__version__,
        backend=store.backend_name,
        data_store="reachable" if reachable else "unreachable",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
