"""Health check endpoint."""

import time
from fastapi import APIRouter, Depends

from app.api.deps import get_local_db
from app.models.responses import HealthResponse, HealthDependency
from app.services.local_db import LocalDbClient

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(local_db: LocalDbClient = Depends(get_local_db)):
    """System health check with dependency status."""
    dependencies = {}

    # Check the local document store
    start = time.time()
    if local_db.is_available():
        latency = (time.time() - start) * 1000
        dependencies["local_db"] = HealthDependency(status="healthy", latency_ms=round(latency, 2))
    else:
        dependencies["local_db"] = HealthDependency(
            status="unhealthy",
            message=f"Directory not found: {local_db.db_dir}",
        )

    # Overall status: the local store is the only dependency
    status = "healthy" if all(d.status == "healthy" for d in dependencies.values()) else "unhealthy"

    return HealthResponse(
        status=status,
        uptime_seconds=round(time.time() - _start_time, 2),
        dependencies=dependencies,
    )
