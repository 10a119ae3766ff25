from __future__ import annotations

from fastapi import APIRouter

from employee_pairs.core.config import settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "test_mode": settings.TEST_MODE,
    }


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}
