from fastapi import APIRouter

from employee_pairs.api.v1.endpoints import health, pairs

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(pairs.router)
