from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from employee_pairs.api.v1.router import api_router
from employee_pairs.core.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    logging.getLogger("employee_pairs").setLevel(settings.LOG_LEVEL.upper())
    logger.info("Employee Pairs API %s started (test_mode=%s)", settings.APP_VERSION, settings.TEST_MODE)
    yield


app = FastAPI(
    title="Employee Pairs API",
    description="Finds the pair of employees who worked together the longest on common projects",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Employee Pairs API"}
