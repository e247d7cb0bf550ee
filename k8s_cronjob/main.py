from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from k8s_cronjob.api import commands, health
from k8s_cronjob.core.dependencies import get_settings
from k8s_cronjob.core.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting k8s-cronjob exec api on port %s", settings.port)
    yield


app = FastAPI(title="k8s-cronjob", version="1.0.0", lifespan=lifespan)
app.include_router(health.router)
app.include_router(commands.router)


def run() -> None:
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())
