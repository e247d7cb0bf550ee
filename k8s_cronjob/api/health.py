from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from k8s_cronjob.core.dependencies import get_client_factory
from k8s_cronjob.core.errors import BootstrapError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/healthz")
def healthz() -> dict[str, str]:
    """Liveness: the process is serving requests."""
    return {"status": "ok"}


@router.get("/readyz")
def readyz(
    client_factory: Callable[[], object] = Depends(get_client_factory),  # noqa: B008
) -> JSONResponse:
    """Readiness: the cluster client can be bootstrapped, so /exec can reach the API server."""
    try:
        client_factory()
    except BootstrapError as exc:
        logger.warning("Not ready: %s", exc.message)
        return JSONResponse(
            status_code=503, content={"status": "unavailable", "message": exc.message}
        )
    return JSONResponse(status_code=200, content={"status": "ready"})
