from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from k8s_cronjob.core.dependencies import get_cronjob_service
from k8s_cronjob.core.errors import ConfigurationError
from k8s_cronjob.schemas.exec import ExecRequest, ExecResponse
from k8s_cronjob.services.job import CronJobService, JobRequest

router = APIRouter()


@router.post("/exec", response_model=ExecResponse)
def exec_command(
    request: ExecRequest,
    service: CronJobService = Depends(get_cronjob_service),  # noqa: B008
) -> JSONResponse:
    """Run one command in the resolved pod and return the captured output."""
    result = service.run(
        JobRequest(
            command=request.command,
            namespace=request.namespace,
            pod_name=request.pod_name,
            container_name=request.container_name,
            labels=request.labels,
            wait_timeout_seconds=request.wait_timeout_seconds,
        )
    )
    response = ExecResponse.from_result(result)
    if result.ok:
        status_code = 200
    elif isinstance(result.error, ConfigurationError):
        status_code = 400
    else:
        status_code = 500
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json", exclude_none=True),
    )
