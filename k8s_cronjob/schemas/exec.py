from __future__ import annotations

from pydantic import BaseModel, Field

from k8s_cronjob.models.k8s import ExecutionResult

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
# Each request holds a worker thread while it polls for a Running pod.
MAX_WAIT_TIMEOUT_SECONDS = 600


class ErrorDetail(BaseModel):
    message: str


class ExecResponse(BaseModel):
    stdout: str = ""
    stderr: str = ""
    error: ErrorDetail | None = None

    @classmethod
    def from_result(cls, result: ExecutionResult) -> ExecResponse:
        error = None if result.error is None else ErrorDetail(message=result.error.message)
        return cls(stdout=result.stdout, stderr=result.stderr, error=error)

    def to_line(self) -> str:
        """Single-line JSON; ``error`` is left out entirely on success."""
        return self.model_dump_json(exclude_none=True)

    @property
    def exit_code(self) -> int:
        return EXIT_SUCCESS if self.error is None else EXIT_FAILURE


class ExecRequest(BaseModel):
    namespace: str = "default"
    pod_name: str = ""
    container_name: str = ""
    labels: str = Field(default="", description="Label selector, e.g. app=mysql,version=v1.1.2")
    wait_timeout_seconds: float = Field(default=0, ge=0, le=MAX_WAIT_TIMEOUT_SECONDS)
    command: list[str] = Field(min_length=1)
