from __future__ import annotations

import io
import logging
from collections.abc import Sequence

from k8s_cronjob.clients.k8s import PodExec
from k8s_cronjob.core.config import FAILURE_MODES
from k8s_cronjob.core.errors import ExecTransportError, RemoteCommandError
from k8s_cronjob.models.k8s import ExecutionResult


class CommandExecutor:
    def __init__(self, pod_exec: PodExec, failure_mode: str = "stderr") -> None:
        if failure_mode not in FAILURE_MODES:
            raise ValueError(f"unknown failure mode: {failure_mode}")
        self._logger = logging.getLogger(__name__)
        self._pod_exec = pod_exec
        self._failure_mode = failure_mode

    def execute(
        self,
        namespace: str,
        pod_name: str,
        container: str | None,
        command: Sequence[str],
    ) -> ExecutionResult:
        stdout = io.StringIO()
        stderr = io.StringIO()
        self._logger.info(
            "Executing %s in %s/%s%s",
            list(command),
            namespace,
            pod_name,
            f" (container {container})" if container else "",
        )
        try:
            exit_code = self._pod_exec.exec_command(
                namespace, pod_name, container, command, stdout, stderr
            )
        except Exception as exc:  # noqa: BLE001 - websocket and API errors share no base.
            self._logger.warning("Exec stream in %s/%s failed: %s", namespace, pod_name, exc)
            return ExecutionResult(
                stdout=stdout.getvalue().strip(),
                stderr=stderr.getvalue().strip(),
                error=ExecTransportError(exc),
            )

        stdout_text = stdout.getvalue().strip()
        stderr_text = stderr.getvalue().strip()
        error = self._classify(stderr_text, exit_code)
        return ExecutionResult(stdout=stdout_text, stderr=stderr_text, error=error)

    def _classify(self, stderr_text: str, exit_code: int | None) -> RemoteCommandError | None:
        # A reported non-zero exit always fails; stderr only decides the rest.
        if exit_code:
            return RemoteCommandError(f"command terminated with exit code {exit_code}")
        if self._failure_mode == "exit-code" and exit_code == 0:
            return None
        if stderr_text:
            return RemoteCommandError(stderr_text)
        return None
