from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from k8s_cronjob.clients.k8s import PodExec, PodQuery
from k8s_cronjob.core.errors import CronJobError, ResolutionError
from k8s_cronjob.models.k8s import ExecutionResult, build_selector
from k8s_cronjob.services.executor import CommandExecutor
from k8s_cronjob.services.resolver import DEFAULT_LOOKUP_INTERVAL_SECONDS, PodResolver


class ClusterClient(PodQuery, PodExec, Protocol):
    pass


@dataclass(frozen=True)
class JobRequest:
    command: Sequence[str]
    namespace: str = "default"
    pod_name: str = ""
    container_name: str = ""
    labels: str = ""
    wait_timeout_seconds: float = 0


class CronJobService:
    """Resolves the target pod and runs one command in it.

    Every failure comes back as an ``ExecutionResult`` carrying the error, so
    callers only have to render the result.
    """

    def __init__(
        self,
        client_factory: Callable[[], ClusterClient],
        *,
        interval_seconds: float = DEFAULT_LOOKUP_INTERVAL_SECONDS,
        failure_mode: str = "stderr",
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._logger = logging.getLogger(__name__)
        self._client_factory = client_factory
        self._interval_seconds = interval_seconds
        self._failure_mode = failure_mode
        self._cancel_event = cancel_event

    def run(self, request: JobRequest) -> ExecutionResult:
        try:
            selector = build_selector(request.pod_name, request.labels, request.container_name)
            k8s_client = self._client_factory()
        except CronJobError as exc:
            return ExecutionResult(error=exc)

        resolver = PodResolver(
            k8s_client,
            interval_seconds=self._interval_seconds,
            cancel_event=self._cancel_event,
        )
        try:
            pod_name = resolver.resolve(
                request.namespace, selector, request.wait_timeout_seconds
            )
        except ResolutionError as exc:
            self._logger.warning("Pod lookup in %s failed: %s", request.namespace, exc)
            wrapped = type(exc)(f"lookup running pod error: {exc}")
            wrapped.__cause__ = exc
            return ExecutionResult(error=wrapped)

        executor = CommandExecutor(k8s_client, failure_mode=self._failure_mode)
        result = executor.execute(request.namespace, pod_name, selector.container, request.command)
        if result.ok:
            self._logger.info("Command finished in %s/%s", request.namespace, pod_name)
        return result
