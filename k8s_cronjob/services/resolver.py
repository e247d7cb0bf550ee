from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from k8s_cronjob.clients.k8s import PodQuery
from k8s_cronjob.core.errors import (
    NoRunningPodError,
    ResolutionCancelledError,
    ResolutionError,
    ResolutionTimeoutError,
)
from k8s_cronjob.models.k8s import ExplicitPod, LabelSelector, TargetSelector

DEFAULT_LOOKUP_INTERVAL_SECONDS = 5.0


class PodResolver:
    """Finds one Running pod for a selector, polling until a deadline if asked.

    The wait between attempts is an ``Event.wait`` so that setting
    ``cancel_event`` (e.g. from a signal handler) ends the lookup without
    sitting out the rest of the interval.
    """

    def __init__(
        self,
        pod_query: PodQuery,
        *,
        interval_seconds: float = DEFAULT_LOOKUP_INTERVAL_SECONDS,
        cancel_event: threading.Event | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._logger = logging.getLogger(__name__)
        self._pod_query = pod_query
        self._interval_seconds = interval_seconds
        self._cancel_event = cancel_event or threading.Event()
        self._clock = clock

    def resolve(
        self,
        namespace: str,
        selector: TargetSelector,
        timeout_seconds: float = 0,
    ) -> str:
        if timeout_seconds <= 0:
            return self.resolve_once(namespace, selector)

        start = self._clock()
        attempt = 0
        while True:
            attempt += 1
            try:
                return self.resolve_once(namespace, selector)
            except ResolutionError as exc:
                self._logger.info(
                    "Running pod lookup attempt %d in %s failed: %s", attempt, namespace, exc
                )
            if self._clock() - start > timeout_seconds:
                raise ResolutionTimeoutError()
            if self._cancel_event.wait(self._interval_seconds):
                raise ResolutionCancelledError()

    def resolve_once(self, namespace: str, selector: TargetSelector) -> str:
        if isinstance(selector, ExplicitPod):
            pod = self._pod_query.get_pod(namespace, selector.name)
            if pod.is_running:
                return pod.name
            self._logger.debug("Pod %s/%s is %s", namespace, pod.name, pod.phase)
            raise NoRunningPodError()

        if isinstance(selector, LabelSelector):
            pods = self._pod_query.list_pods(namespace, selector.expression)
            for pod in pods:
                if pod.is_running:
                    return pod.name
            self._logger.debug(
                "No Running pod among %d matching %r in %s",
                len(pods),
                selector.expression,
                namespace,
            )
            raise NoRunningPodError()

        raise TypeError(f"unsupported target selector: {selector!r}")
