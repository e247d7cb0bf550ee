from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from k8s_cronjob.core.errors import (
    ConfigurationError,
    CronJobError,
    ExecTransportError,
    RemoteCommandError,
)

POD_PHASE_RUNNING = "Running"


@dataclass(frozen=True)
class ExplicitPod:
    name: str
    container: str | None = None


@dataclass(frozen=True)
class LabelSelector:
    expression: str
    container: str | None = None


TargetSelector = Union[ExplicitPod, LabelSelector]


def build_selector(
    pod_name: str | None,
    label_selector: str | None,
    container_name: str | None = None,
) -> TargetSelector:
    """Pick the targeting mode; an explicit pod name wins over a selector."""
    pod_name = (pod_name or "").strip()
    label_selector = (label_selector or "").strip()
    container = (container_name or "").strip() or None
    if pod_name:
        return ExplicitPod(name=pod_name, container=container)
    if label_selector:
        return LabelSelector(expression=label_selector, container=container)
    raise ConfigurationError("labels and pod name all empty")


@dataclass(frozen=True)
class PodCandidate:
    name: str
    phase: str | None

    @property
    def is_running(self) -> bool:
        return self.phase == POD_PHASE_RUNNING


class ExecOutcome(str, Enum):
    SUCCESS = "success"
    REMOTE_ERROR = "remote_error"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class ExecutionResult:
    stdout: str = ""
    stderr: str = ""
    error: CronJobError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def outcome(self) -> ExecOutcome | None:
        if self.error is None:
            return ExecOutcome.SUCCESS
        if isinstance(self.error, RemoteCommandError):
            return ExecOutcome.REMOTE_ERROR
        if isinstance(self.error, ExecTransportError):
            return ExecOutcome.TRANSPORT_ERROR
        # Failed before anything ran remotely.
        return None
