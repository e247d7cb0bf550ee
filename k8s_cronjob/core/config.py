from __future__ import annotations

import os
from dataclasses import dataclass

from k8s_cronjob.core.durations import parse_duration

DEFAULT_NAMESPACE = "default"
DEFAULT_WAIT_RUNNING_POD_TIMEOUT = "1m"
FAILURE_MODES = ("stderr", "exit-code")
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def _get_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_duration_env(name: str, default: str) -> float:
    value = os.getenv(name) or default
    try:
        return parse_duration(value)
    except ValueError as exc:
        raise ValueError(f"{name} is not a valid duration: {value}") from exc


def _get_choice_env(name: str, default: str, choices: tuple[str, ...]) -> str:
    value = os.getenv(name, "").strip().lower() or default
    if value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}: {value}")
    return value


@dataclass(frozen=True)
class Settings:
    port: int
    log_level: str
    namespace: str
    k8s_api_timeout_seconds: int
    pod_lookup_interval_seconds: float
    wait_running_pod_timeout_seconds: float
    exec_failure_mode: str


def load_settings() -> Settings:
    return Settings(
        port=_get_int_env("PORT", 8000),
        log_level=_get_choice_env("LOG_LEVEL", "info", LOG_LEVELS),
        namespace=os.getenv("K8S_NAMESPACE", DEFAULT_NAMESPACE),
        k8s_api_timeout_seconds=_get_int_env("K8S_API_TIMEOUT_SECONDS", 30),
        pod_lookup_interval_seconds=_get_float_env("POD_LOOKUP_INTERVAL_SECONDS", 5.0),
        wait_running_pod_timeout_seconds=_get_duration_env(
            "WAIT_RUNNING_POD_TIMEOUT", DEFAULT_WAIT_RUNNING_POD_TIMEOUT
        ),
        exec_failure_mode=_get_choice_env("EXEC_FAILURE_MODE", "stderr", FAILURE_MODES),
    )
