from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache

from k8s_cronjob.clients.k8s import KubernetesClient
from k8s_cronjob.core.config import Settings, load_settings
from k8s_cronjob.services.job import CronJobService


@lru_cache
def get_settings() -> Settings:
    return load_settings()


@lru_cache
def get_k8s_client() -> KubernetesClient:
    settings = get_settings()
    return KubernetesClient(timeout_seconds=settings.k8s_api_timeout_seconds)


def get_client_factory() -> Callable[[], KubernetesClient]:
    return get_k8s_client


def get_cronjob_service() -> CronJobService:
    settings = get_settings()
    return CronJobService(
        get_client_factory(),
        interval_seconds=settings.pod_lookup_interval_seconds,
        failure_mode=settings.exec_failure_mode,
    )
