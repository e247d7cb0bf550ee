from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol, TextIO

import yaml
from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from kubernetes.stream import stream
from kubernetes.stream.ws_client import ERROR_CHANNEL

from k8s_cronjob.core.errors import BootstrapError, PodQueryError
from k8s_cronjob.models.k8s import PodCandidate

STREAM_POLL_SECONDS = 1


class PodQuery(Protocol):
    def get_pod(self, namespace: str, name: str) -> PodCandidate:
        raise NotImplementedError

    def list_pods(self, namespace: str, label_selector: str) -> list[PodCandidate]:
        raise NotImplementedError


class PodExec(Protocol):
    def exec_command(
        self,
        namespace: str,
        pod_name: str,
        container: str | None,
        command: Sequence[str],
        stdout: TextIO,
        stderr: TextIO,
    ) -> int | None:
        """Run ``command`` remotely, writing its streams into the buffers.

        Returns the remote exit code when the server reports one.
        """
        raise NotImplementedError


class KubernetesClient(PodQuery, PodExec):
    def __init__(self, timeout_seconds: int) -> None:
        self._logger = logging.getLogger(__name__)
        self._timeout_seconds = timeout_seconds
        self._load_config()
        self._core_api = self._build_core_api()

    def get_pod(self, namespace: str, name: str) -> PodCandidate:
        try:
            pod = self._core_api.read_namespaced_pod(
                name=name,
                namespace=namespace,
                _request_timeout=self._timeout_seconds,
            )
        except Exception as exc:  # noqa: BLE001 - Kubernetes client raises many exception types.
            raise PodQueryError(
                f"get pod {namespace}/{name} failed: {_describe_error(exc)}"
            ) from exc
        return _to_candidate(pod)

    def list_pods(self, namespace: str, label_selector: str) -> list[PodCandidate]:
        try:
            response = self._core_api.list_namespaced_pod(
                namespace=namespace,
                label_selector=label_selector,
                _request_timeout=self._timeout_seconds,
            )
        except Exception as exc:  # noqa: BLE001
            raise PodQueryError(
                f"list pods in {namespace} with selector {label_selector!r} failed: "
                f"{_describe_error(exc)}"
            ) from exc
        return [_to_candidate(pod) for pod in response.items]

    def exec_command(
        self,
        namespace: str,
        pod_name: str,
        container: str | None,
        command: Sequence[str],
        stdout: TextIO,
        stderr: TextIO,
    ) -> int | None:
        kwargs: dict[str, object] = {
            "command": list(command),
            "stdin": False,
            "stdout": True,
            "stderr": True,
            "tty": False,
            "_preload_content": False,
        }
        if container:
            kwargs["container"] = container

        # stream() swaps the request method of the api client it is given,
        # so exec never shares the query client.
        stream_api = client.CoreV1Api()
        resp = stream(
            stream_api.connect_get_namespaced_pod_exec,
            pod_name,
            namespace,
            **kwargs,
        )
        try:
            while resp.is_open():
                resp.update(timeout=STREAM_POLL_SECONDS)
                if resp.peek_stdout():
                    stdout.write(resp.read_stdout())
                if resp.peek_stderr():
                    stderr.write(resp.read_stderr())
            # Frames that arrived together with the close.
            stdout.write(resp.read_stdout())
            stderr.write(resp.read_stderr())
            return _read_exit_code(resp.read_channel(ERROR_CHANNEL))
        finally:
            resp.close()

    def _load_config(self) -> None:
        try:
            config.load_incluster_config()
            self._logger.info("Loaded in-cluster Kubernetes config")
        except ConfigException:
            try:
                config.load_kube_config()
                self._logger.info("Loaded kubeconfig for local development")
            except (ConfigException, OSError) as exc:
                raise BootstrapError(f"load cluster config error: {exc}") from exc

    def _build_core_api(self) -> client.CoreV1Api:
        try:
            return client.CoreV1Api()
        except Exception as exc:  # noqa: BLE001
            raise BootstrapError(f"create cluster client error: {exc}") from exc


def _to_candidate(pod: client.V1Pod) -> PodCandidate:
    name = pod.metadata.name if pod.metadata else ""
    phase = pod.status.phase if pod.status else None
    return PodCandidate(name=name or "", phase=phase)


def _describe_error(exc: Exception) -> str:
    if isinstance(exc, ApiException):
        return f"({exc.status}) {exc.reason}"
    return str(exc) or exc.__class__.__name__


def _read_exit_code(payload: str) -> int | None:
    """Decode the v1.Status frame sent on the error channel when a command ends."""
    if not payload:
        return None
    try:
        status = yaml.safe_load(payload)
    except yaml.YAMLError:
        return None
    if not isinstance(status, dict):
        return None
    if status.get("status") == "Success":
        return 0
    details = status.get("details") or {}
    for cause in details.get("causes") or []:
        if cause.get("reason") == "ExitCode":
            try:
                return int(cause.get("message"))
            except (TypeError, ValueError):
                return None
    return None
