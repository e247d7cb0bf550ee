from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn

import click

from k8s_cronjob.clients.k8s import KubernetesClient
from k8s_cronjob.core.config import FAILURE_MODES, LOG_LEVELS, Settings, load_settings
from k8s_cronjob.core.durations import format_duration, parse_duration
from k8s_cronjob.core.errors import ConfigurationError
from k8s_cronjob.core.logging import configure_logging
from k8s_cronjob.models.k8s import ExecutionResult
from k8s_cronjob.schemas.exec import ExecResponse
from k8s_cronjob.services.job import CronJobService, JobRequest

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    # Everything after the first positional token belongs to the remote command.
    "allow_interspersed_args": False,
}


class DurationParamType(click.ParamType):
    """Go-style durations: ``0``, ``30s``, ``1m30s``, ``500ms``."""

    name = "duration"

    def convert(self, value, param, ctx):  # type: ignore[no-untyped-def]
        if isinstance(value, (int, float)):
            return float(value)
        try:
            return parse_duration(value)
        except ValueError as exc:
            self.fail(str(exc), param, ctx)


DURATION = DurationParamType()


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--namespace", "-ns", "-n", default=None, help="Namespace of the target pod [default: default]"
)
@click.option("--pod-name", "-pn", default="", help="Name of the pod to run the command in")
@click.option("--container-name", "-cn", "-c", default="", help="Container inside the pod")
@click.option("--labels", "-l", default="", help="Label selector, e.g. app=mysql,version=v1.1.2")
@click.option(
    "--wait-timeout",
    "-wp",
    type=DURATION,
    default=None,
    help="How long to wait for a Running pod; 0 disables waiting [default: 1m]",
)
@click.option(
    "--fail-on",
    type=click.Choice(FAILURE_MODES),
    default=None,
    help="Report failure on any stderr output, or on a non-zero exit code [default: stderr]",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level for messages on stderr [default: info]",
)
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
def cli(
    ctx, namespace, pod_name, container_name, labels, wait_timeout, fail_on, log_level, command
):
    """k8s-cronjob [options] command in container

    Finds a Running pod by name or label selector and runs COMMAND in it,
    printing {"stdout", "stderr", "error"} as one JSON line.
    """
    try:
        settings = load_settings()
    except ValueError as exc:
        _report(ctx, ExecutionResult(error=ConfigurationError(str(exc))))

    configure_logging(log_level or settings.log_level)
    timeout_seconds = (
        settings.wait_running_pod_timeout_seconds if wait_timeout is None else wait_timeout
    )
    request = JobRequest(
        command=list(command),
        namespace=namespace or settings.namespace,
        pod_name=pod_name,
        container_name=container_name,
        labels=labels,
        wait_timeout_seconds=timeout_seconds,
    )
    logger.debug(
        "Target namespace=%s pod=%r labels=%r wait=%s",
        request.namespace,
        request.pod_name,
        request.labels,
        format_duration(timeout_seconds),
    )

    with _cancel_on_signals() as cancel_event:
        service = CronJobService(
            lambda: _build_client(settings),
            interval_seconds=settings.pod_lookup_interval_seconds,
            failure_mode=fail_on or settings.exec_failure_mode,
            cancel_event=cancel_event,
        )
        result = service.run(request)
    _report(ctx, result)


def _build_client(settings: Settings) -> KubernetesClient:
    return KubernetesClient(timeout_seconds=settings.k8s_api_timeout_seconds)


def _report(ctx: click.Context, result: ExecutionResult) -> NoReturn:
    response = ExecResponse.from_result(result)
    click.echo(response.to_line())
    ctx.exit(response.exit_code)


@contextmanager
def _cancel_on_signals() -> Iterator[threading.Event]:
    """Set the yielded event on SIGINT/SIGTERM; a second signal gets the old handler."""
    event = threading.Event()
    previous: dict[int, object] = {}

    def _handler(signum, frame):  # type: ignore[no-untyped-def]
        logger.warning("Received %s, cancelling", signal.Signals(signum).name)
        event.set()
        signal.signal(signum, previous[signum])

    if threading.current_thread() is not threading.main_thread():
        yield event
        return

    for signum in (signal.SIGINT, signal.SIGTERM):
        handler = signal.getsignal(signum)
        previous[signum] = signal.SIG_DFL if handler is None else handler
        signal.signal(signum, _handler)
    try:
        yield event
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
