from __future__ import annotations


class CronJobError(Exception):
    """Base class for every failure reported through the output contract."""

    @property
    def message(self) -> str:
        return str(self)


class ConfigurationError(CronJobError):
    pass


class BootstrapError(CronJobError):
    pass


class ResolutionError(CronJobError):
    pass


class PodQueryError(ResolutionError):
    pass


class NoRunningPodError(ResolutionError):
    def __init__(self, message: str = "no running pod found") -> None:
        super().__init__(message)


class ResolutionTimeoutError(ResolutionError):
    def __init__(self, message: str = "lookup running pod timeout") -> None:
        super().__init__(message)


class ResolutionCancelledError(ResolutionError):
    def __init__(self, message: str = "lookup running pod cancelled") -> None:
        super().__init__(message)


class ExecError(CronJobError):
    pass


class RemoteCommandError(ExecError):
    pass


class ExecTransportError(ExecError):
    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause) or cause.__class__.__name__)
        self.cause = cause
