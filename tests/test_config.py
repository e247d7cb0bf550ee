from __future__ import annotations

import pytest

from k8s_cronjob.core.config import load_settings

_ENV_NAMES = (
    "PORT",
    "LOG_LEVEL",
    "K8S_NAMESPACE",
    "K8S_API_TIMEOUT_SECONDS",
    "POD_LOOKUP_INTERVAL_SECONDS",
    "WAIT_RUNNING_POD_TIMEOUT",
    "EXEC_FAILURE_MODE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_load_settings_defaults() -> None:
    settings = load_settings()

    assert settings.namespace == "default"
    assert settings.k8s_api_timeout_seconds == 30
    assert settings.pod_lookup_interval_seconds == 5.0
    assert settings.wait_running_pod_timeout_seconds == 60.0
    assert settings.exec_failure_mode == "stderr"
    assert settings.log_level == "info"


def test_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("K8S_NAMESPACE", "db")
    monkeypatch.setenv("K8S_API_TIMEOUT_SECONDS", "10")
    monkeypatch.setenv("POD_LOOKUP_INTERVAL_SECONDS", "0.5")
    monkeypatch.setenv("WAIT_RUNNING_POD_TIMEOUT", "2m30s")
    monkeypatch.setenv("EXEC_FAILURE_MODE", "Exit-Code")

    settings = load_settings()

    assert settings.namespace == "db"
    assert settings.k8s_api_timeout_seconds == 10
    assert settings.pod_lookup_interval_seconds == 0.5
    assert settings.wait_running_pod_timeout_seconds == 150.0
    assert settings.exec_failure_mode == "exit-code"


def test_load_settings_ignores_malformed_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("K8S_API_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("POD_LOOKUP_INTERVAL_SECONDS", "often")

    settings = load_settings()

    assert settings.k8s_api_timeout_seconds == 30
    assert settings.pod_lookup_interval_seconds == 5.0


def test_load_settings_rejects_invalid_wait_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WAIT_RUNNING_POD_TIMEOUT", "forever")

    with pytest.raises(ValueError, match="WAIT_RUNNING_POD_TIMEOUT"):
        load_settings()


def test_load_settings_rejects_unknown_failure_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXEC_FAILURE_MODE", "never")

    with pytest.raises(ValueError, match="EXEC_FAILURE_MODE"):
        load_settings()


def test_load_settings_normalizes_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    assert load_settings().log_level == "warning"


def test_load_settings_rejects_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    with pytest.raises(ValueError, match="LOG_LEVEL"):
        load_settings()
