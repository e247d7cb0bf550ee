from __future__ import annotations

import dataclasses

import pytest

from k8s_cronjob.core.errors import ConfigurationError
from k8s_cronjob.models.k8s import ExplicitPod, LabelSelector, PodCandidate, build_selector


def test_build_selector_prefers_pod_name() -> None:
    selector = build_selector("mysql-0", "app=mysql", "mysql")

    assert selector == ExplicitPod(name="mysql-0", container="mysql")


def test_build_selector_uses_labels_when_no_pod_name() -> None:
    selector = build_selector("", "app=mysql,version=v1.1.2", "")

    assert selector == LabelSelector(expression="app=mysql,version=v1.1.2", container=None)


@pytest.mark.parametrize("pod_name, labels", [("", ""), (None, None), ("  ", "")])
def test_build_selector_rejects_empty_target(pod_name: str | None, labels: str | None) -> None:
    with pytest.raises(ConfigurationError, match="labels and pod name all empty"):
        build_selector(pod_name, labels)


def test_selector_is_immutable() -> None:
    selector = build_selector("mysql-0", "")

    with pytest.raises(dataclasses.FrozenInstanceError):
        selector.name = "other"  # type: ignore[misc]


def test_pod_candidate_running_check_is_exact() -> None:
    assert PodCandidate("a", "Running").is_running
    assert not PodCandidate("a", "running").is_running
    assert not PodCandidate("a", None).is_running
