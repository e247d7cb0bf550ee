from __future__ import annotations

import json

from k8s_cronjob.core.errors import RemoteCommandError, ResolutionTimeoutError
from k8s_cronjob.models.k8s import ExecutionResult
from k8s_cronjob.schemas.exec import ExecResponse


def test_success_line_omits_error_key() -> None:
    response = ExecResponse.from_result(ExecutionResult(stdout="hello", stderr=""))

    line = response.to_line()

    assert "\n" not in line
    assert json.loads(line) == {"stdout": "hello", "stderr": ""}
    assert response.exit_code == 0


def test_failure_line_carries_error_message() -> None:
    result = ExecutionResult(stdout="a", stderr="boom", error=RemoteCommandError("boom"))

    response = ExecResponse.from_result(result)

    assert json.loads(response.to_line()) == {
        "stdout": "a",
        "stderr": "boom",
        "error": {"message": "boom"},
    }
    assert response.exit_code == 1


def test_multiline_output_stays_on_one_line() -> None:
    result = ExecutionResult(stdout="one\ntwo", stderr="")

    line = ExecResponse.from_result(result).to_line()

    assert line.count("\n") == 0
    assert json.loads(line)["stdout"] == "one\ntwo"


def test_every_failure_kind_maps_to_the_same_exit_code() -> None:
    remote = ExecResponse.from_result(ExecutionResult(error=RemoteCommandError("x")))
    lookup = ExecResponse.from_result(ExecutionResult(error=ResolutionTimeoutError()))

    assert remote.exit_code == lookup.exit_code == 1
