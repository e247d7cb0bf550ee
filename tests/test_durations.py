from __future__ import annotations

import pytest

from k8s_cronjob.core.durations import format_duration, parse_duration


@pytest.mark.parametrize(
    "value, expected",
    [
        ("0", 0.0),
        ("30s", 30.0),
        ("1m", 60.0),
        ("1m30s", 90.0),
        ("1.5h", 5400.0),
        ("500ms", 0.5),
        ("2h45m", 9900.0),
        ("+5s", 5.0),
        ("-5s", -5.0),
    ],
)
def test_parse_duration(value: str, expected: float) -> None:
    assert parse_duration(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", ["", "5", "abc", "1d", "1m 30s", "-", "s"])
def test_parse_duration_rejects_invalid_values(value: str) -> None:
    with pytest.raises(ValueError, match="invalid duration"):
        parse_duration(value)


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0s"), (60, "1m"), (90, "1m30s"), (3600, "1h"), (0.5, "0.5s")],
)
def test_format_duration(seconds: float, expected: str) -> None:
    assert format_duration(seconds) == expected
