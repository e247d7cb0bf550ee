from __future__ import annotations

import logging
import sys
from collections.abc import Iterable

HEALTH_CHECK_PATHS = ("/healthz", "/readyz")


class _HealthCheckFilter(logging.Filter):
    def __init__(self, paths: Iterable[str]) -> None:
        super().__init__()
        self._paths = {path.rstrip("/") or "/" for path in paths}

    def filter(self, record: logging.LogRecord) -> bool:
        path = _extract_path(record)
        return not (path and path in self._paths)


def _extract_path(record: logging.LogRecord) -> str | None:
    # uvicorn.access records carry (client, method, path, http_version, status).
    args = record.args
    if isinstance(args, tuple) and len(args) >= 3:
        return str(args[2]).split("?", 1)[0]
    return None


def configure_logging(level: str) -> None:
    # stdout is reserved for the JSON result line.
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("uvicorn.access").addFilter(_HealthCheckFilter(HEALTH_CHECK_PATHS))
