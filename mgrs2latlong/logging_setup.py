"""Structured logging configuration.

JSON lines when ENABLE_JSON_LOGS=1, otherwise a concise human formatter.
Fields: timestamp, level, msg, logger, plus any of the known extras below.
Everything goes to stderr so CSV written to stdout stays clean.
"""
from __future__ import annotations

import json
import logging
from time import time

from .config import load_settings

_EXTRA_FIELDS = (
    "input",
    "column",
    "rows",
    "converted",
    "blank",
    "failed",
    "row",
    "request_id",
    "path",
    "method",
    "status",
    "duration_ms",
)


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - formatting
        base = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        for attr in _EXTRA_FIELDS:
            if hasattr(record, attr):
                base[attr] = getattr(record, attr)
        if record.exc_info:
            base["exc_type"] = record.exc_info[0].__name__ if record.exc_info[0] else None
        return json.dumps(base, ensure_ascii=False)


class _PlainFormatter(logging.Formatter):  # pragma: no cover - formatting
    def format(self, record: logging.LogRecord) -> str:
        parts = [
            self.formatTime(record, datefmt="%H:%M:%S"),
            record.levelname[0],
            record.name + ":",
            record.getMessage(),
        ]
        for attr in _EXTRA_FIELDS:
            if hasattr(record, attr):
                parts.append(f"{attr}={getattr(record, attr)}")
        return " ".join(parts)


def configure_logging() -> None:
    if getattr(configure_logging, "_configured", False):  # idempotent
        return
    settings = load_settings()
    root = logging.getLogger()
    root.setLevel(settings.log_level)
    for h in list(root.handlers):  # remove uvicorn's default handlers for consistency
        root.removeHandler(h)
    handler = logging.StreamHandler()  # stderr; stdout may carry CSV output
    handler.setFormatter(_JsonFormatter() if settings.json_logs else _PlainFormatter())
    root.addHandler(handler)
    configure_logging._configured = True  # type: ignore[attr-defined]


async def logging_middleware(request, call_next):  # pragma: no cover - thin wrapper
    import uuid

    rid = uuid.uuid4().hex[:8]
    start = time()
    request.state.request_id = rid
    logger = logging.getLogger("request")
    logger.info("request.start", extra={"request_id": rid, "path": request.url.path, "method": request.method})
    response = None
    try:
        response = await call_next(request)
        return response
    finally:
        dur = (time() - start) * 1000.0
        logger.info(
            "request.end",
            extra={
                "request_id": rid,
                "path": request.url.path,
                "method": request.method,
                "status": getattr(response, "status_code", None),
                "duration_ms": round(dur, 2),
            },
        )
