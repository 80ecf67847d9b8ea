"""Per-request id propagation and structured access logging."""

from __future__ import annotations

import json
import logging
import time
import uuid

from fastapi import FastAPI, Request, Response


def _log_line(request: Request, req_id: str, started: float, **extra) -> str:
    """JSON payload shared by the success and failure log entries."""
    return json.dumps(
        {
            "request_id": req_id,
            "path": request.url.path,
            "method": request.method,
            **extra,
            "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
            "client": request.client.host if request.client else "unknown",
        },
        ensure_ascii=True,
    )


def install_request_logging(app: FastAPI, logger: logging.Logger) -> None:
    """Attach the request-context middleware to `app`.

    Every request gets `request.state.request_id` (taken from the incoming
    `X-Request-ID` header or generated), echoed back on the response, and
    one JSON log line with path, method, status and duration.
    """

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
        request.state.request_id = req_id
        started = time.perf_counter()
        response: Response
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request_failed %s", _log_line(request, req_id, started))
            raise
        response.headers["X-Request-ID"] = req_id
        logger.info("request_done %s", _log_line(request, req_id, started, status_code=response.status_code))
        return response
