from __future__ import annotations

import uuid
from time import perf_counter
from typing import Any, Callable

import structlog
from starlette.datastructures import Headers, MutableHeaders

from petapp.observability.metrics import get_metrics, status_class


class RequestContextMiddleware:
    """Tags each request with an id and its HTMX origin, logs it, and counts it by status class.

    HTMX sends ``HX-Request``/``HX-Target`` on partial updates; both are bound
    into the structlog context so the pet handlers' log lines show which
    fragment of the page asked for them. Client errors (bad age, unknown pet)
    are logged as warnings, server errors (e.g. a fragment rendered with the
    wrong data) as errors.
    """

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app
        self._excluded_metric_paths = {"/api/metrics"}

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        path = scope.get("path")
        request_headers = Headers(scope=scope)

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=path,
            method=scope.get("method"),
            htmx=request_headers.get("hx-request") == "true",
            hx_target=request_headers.get("hx-target"),
        )

        start = perf_counter()
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                MutableHeaders(scope=message)["X-Request-ID"] = request_id

            await send(message)

        log = structlog.get_logger("access")
        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            log.exception("http_request_failed")
            raise
        finally:
            elapsed_ms = (perf_counter() - start) * 1000.0

            if path not in self._excluded_metric_paths:
                get_metrics().observe_http_request(elapsed_ms=elapsed_ms, status_code=status_code)

            bucket = status_class(status_code)
            emit = log.error if bucket == "5xx" else log.warning if bucket == "4xx" else log.info
            emit("http_request", status_code=status_code, status_class=bucket, elapsed_ms=round(elapsed_ms, 2))

            structlog.contextvars.clear_contextvars()
