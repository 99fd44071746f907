from __future__ import annotations

from dataclasses import asdict, dataclass
from threading import Lock
from typing import Any


@dataclass
class _LatencyAgg:
    count: int = 0
    sum_ms: float = 0.0
    max_ms: float = 0.0

    def observe(self, elapsed_ms: float) -> None:
        self.count += 1
        self.sum_ms += float(elapsed_ms)
        if elapsed_ms > self.max_ms:
            self.max_ms = float(elapsed_ms)


_STATUS_CLASSES = ("1xx", "2xx", "3xx", "4xx", "5xx")


def status_class(status_code: int) -> str:
    """Bucket an HTTP status into "2xx", "4xx", ...; anything odd counts as a server error."""

    if 100 <= status_code <= 599:
        return f"{status_code // 100}xx"
    return "5xx"


def _empty_status_classes() -> dict[str, int]:
    return {name: 0 for name in _STATUS_CLASSES}


class InMemoryMetrics:
    """Thread-safe, process-local metrics (resets on restart)."""

    def __init__(self) -> None:
        self._lock = Lock()
        self.http_requests_total: int = 0
        self.pets_added_total: int = 0
        self.pets_edited_total: int = 0
        self.pets_deleted_total: int = 0
        self.http_responses_by_class: dict[str, int] = _empty_status_classes()
        self.http_request_ms = _LatencyAgg()

    def observe_http_request(self, elapsed_ms: float, status_code: int = 200) -> None:
        with self._lock:
            self.http_requests_total += 1
            self.http_responses_by_class[status_class(status_code)] += 1
            self.http_request_ms.observe(elapsed_ms)

    def observe_pet_added(self) -> None:
        with self._lock:
            self.pets_added_total += 1

    def observe_pet_edited(self) -> None:
        with self._lock:
            self.pets_edited_total += 1

    def observe_pet_deleted(self) -> None:
        with self._lock:
            self.pets_deleted_total += 1

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "counters": {
                    "http_requests_total": self.http_requests_total,
                    "pets_added_total": self.pets_added_total,
                    "pets_edited_total": self.pets_edited_total,
                    "pets_deleted_total": self.pets_deleted_total,
                },
                "http_responses_by_class": dict(self.http_responses_by_class),
                "latency_ms": {
                    "http_request_ms": asdict(self.http_request_ms),
                },
            }

    def reset(self) -> None:
        with self._lock:
            self.http_requests_total = 0
            self.pets_added_total = 0
            self.pets_edited_total = 0
            self.pets_deleted_total = 0
            self.http_responses_by_class = _empty_status_classes()
            self.http_request_ms = _LatencyAgg()


_METRICS: InMemoryMetrics | None = None


def get_metrics() -> InMemoryMetrics:
    global _METRICS
    if _METRICS is None:
        _METRICS = InMemoryMetrics()
    return _METRICS


def reset_metrics() -> None:
    """Reset metrics counters/aggregates (used by tests)."""

    get_metrics().reset()
