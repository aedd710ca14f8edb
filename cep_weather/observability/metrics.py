from __future__ import annotations

from dataclasses import asdict, dataclass, field
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


@dataclass
class _ProviderAgg:
    calls_total: int = 0
    failures_total: int = 0
    call_ms: _LatencyAgg = field(default_factory=_LatencyAgg)


class InMemoryMetrics:
    """Thread-safe, process-local metrics.

    One instance per app so the gateway and the resolver never mix counts,
    even when both run in the same process (tests).
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self.http_requests_total: int = 0
        self.http_request_ms = _LatencyAgg()
        self.http_status_total: dict[str, int] = {}
        self.providers: dict[str, _ProviderAgg] = {}

    def observe_http_request(self, elapsed_ms: float, status_code: int) -> None:
        with self._lock:
            self.http_requests_total += 1
            self.http_request_ms.observe(elapsed_ms)
            key = str(status_code)
            self.http_status_total[key] = self.http_status_total.get(key, 0) + 1

    def observe_provider_call(self, provider: str, elapsed_ms: float, failed: bool = False) -> None:
        with self._lock:
            agg = self.providers.setdefault(provider, _ProviderAgg())
            agg.calls_total += 1
            if failed:
                agg.failures_total += 1
            agg.call_ms.observe(elapsed_ms)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "counters": {
                    "http_requests_total": self.http_requests_total,
                    "http_status_total": dict(self.http_status_total),
                },
                "latency_ms": {
                    "http_request_ms": asdict(self.http_request_ms),
                },
                "providers": {name: asdict(agg) for name, agg in self.providers.items()},
            }
