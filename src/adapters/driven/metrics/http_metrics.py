"""Per-method request counters for the platform transport."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from src.ports.metrics import HttpAttemptDto, MetricsPort

__all__ = ["Metrics", "MethodStats", "status_bucket"]


def status_bucket(attempt: HttpAttemptDto) -> str:
    """Group an outcome as ``2xx``/``4xx``/... or by exception name."""
    if attempt.status_code is None:
        return attempt.error or "error"
    return f"{attempt.status_code // 100}xx"


@dataclass(slots=True)
class MethodStats:
    """Running totals for one HTTP verb."""

    requests: int = 0
    failures: int = 0
    total_ms: float = 0.0
    slowest_ms: float = 0.0

    @property
    def average_ms(self) -> float:
        return self.total_ms / self.requests if self.requests else 0.0


class Metrics(MetricsPort):
    """Counts requests, failures and latency per HTTP verb.

    Outcomes are also tallied by status class (``2xx``, ``4xx``) or, when
    the transport raised, by exception name (``TimeoutError``). Totals
    cover the whole life of the instance. One instance per event loop.
    """

    def __init__(self) -> None:
        self._by_method: dict[str, MethodStats] = {}
        self._by_status: Counter[str] = Counter()

    def update(self, attempt: HttpAttemptDto) -> None:
        stats = self._by_method.setdefault(attempt.method, MethodStats())
        stats.requests += 1
        stats.failures += int(attempt.is_failed)
        stats.total_ms += attempt.elapsed_ms
        stats.slowest_ms = max(stats.slowest_ms, attempt.elapsed_ms)
        self._by_status[status_bucket(attempt)] += 1

    def method_stats(self, method: str) -> MethodStats:
        """Return the totals of ``method`` (zeroes if never seen)."""
        return self._by_method.get(method.upper(), MethodStats())

    @property
    def status_counts(self) -> dict[str, int]:
        return dict(self._by_status)

    def __str__(self) -> str:
        if not self._by_method:
            return "no requests recorded"

        methods = " | ".join(
            f"{method} req={s.requests} failed={s.failures} "
            f"avg={s.average_ms:.1f}ms max={s.slowest_ms:.1f}ms"
            for method, s in sorted(self._by_method.items())
        )
        statuses = " ".join(f"{k}={v}" for k, v in sorted(self._by_status.items()))
        return f"{methods} | outcomes: {statuses}"
