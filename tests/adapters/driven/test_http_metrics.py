"""Tests for per-method request metrics."""

import pytest

from src.adapters.driven.metrics.http_metrics import Metrics, status_bucket
from src.ports.metrics import HttpAttemptDto

__all__ = []


def test_metrics_initialization() -> None:
    """Metrics should report that nothing was recorded yet."""
    metrics = Metrics()

    assert str(metrics) == "no requests recorded"
    assert metrics.method_stats("GET").requests == 0


def test_metrics_counts_per_method() -> None:
    """Requests, failures and latency should be kept per HTTP verb."""
    metrics = Metrics()
    metrics.update(HttpAttemptDto(method="GET", elapsed_ms=10.0, status_code=200))
    metrics.update(HttpAttemptDto(method="GET", elapsed_ms=30.0, status_code=404))
    metrics.update(HttpAttemptDto(method="POST", elapsed_ms=5.0, status_code=201))

    get = metrics.method_stats("get")
    assert get.requests == 2
    assert get.failures == 1
    assert get.average_ms == pytest.approx(20.0)
    assert get.slowest_ms == pytest.approx(30.0)
    assert metrics.method_stats("POST").failures == 0


def test_metrics_tallies_outcomes_by_status_class_and_error() -> None:
    """Outcomes should be grouped by status class or exception name."""
    metrics = Metrics()
    metrics.update(HttpAttemptDto("GET", 1.0, status_code=200))
    metrics.update(HttpAttemptDto("GET", 1.0, status_code=204))
    metrics.update(HttpAttemptDto("PUT", 1.0, status_code=503))
    metrics.update(HttpAttemptDto("POST", 1.0, error="TimeoutError"))

    assert metrics.status_counts == {"2xx": 2, "5xx": 1, "TimeoutError": 1}
    assert metrics.method_stats("POST").failures == 1


def test_attempt_without_response_is_failed() -> None:
    """An attempt carrying only an error should count as failed."""
    attempt = HttpAttemptDto("GET", 2.0, error="ClientConnectionError")

    assert attempt.is_failed is True
    assert status_bucket(attempt) == "ClientConnectionError"
    assert HttpAttemptDto("GET", 2.0, status_code=399).is_failed is False


def test_metrics_summary_lists_methods_and_outcomes() -> None:
    """The summary line should mention each verb and outcome."""
    metrics = Metrics()
    metrics.update(HttpAttemptDto("PUT", 12.0, status_code=200))
    metrics.update(HttpAttemptDto("GET", 8.0, status_code=500))

    output = str(metrics)
    assert output.startswith("GET req=1 failed=1 avg=8.0ms")
    assert "PUT req=1 failed=0 avg=12.0ms max=12.0ms" in output
    assert output.endswith("outcomes: 2xx=1 5xx=1")
