"""Monitoring and observability middleware"""
import time
from typing import Callable

from fastapi import Request, Response
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

from eve_srp.utils.logger import logger


# ===== Prometheus Metrics =====

# Request metrics
http_requests_total = Counter(
    "srp_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

http_request_duration_seconds = Histogram(
    "srp_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"]
)

# Error metrics
http_errors_total = Counter(
    "srp_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "status"]
)

# Domain metrics
srp_submissions_total = Counter(
    "srp_submissions_total",
    "SRP submissions",
    ["outcome"]  # created, duplicate
)

srp_reviews_total = Counter(
    "srp_reviews_total",
    "Review and edit operations",
    ["action"]  # approve, reject, edit_pending, edit_approved, edit_rejected
)

authentication_failures_total = Counter(
    "srp_authentication_failures_total",
    "Total authentication failures",
    ["type"]  # admin_login, sso, not_member
)


def _endpoint_label(request: Request) -> str:
    """Route template rather than raw path, so ids do not explode label cardinality"""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class MonitoringMiddleware(BaseHTTPMiddleware):
    """Middleware for monitoring and metrics collection"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and collect metrics"""
        start_time = time.time()
        method = request.method

        # Add request ID for tracing
        request_id = request.headers.get("x-request-id", f"req_{int(time.time() * 1000)}")
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            endpoint = _endpoint_label(request)
            http_errors_total.labels(method=method, endpoint=endpoint, status=500).inc()
            logger.error(
                f"Request failed after {duration:.3f}s: {method} {endpoint}: {e}",
                extra={"request_id": request_id, "method": method, "path": endpoint},
                exc_info=True
            )
            raise

        status = response.status_code
        duration = time.time() - start_time
        endpoint = _endpoint_label(request)

        http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

        # Log slow requests
        if duration > 1.0:
            logger.warning(
                f"Slow request detected: {method} {endpoint} ({duration:.3f}s)",
                extra={"request_id": request_id, "method": method, "path": endpoint}
            )

        if status >= 400:
            http_errors_total.labels(method=method, endpoint=endpoint, status=status).inc()

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response


def record_submission(outcome: str):
    """Record SRP submission outcome"""
    srp_submissions_total.labels(outcome=outcome).inc()


def record_review(action: str):
    """Record review or edit"""
    srp_reviews_total.labels(action=action).inc()


def record_auth_failure(auth_type: str):
    """Record authentication failure"""
    authentication_failures_total.labels(type=auth_type).inc()
