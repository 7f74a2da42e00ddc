"""Middleware modules: metrics and rate limiting"""
from eve_srp.middleware.monitoring import (
    MonitoringMiddleware,
    record_auth_failure,
    record_review,
    record_submission,
)
from eve_srp.middleware.rate_limit import get_rate_limit, limiter

__all__ = [
    "MonitoringMiddleware",
    "record_auth_failure",
    "record_review",
    "record_submission",
    "limiter",
    "get_rate_limit"
]
