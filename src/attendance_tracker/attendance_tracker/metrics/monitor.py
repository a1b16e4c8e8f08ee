from __future__ import annotations

import logging
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from ..core.constants import (
    METRICS_CAPACITY,
    METRICS_QUERY_MAX_LEN,
    METRICS_RECENT_LIMIT,
    METRICS_WINDOW_MS,
    SLOW_QUERY_MS,
    SLOW_REQUEST_MS,
)

logger = logging.getLogger(__name__)


class MetricsObserver(Protocol):
    """Passive sink for request and query timings."""

    def track_api(
        self,
        method: str,
        url: str,
        response_time_ms: float,
        status_code: int,
        user_agent: Optional[str] = None,
    ) -> None:
        raise NotImplementedError

    def track_db_query(self, query: str, duration_ms: float, success: bool = True) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class ApiMetric:
    timestamp: float
    method: str
    url: str
    response_time: float
    status_code: int
    user_agent: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "timestamp": int(self.timestamp),
            "method": self.method,
            "url": self.url,
            "responseTime": round(self.response_time),
            "statusCode": self.status_code,
            "userAgent": self.user_agent,
        }


@dataclass(frozen=True)
class DbMetric:
    timestamp: float
    query: str
    duration: float
    success: bool

    def to_dict(self) -> dict:
        return {
            "timestamp": int(self.timestamp),
            "query": self.query,
            "duration": round(self.duration),
            "success": self.success,
        }


def _epoch_ms() -> float:
    return time.time() * 1000.0


class PerformanceMonitor(MetricsObserver):
    """In-process metrics kept in two capped ring buffers.

    One instance per process, created at startup and never persisted. All
    access to the buffers goes through `_lock`.
    """

    def __init__(self, capacity: int = METRICS_CAPACITY, *, clock: Callable[[], float] = _epoch_ms):
        self._api: deque[ApiMetric] = deque(maxlen=int(capacity))
        self._db: deque[DbMetric] = deque(maxlen=int(capacity))
        self._lock = threading.Lock()
        self._clock = clock

    def track_api(
        self,
        method: str,
        url: str,
        response_time_ms: float,
        status_code: int,
        user_agent: Optional[str] = None,
    ) -> None:
        metric = ApiMetric(
            timestamp=self._clock(),
            method=method,
            url=url,
            response_time=float(response_time_ms),
            status_code=int(status_code),
            user_agent=user_agent,
        )
        with self._lock:
            self._api.append(metric)

        if response_time_ms > SLOW_REQUEST_MS:
            logger.warning("Slow API request: %s %s - %dms", method, url, response_time_ms)

    def track_db_query(self, query: str, duration_ms: float, success: bool = True) -> None:
        metric = DbMetric(
            timestamp=self._clock(),
            query=query[:METRICS_QUERY_MAX_LEN],
            duration=float(duration_ms),
            success=bool(success),
        )
        with self._lock:
            self._db.append(metric)

        if duration_ms > SLOW_QUERY_MS:
            logger.warning("Slow DB query: %s... - %dms", query[:50], duration_ms)

    def api_stats(self, window_ms: int = METRICS_WINDOW_MS) -> dict:
        cutoff = self._clock() - window_ms
        with self._lock:
            recent = [m for m in self._api if m.timestamp > cutoff]

        if not recent:
            return {
                "totalRequests": 0,
                "averageResponseTime": 0,
                "slowRequests": 0,
                "errorRate": 0,
                "requestsPerMinute": 0,
            }

        total = len(recent)
        average = sum(m.response_time for m in recent) / total
        errors = sum(1 for m in recent if m.status_code >= 400)
        return {
            "totalRequests": total,
            "averageResponseTime": round(average),
            "slowRequests": sum(1 for m in recent if m.response_time > SLOW_REQUEST_MS),
            "errorRate": round(errors / total * 100, 2),
            "requestsPerMinute": round(total / (window_ms / 60_000), 2),
        }

    def db_stats(self, window_ms: int = METRICS_WINDOW_MS) -> dict:
        cutoff = self._clock() - window_ms
        with self._lock:
            recent = [m for m in self._db if m.timestamp > cutoff]

        if not recent:
            return {"totalQueries": 0, "averageQueryTime": 0, "slowQueries": 0, "failedQueries": 0}

        total = len(recent)
        return {
            "totalQueries": total,
            "averageQueryTime": round(sum(m.duration for m in recent) / total),
            "slowQueries": sum(1 for m in recent if m.duration > SLOW_QUERY_MS),
            "failedQueries": sum(1 for m in recent if not m.success),
        }

    def recent_api(self, limit: int = METRICS_RECENT_LIMIT) -> list[ApiMetric]:
        """Newest first."""
        with self._lock:
            items = list(self._api)
        return items[::-1][:limit]

    def recent_db(self, limit: int = METRICS_RECENT_LIMIT) -> list[DbMetric]:
        with self._lock:
            items = list(self._db)
        return items[::-1][:limit]
