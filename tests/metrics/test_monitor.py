from __future__ import annotations

import pytest

from src.attendance_tracker.attendance_tracker.metrics.monitor import PerformanceMonitor


class StepClock:
    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def clock():
    return StepClock()


def test_buffers_are_capped(clock):
    monitor = PerformanceMonitor(3, clock=clock)
    for i in range(5):
        monitor.track_api("GET", f"/api/employees/{i}", 10, 200)
        monitor.track_db_query(f"query {i}", 1)

    assert [m.url for m in monitor.recent_api(10)] == ["/api/employees/4", "/api/employees/3", "/api/employees/2"]
    assert len(monitor.recent_db(10)) == 3


def test_recent_is_newest_first_and_limited(clock):
    monitor = PerformanceMonitor(clock=clock)
    for i in range(4):
        clock.now += 1
        monitor.track_db_query(f"q{i}", 2)

    assert [m.query for m in monitor.recent_db(2)] == ["q3", "q2"]


def test_query_text_is_truncated(clock):
    monitor = PerformanceMonitor(clock=clock)
    monitor.track_db_query("SELECT " + "x" * 500, 3)

    assert len(monitor.recent_db(1)[0].query) == 100


def test_api_stats_within_window(clock):
    monitor = PerformanceMonitor(clock=clock)
    monitor.track_api("GET", "/old", 5000, 500)
    clock.now += 400_000
    monitor.track_api("GET", "/api/employees", 100, 200)
    monitor.track_api("POST", "/api/employees/x/toggle-attendance", 1500, 404)

    stats = monitor.api_stats(300_000)

    assert stats["totalRequests"] == 2
    assert stats["averageResponseTime"] == 800
    assert stats["slowRequests"] == 1
    assert stats["errorRate"] == 50.0
    assert stats["requestsPerMinute"] == 0.4


def test_empty_stats_are_zero(clock):
    monitor = PerformanceMonitor(clock=clock)

    assert monitor.api_stats()["totalRequests"] == 0
    assert monitor.db_stats() == {"totalQueries": 0, "averageQueryTime": 0, "slowQueries": 0, "failedQueries": 0}


def test_db_stats(clock):
    monitor = PerformanceMonitor(clock=clock)
    monitor.track_db_query("a", 100)
    monitor.track_db_query("b", 700)
    monitor.track_db_query("c", 10, success=False)

    stats = monitor.db_stats()

    assert stats["totalQueries"] == 3
    assert stats["averageQueryTime"] == 270
    assert stats["slowQueries"] == 1
    assert stats["failedQueries"] == 1


def test_metric_to_dict_uses_camel_case(clock):
    monitor = PerformanceMonitor(clock=clock)
    monitor.track_api("GET", "/api/attendance/stats", 12.4, 200, "pytest")

    assert monitor.recent_api(1)[0].to_dict() == {
        "timestamp": 1_000_000,
        "method": "GET",
        "url": "/api/attendance/stats",
        "responseTime": 12,
        "statusCode": 200,
        "userAgent": "pytest",
    }
