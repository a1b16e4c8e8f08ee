from __future__ import annotations

import time

from flask import Flask, g, jsonify, request

from ..common.http import json_error
from ..common.validators import positive_int
from ..core.constants import METRICS_RECENT_LIMIT, METRICS_WINDOW_MS
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    monitor = container.monitor

    @app.before_request
    def _start_timer():
        g._request_started = time.perf_counter()

    @app.after_request
    def _record_timing(response):
        started = g.pop("_request_started", None)
        if started is not None:
            monitor.track_api(
                request.method,
                request.full_path.rstrip("?"),
                (time.perf_counter() - started) * 1000.0,
                response.status_code,
                request.headers.get("User-Agent"),
            )
        return response

    @app.route("/api/performance/stats", methods=["GET"], endpoint="performance_stats")
    def performance_stats():
        try:
            window = positive_int(request.args.get("window"), "window", METRICS_WINDOW_MS)
            return jsonify(
                {
                    "api": monitor.api_stats(window),
                    "database": monitor.db_stats(window),
                    "timestamp": int(time.time() * 1000),
                }
            )
        except DomainError as e:
            return json_error(e, "Failed to fetch performance stats")

    @app.route("/api/performance/metrics", methods=["GET"], endpoint="performance_metrics")
    def performance_metrics():
        try:
            limit = positive_int(request.args.get("limit"), "limit", METRICS_RECENT_LIMIT)
            return jsonify(
                {
                    "api": [m.to_dict() for m in monitor.recent_api(limit)],
                    "database": [m.to_dict() for m in monitor.recent_db(limit)],
                }
            )
        except DomainError as e:
            return json_error(e, "Failed to fetch performance metrics")
