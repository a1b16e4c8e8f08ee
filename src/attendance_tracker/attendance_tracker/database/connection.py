from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import mysql.connector

if TYPE_CHECKING:
    from ..metrics.monitor import MetricsObserver


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class DatabaseConnection:
    """DB connection factory, one per process.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    The optional observer receives the duration/outcome of every labelled query.
    """

    def __init__(self, config: DBConfig, observer: Optional["MetricsObserver"] = None):
        self._config = config
        self.observer = observer

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
