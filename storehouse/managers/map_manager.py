"""
Map Manager - In-memory manager backed by plain dicts
Each model is a dict created on first access.
"""
import threading
from typing import Any, Dict, Optional

from .base import (
    ConnectionStatus,
    HealthCheckable,
    HealthCheckResult,
    Manager,
    ModelProvider,
)


class MapManager(Manager, ModelProvider, ConnectionStatus, HealthCheckable):
    type = 'mapping'

    def __init__(self, name: Optional[str] = None, config: Optional[Dict[str, Any]] = None):
        self.name = name
        self.config = config or {}
        self._models: Dict[str, Dict[str, Any]] = {}
        self._closed = False
        self._lock = threading.RLock()

    def get_connection(self) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            return self._models

    def close_connection(self):
        with self._lock:
            self._models.clear()
            self._closed = True

    def get_model(self, name: str) -> Dict[str, Any]:
        with self._lock:
            if name not in self._models:
                self._models[name] = {}
            return self._models[name]

    def is_connected(self) -> bool:
        with self._lock:
            return not self._closed

    def health_check(self) -> HealthCheckResult:
        with self._lock:
            if self._closed:
                return HealthCheckResult(healthy=False, message='Map manager is closed')
            return HealthCheckResult(
                healthy=True,
                message='Map manager is open',
                details={'models': len(self._models)},
                latency=0.0
            )

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                'models': len(self._models),
                'closed': self._closed
            }
