"""
Managers Module
Manager contract, factory and bundled manager implementations.
"""

from .base import (
    ConnectionStatus,
    HealthCheckable,
    HealthCheckResult,
    Manager,
    ModelProvider,
    get_capability,
    now_ms,
)
from .factory import ManagerFactory, get_type_tag
from .map_manager import MapManager

try:
    from .postgres_manager import PostgresManager
    POSTGRES_MANAGER_AVAILABLE = True
except ImportError:
    POSTGRES_MANAGER_AVAILABLE = False
    PostgresManager = None


__all__ = [
    'ConnectionStatus',
    'HealthCheckable',
    'HealthCheckResult',
    'Manager',
    'ModelProvider',
    'get_capability',
    'now_ms',
    'ManagerFactory',
    'get_type_tag',
    'MapManager',
    'PostgresManager',
    'POSTGRES_MANAGER_AVAILABLE',
]
