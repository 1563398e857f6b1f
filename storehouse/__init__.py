"""
Storehouse - Registry of named resource managers
Uniform lookup, connect, close, destroy and health-check across managers.
"""

__version__ = "1.0.0"

from .errors import (
    CloseConnectionsError,
    ConnectionFailedError,
    InvalidManagerConfigError,
    ManagerAlreadyExistsError,
    ManagerNotFoundError,
    ManagerTypeNotFoundError,
    ModelNotFoundError,
    StorehouseError,
)
from .events import EventEmitter, RegistryEvent
from .managers import (
    HealthCheckResult,
    Manager,
    ManagerFactory,
    MapManager,
)
from .registry import DEFAULT_MANAGER_NAME, Registry
from .registry_factory import RegistryFactory, Storehouse

__all__ = [
    # Errors
    'StorehouseError',
    'CloseConnectionsError',
    'ConnectionFailedError',
    'InvalidManagerConfigError',
    'ManagerAlreadyExistsError',
    'ManagerNotFoundError',
    'ManagerTypeNotFoundError',
    'ModelNotFoundError',
    # Events
    'EventEmitter',
    'RegistryEvent',
    # Managers
    'HealthCheckResult',
    'Manager',
    'ManagerFactory',
    'MapManager',
    # Registry
    'DEFAULT_MANAGER_NAME',
    'Registry',
    'RegistryFactory',
    'Storehouse',
]
