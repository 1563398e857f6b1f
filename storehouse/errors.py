"""
Storehouse Errors - Exception taxonomy for the registry and manager factory
"""

from typing import Dict, Optional


class StorehouseError(Exception):
    """Base class for every error raised by storehouse"""


class ManagerAlreadyExistsError(StorehouseError):
    """Raised when a manager name is registered twice"""

    def __init__(self, manager_name: str):
        self.manager_name = manager_name
        super().__init__(f'Manager "{manager_name}" already exists!')


class ManagerNotFoundError(StorehouseError):
    """Raised when a manager lookup is required to succeed but nothing is registered"""

    def __init__(self, manager_name: str):
        self.manager_name = manager_name
        super().__init__(f'Manager "{manager_name}" not found')


class ManagerTypeNotFoundError(StorehouseError):
    """Raised by the factory for a string type with no registered class"""

    def __init__(self, manager_type: str):
        self.manager_type = manager_type
        super().__init__(f'Property "type" with value "{manager_type}" is not supported!')


class ModelNotFoundError(StorehouseError):
    """Raised when a model lookup is required to succeed but returns nothing"""

    def __init__(self, model_name: str, manager_name: Optional[str] = None):
        self.model_name = model_name
        self.manager_name = manager_name
        if manager_name:
            message = f'Model "{model_name}" not found in manager "{manager_name}"'
        else:
            message = f'Model "{model_name}" not found'
        super().__init__(message)


class InvalidManagerConfigError(StorehouseError):
    """Raised for malformed registration input or factory settings"""

    def __init__(self, message: str):
        super().__init__(f"Invalid manager configuration: {message}")


class ConnectionFailedError(StorehouseError):
    """
    Raised when a manager cannot open its underlying connection.

    Args:
        message: Error message
        cause: Driver error that caused the failure (optional)
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class CloseConnectionsError(StorehouseError):
    """
    Raised after a bulk close in which one or more managers failed.

    Args:
        errors: Failures keyed by manager name, in close order
        count: Number of managers closed successfully
    """

    def __init__(self, errors: Dict[str, BaseException], count: int):
        self.errors = errors
        self.count = count
        names = ", ".join(errors)
        super().__init__(f"Failed to close {len(errors)} connection(s): {names}")
