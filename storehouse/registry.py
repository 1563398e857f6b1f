"""
Registry - Named access to a set of interchangeable managers

Keeps a name -> manager mapping and a default name, forwards lifecycle
operations (connect, close, health check) to the managers, and emits a
RegistryEvent around every state transition.

Example:
    registry = Registry()
    registry.add_manager('main', PostgresManager(config=db_config))
    pool = registry.get_connection('main')
    await registry.destroy()
"""

import inspect
import logging
import threading
from typing import Any, Dict, List, Mapping, Optional

from .errors import (
    CloseConnectionsError,
    InvalidManagerConfigError,
    ManagerAlreadyExistsError,
    ManagerNotFoundError,
    ModelNotFoundError,
)
from .events import EventEmitter, RegistryEvent
from .managers.base import HealthCheckResult, get_capability, now_ms

logger = logging.getLogger(__name__)

DEFAULT_MANAGER_NAME = 'default'


async def _resolve(result: Any) -> Any:
    """Await result if the manager returned an awaitable"""
    if inspect.isawaitable(result):
        return await result
    return result


class Registry(EventEmitter):
    """
    Registry of named managers.

    Lookups and registration are synchronous; operations that reach a
    manager's close or health check are coroutines. Managers are closed
    strictly one after another. The mapping and default name are guarded
    by a reentrant lock. The lock is never held across an await, nor while
    listeners or manager methods run.
    """

    def __init__(self, managers: Optional[Mapping[str, Any]] = None):
        """
        Args:
            managers: Initial name -> manager mapping (optional)
        """
        super().__init__()
        self._managers: Dict[str, Any] = {}
        self._default_manager: Optional[str] = None
        self._lock = threading.RLock()

        if managers:
            self.add_managers(managers)

    @property
    def default_manager(self) -> str:
        """Assigned default name, or 'default' when none was ever assigned"""
        with self._lock:
            return self._default_manager or DEFAULT_MANAGER_NAME

    @default_manager.setter
    def default_manager(self, name: str):
        with self._lock:
            previous = self._default_manager
            self._default_manager = name
        logger.info(f'Set default manager as "{name}"')
        self.emit(RegistryEvent.DEFAULT_CHANGED, {'previous': previous, 'current': name})

    @property
    def manager_names(self) -> List[str]:
        with self._lock:
            return list(self._managers)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_manager(self, name: str, manager: Any):
        """
        Register manager under name.

        The first manager registered while no default is set becomes the
        default. 'manager:before:add' is emitted before validation.
        Listeners run after the lock is released.

        Raises:
            InvalidManagerConfigError: If name is empty or not a string, or
                                       manager has no get_connection()
            ManagerAlreadyExistsError: If name is already registered
        """
        self.emit(RegistryEvent.MANAGER_BEFORE_ADD, {'name': name, 'manager': manager})

        if not name or not isinstance(name, str):
            raise InvalidManagerConfigError('Manager name must be a non-empty string')
        if manager is None or isinstance(manager, (type, str, bytes, int, float)):
            raise InvalidManagerConfigError('Manager must be a valid object')
        if get_capability(manager, 'get_connection') is None:
            raise InvalidManagerConfigError('Manager must implement get_connection method')

        default_changed = None
        with self._lock:
            if name in self._managers:
                raise ManagerAlreadyExistsError(name)

            self._managers[name] = manager
            if not self._default_manager:
                default_changed = {'previous': self._default_manager, 'current': name}
                self._default_manager = name

        if default_changed is not None:
            logger.info(f'Set default manager as "{name}"')
            self.emit(RegistryEvent.DEFAULT_CHANGED, default_changed)
        self.emit(RegistryEvent.MANAGER_ADDED, {'name': name, 'manager': manager})

    def add_managers(self, managers: Mapping[str, Any]):
        """
        Register every entry of managers in order.
        A failure stops the batch; entries already added stay registered.
        """
        for name, manager in managers.items():
            self.add_manager(name, manager)

    def has_manager(self, name: str) -> bool:
        with self._lock:
            return name in self._managers

    def get_manager(self, name: Optional[str] = None, throw_on_missing: bool = False) -> Optional[Any]:
        """
        Look up a manager.

        Args:
            name: Manager name, defaults to the default manager
            throw_on_missing: Raise instead of returning None

        Raises:
            ManagerNotFoundError: If throw_on_missing and nothing is registered
        """
        with self._lock:
            manager_name = name if name is not None else self.default_manager
            manager = self._managers.get(manager_name)

        if manager is None and throw_on_missing:
            raise ManagerNotFoundError(manager_name)
        return manager

    def get_default_manager(self) -> Optional[Any]:
        return self.get_manager()

    def remove_manager(self, name: str) -> Optional[Any]:
        """
        Detach a manager without closing it.

        Removing the current default moves the default to the first
        remaining manager, or unsets it when none is left.

        Returns:
            The removed manager, or None if name was not registered
        """
        default_changed = None
        with self._lock:
            if name not in self._managers:
                return None

            manager = self._managers.pop(name)
            if self._default_manager == name:
                successor = next(iter(self._managers), None)
                self._default_manager = successor
                default_changed = {'previous': name, 'current': successor}

        logger.info(f'Removed manager "{name}"')
        self.emit(RegistryEvent.MANAGER_REMOVED, {'name': name, 'manager': manager})

        if default_changed is not None:
            logger.info(f'Default manager moved from "{name}" to "{default_changed["current"]}"')
            self.emit(RegistryEvent.DEFAULT_CHANGED, default_changed)

        return manager

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------

    def get_default_connection(self) -> Optional[Any]:
        return self._access_connection(self.default_manager)

    def get_connection(self, name: Optional[str] = None) -> Optional[Any]:
        """Connection of the named manager, or of the default manager"""
        if name is None:
            return self.get_default_connection()
        return self._access_connection(name)

    def _access_connection(self, name: str) -> Optional[Any]:
        with self._lock:
            manager = self._managers.get(name)

        connection = manager.get_connection() if manager is not None else None
        self.emit(RegistryEvent.CONNECTION_ACCESSED, {
            'manager': name,
            'found': connection is not None
        })
        return connection

    async def close_default_connection(self) -> Optional[Any]:
        return await self._close_manager(self.default_manager)

    async def close_connection(self, name: Optional[str] = None) -> Optional[Any]:
        """
        Close the connection of the named manager, or of the default manager.
        Does nothing when the manager is not registered.

        Returns:
            Whatever the manager's close_connection() produced

        Raises:
            Exception: The manager's own error, after 'connection:error:close'
        """
        if name is None:
            return await self.close_default_connection()
        return await self._close_manager(name)

    async def _close_manager(self, name: str) -> Optional[Any]:
        with self._lock:
            manager = self._managers.get(name)
        if manager is None:
            return None

        self.emit(RegistryEvent.CONNECTION_BEFORE_CLOSE, {'manager': name})
        try:
            result = await _resolve(manager.close_connection())
        except Exception as e:
            logger.error(f'Error closing manager "{name}": {e}')
            self.emit(RegistryEvent.CONNECTION_ERROR_CLOSE, {'manager': name, 'error': e})
            raise

        self.emit(RegistryEvent.CONNECTION_CLOSED, {'manager': name})
        return result

    async def close_all_connections(self) -> int:
        """
        Close every registered manager in registration order.

        A failing manager does not stop the remaining closes.

        Returns:
            Number of managers closed

        Raises:
            CloseConnectionsError: If any manager failed, after
                                   'connections:closed:all'
        """
        self.emit(RegistryEvent.BEFORE_CLOSE_ALL)

        with self._lock:
            entries = list(self._managers.items())

        count = 0
        errors: Dict[str, BaseException] = {}
        for name, manager in entries:
            try:
                await _resolve(manager.close_connection())
            except Exception as e:
                logger.error(f'Error closing manager "{name}": {e}')
                errors[name] = e
                self.emit(RegistryEvent.CONNECTION_ERROR_CLOSE, {'manager': name, 'error': e})
                continue
            count += 1

        logger.info(f"Closed {count} manager(s)")
        self.emit(RegistryEvent.CLOSED_ALL, {'count': count, 'failed': list(errors)})

        if errors:
            raise CloseConnectionsError(errors, count)
        return count

    async def close(self) -> int:
        """Alias of close_all_connections()"""
        return await self.close_all_connections()

    async def destroy(self) -> int:
        """
        Close all connections, then remove every manager and reset the
        default name. The registry is empty afterwards even when a close
        failed; that failure is re-raised after 'registry:destroyed'.

        Returns:
            Number of managers closed
        """
        self.emit(RegistryEvent.BEFORE_DESTROY)

        error: Optional[CloseConnectionsError] = None
        try:
            count = await self.close_all_connections()
        except CloseConnectionsError as e:
            count = e.count
            error = e

        with self._lock:
            removed = len(self._managers)
            self._default_manager = None
            self._managers.clear()
        logger.info(f"Removed {removed} manager(s)")

        self.emit(RegistryEvent.DESTROYED, {'count': count})

        if error is not None:
            raise error
        return count

    # ------------------------------------------------------------------
    # Models and health
    # ------------------------------------------------------------------

    def get_model(self, manager_or_model: str, model: Optional[str] = None,
                  throw_on_missing: bool = False) -> Optional[Any]:
        """
        Get a model from a manager.

        get_model('users') looks in the default manager;
        get_model('main', 'users') looks in manager 'main'.

        Raises:
            ModelNotFoundError: If throw_on_missing and nothing was found
        """
        if model is None:
            manager_name = None
            model_name = manager_or_model
        else:
            manager_name = manager_or_model
            model_name = model

        getter = get_capability(self.get_manager(manager_name), 'get_model')
        result = getter(model_name) if getter is not None else None

        self.emit(RegistryEvent.MODEL_ACCESSED, {
            'manager': manager_name,
            'model': model_name,
            'found': result is not None
        })

        if result is None and throw_on_missing:
            raise ModelNotFoundError(model_name, manager_name or self.default_manager)
        return result

    def is_connected(self, name: Optional[str] = None) -> bool:
        """False when the manager is missing or cannot report its state"""
        check = get_capability(self.get_manager(name), 'is_connected')
        if check is None:
            return False

        result = check()
        if inspect.isawaitable(result):
            # is_connected() is part of the synchronous contract
            if inspect.iscoroutine(result):
                result.close()
            logger.warning(f'Manager "{name or self.default_manager}" returned an awaitable from is_connected()')
            return False
        return bool(result)

    async def health_check(self, name: Optional[str] = None) -> Optional[HealthCheckResult]:
        """None when the manager is missing or has no health_check()"""
        check = get_capability(self.get_manager(name), 'health_check')
        if check is None:
            return None
        return await _resolve(check())

    async def health_check_all(self) -> Dict[str, HealthCheckResult]:
        """
        Health check every manager that supports it.

        A manager whose check raises is reported as unhealthy; this method
        itself does not raise.

        Returns:
            Results keyed by manager name
        """
        with self._lock:
            entries = list(self._managers.items())

        results: Dict[str, HealthCheckResult] = {}
        for name, manager in entries:
            check = get_capability(manager, 'health_check')
            if check is None:
                continue
            try:
                results[name] = await _resolve(check())
            except Exception as e:
                logger.warning(f'Health check of manager "{name}" raised: {e}')
                results[name] = HealthCheckResult(
                    healthy=False,
                    message=f"Health check threw error: {e}",
                    timestamp=now_ms()
                )
        return results
