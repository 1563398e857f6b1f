"""
Registry Factory - Builds registries from manager settings
"""

from typing import Any, Dict, Mapping, Optional

from .managers.factory import ManagerClass, ManagerFactory
from .registry import Registry


def _named(name: str, settings: Any) -> Any:
    """Settings with 'name' filled in from the registry key when missing"""
    if isinstance(settings, Mapping) and settings.get('name') is None:
        return {**settings, 'name': name}
    return settings


def _build_managers(factory: ManagerFactory, settings_map: Mapping[str, Mapping[str, Any]]) -> Dict[str, Any]:
    return {
        name: factory.get_manager(_named(name, settings))
        for name, settings in settings_map.items()
    }


class RegistryFactory:
    """
    Creates Registry instances with managers built by a ManagerFactory.

    Example:
        factory = RegistryFactory()
        factory.get_manager_factory().set_manager_type(PostgresManager)
        registry = factory.get_registry({
            'main': {'type': 'postgres', 'config': {...}}
        })
    """

    def __init__(self, manager_factory: Optional[ManagerFactory] = None):
        self._manager_factory = manager_factory or ManagerFactory()

    def get_manager_factory(self) -> ManagerFactory:
        return self._manager_factory

    def get_registry(self, settings_map: Mapping[str, Mapping[str, Any]]) -> Registry:
        """
        Build every manager of settings_map, then a new Registry holding them.
        An entry without 'name' is named after its key.
        """
        return Registry(_build_managers(self._manager_factory, settings_map))


class Storehouse(Registry):
    """
    Registry with an attached manager factory.

    Create one in the application's composition root and pass it to the
    code that needs it.

    Example:
        storehouse = Storehouse().set_manager_type(PostgresManager)
        storehouse.add({'main': {'type': 'postgres', 'config': {...}}})
    """

    def __init__(self, manager_factory: Optional[ManagerFactory] = None,
                 managers: Optional[Mapping[str, Any]] = None):
        super().__init__(managers)
        self._manager_factory = manager_factory or ManagerFactory()

    @property
    def manager_factory(self) -> ManagerFactory:
        return self._manager_factory

    def set_manager_type(self, manager_class: ManagerClass) -> 'Storehouse':
        self._manager_factory.set_manager_type(manager_class)
        return self

    def add(self, settings_map: Mapping[str, Mapping[str, Any]]) -> 'Storehouse':
        """
        Build and register one manager per entry, in order.
        Registration stops at the first failure.
        """
        for name, settings in settings_map.items():
            self.add_manager(name, self._manager_factory.get_manager(_named(name, settings)))
        return self
