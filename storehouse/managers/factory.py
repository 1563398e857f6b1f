"""
Manager Factory - Builds managers from a type tag plus configuration

Settings are mappings with keys:
    type:   registered type tag (str) or a manager class
    config: manager specific configuration (optional)
    name:   manager name (optional)
"""

import logging
from typing import Any, Dict, List, Mapping, Type, Union

from ..errors import InvalidManagerConfigError, ManagerTypeNotFoundError

logger = logging.getLogger(__name__)

ManagerClass = Type[Any]


def get_type_tag(manager_class: ManagerClass) -> str:
    """Tag a manager class is registered under: its `type` attribute or its name"""
    return getattr(manager_class, 'type', None) or manager_class.__name__


class ManagerFactory:
    """
    Registry of manager classes keyed by type tag.

    Example:
        factory = ManagerFactory()
        factory.set_manager_type(PostgresManager).set_manager_type(MapManager)
        manager = factory.get_manager({'type': 'postgres', 'config': {...}})
    """

    def __init__(self):
        self._manager_classes: Dict[str, ManagerClass] = {}

    def get_manager(self, settings: Mapping[str, Any]) -> Any:
        """
        Create a manager instance.

        Args:
            settings: Mapping with 'type' and optional 'config' and 'name'

        Returns:
            New manager instance

        Raises:
            InvalidManagerConfigError: If settings are malformed or the
                                       constructor fails
            ManagerTypeNotFoundError: If a string type is not registered
        """
        if not isinstance(settings, Mapping):
            raise InvalidManagerConfigError('Manager factory settings must be a mapping')
        manager_type = settings.get('type')
        if not manager_type:
            raise InvalidManagerConfigError('Manager type is required')

        if isinstance(manager_type, str):
            manager_class = self._manager_classes.get(manager_type)
            if manager_class is None:
                raise ManagerTypeNotFoundError(manager_type)
        elif callable(manager_type):
            manager_class = manager_type
        else:
            raise InvalidManagerConfigError(
                f"Manager type must be a string or a class, got {type(manager_type).__name__}"
            )

        try:
            manager = manager_class(name=settings.get('name'), config=settings.get('config'))
        except Exception as e:
            raise InvalidManagerConfigError(f"Failed to instantiate manager: {e}") from e

        logger.debug(f"Created manager of type '{get_type_tag(manager_class)}'")
        return manager

    def set_manager_type(self, manager_class: ManagerClass) -> 'ManagerFactory':
        """
        Register a manager class under its type tag, replacing any class
        already registered under the same tag.

        Returns:
            This factory, for chaining
        """
        self._manager_classes[get_type_tag(manager_class)] = manager_class
        return self

    def remove_manager_type(self, manager_class: Union[ManagerClass, str]) -> bool:
        """
        Remove a registered manager type by class or tag.

        Returns:
            True if a type was removed
        """
        if isinstance(manager_class, str):
            tag = manager_class
        else:
            tag = get_type_tag(manager_class)
        return self._manager_classes.pop(tag, None) is not None

    def has_manager_type(self, tag: str) -> bool:
        return tag in self._manager_classes

    @property
    def manager_types(self) -> List[str]:
        return list(self._manager_classes)
