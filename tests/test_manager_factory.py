"""Manager factory type registry and construction."""

import pytest

from helpers import SimpleManager
from storehouse import (
    InvalidManagerConfigError,
    ManagerFactory,
    ManagerTypeNotFoundError,
    MapManager,
)


@pytest.fixture
def factory():
    return ManagerFactory()


class TestGetManagerValidation:

    @pytest.mark.parametrize('settings', [None, 'mapping', ['mapping']])
    def test_rejects_non_mapping(self, factory, settings):
        with pytest.raises(InvalidManagerConfigError, match='must be a mapping'):
            factory.get_manager(settings)

    def test_requires_type(self, factory):
        with pytest.raises(InvalidManagerConfigError, match='Manager type is required'):
            factory.get_manager({})

    def test_unregistered_string_type(self, factory):
        with pytest.raises(ManagerTypeNotFoundError,
                           match='Property "type" with value "unknown" is not supported!') as exc_info:
            factory.get_manager({'type': 'unknown'})
        assert exc_info.value.manager_type == 'unknown'

    def test_rejects_non_class_type(self, factory):
        with pytest.raises(InvalidManagerConfigError, match='string or a class'):
            factory.get_manager({'type': 42})


class TestSetManagerType:

    def test_registers_by_type_attribute(self, factory):
        factory.set_manager_type(MapManager)
        assert isinstance(factory.get_manager({'type': 'mapping'}), MapManager)
        assert factory.has_manager_type('mapping')

    def test_registers_by_class_name_without_type(self, factory):
        factory.set_manager_type(SimpleManager)
        assert factory.manager_types == ['SimpleManager']
        assert isinstance(factory.get_manager({'type': 'SimpleManager'}), SimpleManager)

    def test_chaining(self, factory):
        assert factory.set_manager_type(MapManager) is factory

    def test_later_registration_overrides(self, factory):
        class First(MapManager):
            type = 'test'

        class Second(MapManager):
            type = 'test'

        factory.set_manager_type(First).set_manager_type(Second)
        assert isinstance(factory.get_manager({'type': 'test'}), Second)


class TestRemoveManagerType:

    def test_remove_by_tag(self, factory):
        factory.set_manager_type(MapManager)
        assert factory.remove_manager_type('mapping') is True
        with pytest.raises(ManagerTypeNotFoundError):
            factory.get_manager({'type': 'mapping'})

    def test_remove_by_class(self, factory):
        factory.set_manager_type(MapManager)
        assert factory.remove_manager_type(MapManager) is True
        assert factory.manager_types == []

    def test_remove_unknown(self, factory):
        assert factory.remove_manager_type('nonexistent') is False


class TestGetManagerWithClass:

    def test_builds_from_class_directly(self, factory):
        assert isinstance(factory.get_manager({'type': MapManager}), MapManager)

    def test_passes_name_and_config(self, factory):
        manager = factory.get_manager({
            'type': MapManager,
            'name': 'testManager',
            'config': {'message': 'hello'}
        })
        assert manager.name == 'testManager'
        assert manager.config == {'message': 'hello'}

    def test_constructor_failure_is_wrapped(self, factory):
        class BrokenManager:
            def __init__(self, name=None, config=None):
                raise ValueError('Constructor failed')

        with pytest.raises(InvalidManagerConfigError,
                           match='Failed to instantiate manager: Constructor failed') as exc_info:
            factory.get_manager({'type': BrokenManager})
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_registered_constructor_failure_is_wrapped(self, factory):
        class BrokenManager:
            type = 'broken'

            def __init__(self, name=None, config=None):
                raise ValueError('boom')

        factory.set_manager_type(BrokenManager)
        with pytest.raises(InvalidManagerConfigError, match='boom'):
            factory.get_manager({'type': 'broken'})
