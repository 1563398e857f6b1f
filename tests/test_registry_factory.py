"""Registry factory and Storehouse composition."""

import pytest

from helpers import SimpleManager
from storehouse import (
    InvalidManagerConfigError,
    ManagerAlreadyExistsError,
    ManagerFactory,
    ManagerTypeNotFoundError,
    MapManager,
    Registry,
    RegistryFactory,
    Storehouse,
)


class TestRegistryFactory:

    def test_builds_registry_from_settings(self):
        factory = RegistryFactory()
        factory.get_manager_factory().set_manager_type(MapManager)

        registry = factory.get_registry({
            'main': {'type': 'mapping'},
            'cache': {'type': 'mapping', 'name': 'custom', 'config': {'size': 1}},
        })

        assert isinstance(registry, Registry)
        assert registry.manager_names == ['main', 'cache']
        assert registry.default_manager == 'main'
        assert registry.get_manager('main').name == 'main'
        assert registry.get_manager('cache').name == 'custom'
        assert registry.get_manager('cache').config == {'size': 1}

    def test_each_call_returns_a_fresh_registry(self):
        factory = RegistryFactory()
        factory.get_manager_factory().set_manager_type(MapManager)
        settings = {'main': {'type': 'mapping'}}
        assert factory.get_registry(settings) is not factory.get_registry(settings)

    def test_uses_given_manager_factory(self):
        manager_factory = ManagerFactory().set_manager_type(SimpleManager)
        factory = RegistryFactory(manager_factory)
        assert factory.get_manager_factory() is manager_factory
        registry = factory.get_registry({'plain': {'type': 'SimpleManager'}})
        assert isinstance(registry.get_manager('plain'), SimpleManager)

    def test_unknown_type_fails_before_registry_exists(self):
        with pytest.raises(ManagerTypeNotFoundError):
            RegistryFactory().get_registry({'main': {'type': 'mapping'}})


class TestStorehouse:

    def test_add_builds_and_registers(self):
        storehouse = Storehouse().set_manager_type(MapManager)
        result = storehouse.add({'main': {'type': 'mapping'}, 'other': {'type': MapManager}})

        assert result is storehouse
        assert storehouse.manager_names == ['main', 'other']
        assert storehouse.get_model('users') == {}

    def test_add_rejects_duplicates(self):
        storehouse = Storehouse().set_manager_type(MapManager)
        storehouse.add({'main': {'type': 'mapping'}})
        with pytest.raises(ManagerAlreadyExistsError):
            storehouse.add({'main': {'type': 'mapping'}})

    def test_add_stops_at_invalid_settings(self):
        storehouse = Storehouse().set_manager_type(MapManager)
        with pytest.raises(InvalidManagerConfigError):
            storehouse.add({'first': {'type': 'mapping'}, 'second': {}})
        assert storehouse.manager_names == ['first']

    def test_instances_are_independent(self):
        first = Storehouse().set_manager_type(MapManager)
        second = Storehouse()
        first.add({'main': {'type': 'mapping'}})

        assert second.manager_names == []
        assert not second.manager_factory.has_manager_type('mapping')

    @pytest.mark.asyncio
    async def test_is_a_full_registry(self):
        storehouse = Storehouse(managers={'seed': SimpleManager('seed')})
        assert storehouse.default_manager == 'seed'
        assert await storehouse.destroy() == 1
