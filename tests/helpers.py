"""Test managers covering every combination of optional capabilities."""

from storehouse.managers import HealthCheckResult, Manager, now_ms


class SimpleManager(Manager):
    """Only the required capabilities; appends its name to close_log on close."""

    def __init__(self, name=None, config=None, close_log=None, connection=None):
        self.name = name
        self.config = config
        self.close_log = close_log if close_log is not None else []
        self.connection = connection if connection is not None else {'ok': True}
        self.close_calls = 0

    def get_connection(self):
        return self.connection

    def close_connection(self):
        self.close_calls += 1
        self.close_log.append(self.name)
        return f"closed {self.name}"


class AsyncCloseManager(SimpleManager):
    async def close_connection(self):
        self.close_calls += 1
        self.close_log.append(self.name)
        return f"async closed {self.name}"


class FailingCloseManager(SimpleManager):
    async def close_connection(self):
        self.close_calls += 1
        raise RuntimeError(f"cannot close {self.name}")


class HealthyManager(SimpleManager):
    def is_connected(self):
        return True

    async def health_check(self):
        return HealthCheckResult(healthy=True, message='All good', latency=10, timestamp=now_ms())


class UnhealthyManager(SimpleManager):
    def is_connected(self):
        return False

    def health_check(self):
        return HealthCheckResult(healthy=False, message='Connection failed')


class ErrorHealthManager(SimpleManager):
    async def health_check(self):
        raise RuntimeError('Health check failed')


class SyncErrorHealthManager(SimpleManager):
    def health_check(self):
        raise ValueError('Status query failed')


class ModelManager(SimpleManager):
    def __init__(self, name=None, config=None, **kwargs):
        super().__init__(name, config, **kwargs)
        self.models = {'users': {'alice': 1}}

    def get_model(self, name):
        return self.models.get(name)


class DuckManager:
    """Satisfies the contract without inheriting from Manager."""

    def get_connection(self):
        return 'duck'

    def close_connection(self):
        pass
