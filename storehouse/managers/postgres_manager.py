"""
Postgres Manager - PostgreSQL connection pool exposed through the manager contract
Thread-safe pool access, checkout/checkin and transaction helpers.
"""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

import psycopg2
from psycopg2 import pool

from ..errors import ConnectionFailedError
from .base import ConnectionStatus, HealthCheckable, HealthCheckResult, Manager

logger = logging.getLogger(__name__)

DEFAULT_MIN_CONNECTIONS = 1
DEFAULT_MAX_CONNECTIONS = 10


class PostgresManager(Manager, ConnectionStatus, HealthCheckable):
    """
    Manages a psycopg2 ThreadedConnectionPool.

    get_connection() returns the pool itself; use connection() or
    transaction() to borrow a single database connection.
    """

    type = 'postgres'

    def __init__(self, name: Optional[str] = None, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the manager and open its pool.

        Args:
            name: Manager name, used in log messages
            config: psycopg2 connection keywords (host, port, database, user,
                    password, ...) plus optional min_connections and
                    max_connections pool sizes

        Raises:
            ConnectionFailedError: If the pool cannot be created
        """
        self.name = name or self.type
        db_config = dict(config or {})
        self.min_connections = int(db_config.pop('min_connections', DEFAULT_MIN_CONNECTIONS))
        self.max_connections = int(db_config.pop('max_connections', DEFAULT_MAX_CONNECTIONS))
        self.db_config = db_config

        self.connection_pool: Optional[pool.ThreadedConnectionPool] = None
        self._lock = threading.RLock()

        self._init_connection_pool()

    def _init_connection_pool(self):
        """Initialize connection pool"""
        try:
            self.connection_pool = pool.ThreadedConnectionPool(
                minconn=self.min_connections,
                maxconn=self.max_connections,
                **self.db_config
            )
        except psycopg2.Error as e:
            raise ConnectionFailedError(
                f"Failed to create connection pool for '{self.name}': {e}", cause=e
            ) from e
        logger.info(f"[{self.name}] Connection pool ready "
                    f"({self.min_connections}-{self.max_connections} connections)")

    def get_connection(self) -> Optional[pool.ThreadedConnectionPool]:
        with self._lock:
            return self.connection_pool

    @contextmanager
    def connection(self):
        """
        Borrow a connection from the pool.
        The pool is reopened if it was closed.

        Yields:
            Database connection, returned to the pool on exit
        """
        with self._lock:
            if self.connection_pool is None or self.connection_pool.closed:
                self._init_connection_pool()
            conn = self.connection_pool.getconn()
        try:
            yield conn
        finally:
            with self._lock:
                if self.connection_pool is not None and not self.connection_pool.closed:
                    self.connection_pool.putconn(conn)

    @contextmanager
    def transaction(self, isolation_level: Optional[int] = None):
        """
        Context manager for database transactions.
        Commits on success, rolls back on exception.

        Args:
            isolation_level: psycopg2 isolation level (optional)

        Yields:
            Database connection

        Example:
            with manager.transaction() as conn:
                cursor = conn.cursor()
                cursor.execute("INSERT INTO ...")
        """
        with self.connection() as conn:
            try:
                if isolation_level is not None:
                    conn.set_isolation_level(isolation_level)

                yield conn
                conn.commit()

            except Exception:
                conn.rollback()
                raise

    def close_connection(self):
        """Close all connections in pool"""
        with self._lock:
            if self.connection_pool is not None and not self.connection_pool.closed:
                self.connection_pool.closeall()
                logger.info(f"[{self.name}] Connection pool closed")
            self.connection_pool = None

    def is_connected(self) -> bool:
        with self._lock:
            return self.connection_pool is not None and not self.connection_pool.closed

    def health_check(self) -> HealthCheckResult:
        """
        Run SELECT 1 through the pool.

        Returns:
            Healthy result with latency in milliseconds, or an unhealthy
            result carrying the driver error
        """
        if not self.is_connected():
            return HealthCheckResult(healthy=False, message='Connection pool is closed')

        started = time.perf_counter()
        try:
            with self.connection() as conn:
                cursor = conn.cursor()
                try:
                    cursor.execute("SELECT 1")
                    cursor.fetchone()
                finally:
                    cursor.close()
        except psycopg2.Error as e:
            logger.warning(f"[{self.name}] Health check failed: {e}")
            return HealthCheckResult(
                healthy=False,
                message=f"Health check failed: {e}",
                details={'error_type': type(e).__name__}
            )

        latency = (time.perf_counter() - started) * 1000
        return HealthCheckResult(
            healthy=True,
            message='PostgreSQL is responding',
            details=self.get_stats(),
            latency=round(latency, 3)
        )

    def get_stats(self) -> Dict[str, Any]:
        """
        Get connection pool statistics.

        Returns:
            Dict with pool stats
        """
        # ThreadedConnectionPool doesn't expose usage counters
        return {
            'min_connections': self.min_connections,
            'max_connections': self.max_connections,
            'initialized': self.is_connected()
        }
