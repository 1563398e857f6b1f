"""
Configuration Module
Database and registry settings for the command-line entry point.
"""

import os
from typing import Any, Dict, Optional


class Config:
    """
    Unified configuration for the default manager.
    Every value comes from a constructor parameter, else an environment
    variable, else a default.
    """

    def __init__(
        self,
        db_host: Optional[str] = None,
        db_port: Optional[int] = None,
        db_name: Optional[str] = None,
        db_user: Optional[str] = None,
        db_password: Optional[str] = None,
        db_min_connections: Optional[int] = None,
        db_max_connections: Optional[int] = None,
        manager_name: Optional[str] = None,
        manager_type: Optional[str] = None
    ):
        # Database Configuration
        self.DB_HOST = db_host or os.getenv('DB_HOST', 'localhost')
        self.DB_PORT = db_port or int(os.getenv('DB_PORT', '5432'))
        self.DB_NAME = db_name or os.getenv('DB_NAME', 'postgres')
        self.DB_USER = db_user or os.getenv('DB_USER', 'postgres')
        self.DB_PASSWORD = db_password or os.getenv('DB_PASSWORD', '')

        # Connection Pool Settings
        self.DB_MIN_CONNECTIONS = db_min_connections or int(os.getenv('DB_MIN_CONNECTIONS', '1'))
        self.DB_MAX_CONNECTIONS = db_max_connections or int(os.getenv('DB_MAX_CONNECTIONS', '10'))

        # Registry Settings
        self.MANAGER_NAME = manager_name or os.getenv('STOREHOUSE_MANAGER_NAME', 'main')
        self.MANAGER_TYPE = manager_type or os.getenv('STOREHOUSE_MANAGER_TYPE', 'postgres')

    def get_db_config(self) -> Dict[str, Any]:
        """Get psycopg2 connection keywords."""
        return {
            'host': self.DB_HOST,
            'port': self.DB_PORT,
            'database': self.DB_NAME,
            'user': self.DB_USER,
            'password': self.DB_PASSWORD
        }

    def get_manager_settings(self) -> Dict[str, Dict[str, Any]]:
        """
        Get manager factory settings for the configured manager.

        Returns:
            {name: {'type', 'name', 'config'}} for RegistryFactory.get_registry
            or Storehouse.add
        """
        config = self.get_db_config()
        config['min_connections'] = self.DB_MIN_CONNECTIONS
        config['max_connections'] = self.DB_MAX_CONNECTIONS
        return {
            self.MANAGER_NAME: {
                'type': self.MANAGER_TYPE,
                'name': self.MANAGER_NAME,
                'config': config
            }
        }
