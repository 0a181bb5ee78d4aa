"""
Configuration module for settings and service connections.
"""
from .settings import Settings, get_settings
from .database import (
    PostgresConfig,
    SearchConfig,
    get_postgres_config,
    get_search_config,
    create_postgres_pool,
    create_search_client,
)

__all__ = [
    'Settings',
    'get_settings',
    'PostgresConfig',
    'SearchConfig',
    'get_postgres_config',
    'get_search_config',
    'create_postgres_pool',
    'create_search_client',
]
