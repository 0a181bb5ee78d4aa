"""
Connection Configuration
========================

Centralized connection configuration for the record store (PostgreSQL)
and the search index (Elasticsearch).

Both handles are created once per process and injected into the
repositories and services that use them.
"""
from typing import Optional
from dataclasses import dataclass

from devblog.config.settings import Settings, get_settings


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""
    dsn: str
    min_size: int = 2
    max_size: int = 10

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'PostgresConfig':
        """Create config from application settings."""
        settings = settings or get_settings()
        return cls(
            dsn=settings.database_url,
            min_size=settings.postgres_pool_min_size,
            max_size=settings.postgres_pool_max_size,
        )

    def to_asyncpg_kwargs(self) -> dict:
        """Convert to asyncpg.create_pool kwargs."""
        return {
            'dsn': self.dsn,
            'min_size': self.min_size,
            'max_size': self.max_size,
        }


@dataclass
class SearchConfig:
    """Elasticsearch connection configuration."""
    url: str
    index_name: str = "blog"
    timeout: float = 10.0

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'SearchConfig':
        """Create config from application settings."""
        settings = settings or get_settings()
        if not settings.elasticsearch_url:
            raise ValueError("ELASTICSEARCH_URL must be set")

        return cls(
            url=settings.elasticsearch_url,
            index_name=settings.search_index_name,
            timeout=settings.search_timeout_seconds,
        )


def get_postgres_config(settings: Optional[Settings] = None) -> PostgresConfig:
    """Get PostgreSQL configuration from settings."""
    return PostgresConfig.from_settings(settings)


def get_search_config(settings: Optional[Settings] = None) -> SearchConfig:
    """Get Elasticsearch configuration from settings."""
    return SearchConfig.from_settings(settings)


async def create_postgres_pool(settings: Optional[Settings] = None):
    """Create PostgreSQL connection pool from settings."""
    import asyncpg
    config = get_postgres_config(settings)
    return await asyncpg.create_pool(**config.to_asyncpg_kwargs())


async def create_search_client(settings: Optional[Settings] = None):
    """Create and connect the Elasticsearch client from settings."""
    from devblog.services.elasticsearch_client import ElasticsearchClient
    config = get_search_config(settings)
    client = ElasticsearchClient(config.url, timeout=config.timeout)
    await client.connect()
    return client
