from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can come from:
    - docker-compose.yml environment section
    - .env file
    - System environment

    Variable names match docker-compose conventions:
    - POSTGRES_HOST, POSTGRES_PORT, etc. (record store)
    - ELASTICSEARCH_URL, SEARCH_INDEX_NAME (search index)
    """

    # Logging
    log_level: str = "INFO"

    # PostgreSQL (record store)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "devblog_user"
    postgres_password: str = "devblog_pass"
    postgres_db: str = "devblog"
    postgres_pool_min_size: int = 2
    postgres_pool_max_size: int = 10
    database_url: Optional[str] = Field(default=None, validate_default=True)

    # Elasticsearch (search index)
    elasticsearch_url: str = "http://localhost:9200"
    search_index_name: str = "blog"
    search_timeout_seconds: float = 10.0
    search_result_size: int = 20

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra env vars

    @field_validator('database_url', mode='before')
    @classmethod
    def construct_database_url(cls, v, info):
        """Construct database URL from components if not explicitly set"""
        if v:
            return v

        data = info.data
        host = data.get('postgres_host', 'localhost')
        port = data.get('postgres_port', 5432)
        user = data.get('postgres_user', 'devblog_user')
        password = data.get('postgres_password', 'devblog_pass')
        db = data.get('postgres_db', 'devblog')

        return f"postgresql://{user}:{password}@{host}:{port}/{db}"

    @field_validator('elasticsearch_url')
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip('/')


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
