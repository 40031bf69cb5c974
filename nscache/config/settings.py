from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables (.env file)"""

    # Logging
    log_level: str = "INFO"
    # Optional log file, e.g. logs/nscache.log. Console only when unset.
    log_file: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields in .env


class RedisConfig(BaseSettings):
    """
    Redis store configuration, read from REDIS_* environment variables.

    Production deployments run Redis Cluster behind TLS, so both are on
    unless explicitly disabled. Local testing usually talks to a single
    plain-text node:

        REDIS_ADDRESS=localhost:6379
        REDIS_DISABLE_CLUSTER_MODE=true
        REDIS_DISABLE_TLS=true
    """

    # host:port of the Redis server (any seed node in cluster mode)
    address: str = "localhost:6379"
    password: str = ""

    # Prefix for every key, joined with ":". Empty means no prefix.
    namespace: str = ""

    disable_cluster_mode: bool = False
    # Only honoured in cluster mode; single-node clients never use TLS.
    disable_tls: bool = False

    class Config:
        env_prefix = "REDIS_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance - loads once from .env"""
    return Settings()


@lru_cache()
def get_redis_config() -> RedisConfig:
    """Cached Redis configuration - loads once from .env"""
    return RedisConfig()


settings = get_settings()
