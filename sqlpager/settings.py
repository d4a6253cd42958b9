from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True)

    ENVIRONMENT: str = "development"

    # Dialect used when the interceptor options do not name one
    PAGE_DIALECT: str = "generic"

    DEFAULT_PAGE_SIZE: int = 10

    # Count statement cache ("memory", "lru" or "redis")
    MS_CACHE_TYPE: str = "lru"
    MS_CACHE_SIZE: int = 1000
    MS_CACHE_TTL: int = 3600

    # Redis settings (only used by the redis statement cache)
    REDIS_IP: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_MAX_CONNECTIONS: int = 20
    REDIS_SOCKET_TIMEOUT: float = 5.0
    REDIS_CONNECT_TIMEOUT: float = 5.0
    MS_CACHE_REDIS_DB: int = 3

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str | None = None


app_settings = Settings()
