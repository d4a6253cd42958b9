from redis.asyncio import ConnectionPool, Redis

from sqlpager.logging import logger
from sqlpager.settings import app_settings


class RedisPool:
    """
    Shared Redis clients for the statement cache, one per database index.

    Clients are created on first use and reuse a single connection pool per
    database for the lifetime of the process.
    """

    __clients: dict[int, Redis] = {}
    __pools: dict[int, ConnectionPool] = {}

    @classmethod
    async def get_instance(
        cls, db: int = app_settings.MS_CACHE_REDIS_DB
    ) -> Redis:
        """
        Get the client for a database, creating its pool on first use.

        Args:
            db: Redis database index.

        Returns:
            Redis: Client bound to the database's pool.
        """
        client = cls.__clients.get(db)
        if client is None:
            client = cls.__clients[db] = Redis.from_pool(cls._create_pool(db))
        return client

    @classmethod
    def _create_pool(cls, db: int) -> ConnectionPool:
        url = f"redis://{app_settings.REDIS_IP}:{app_settings.REDIS_PORT}"
        pool = ConnectionPool.from_url(
            url,
            db=db,
            decode_responses=True,
            max_connections=app_settings.REDIS_MAX_CONNECTIONS,
            socket_timeout=app_settings.REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=app_settings.REDIS_CONNECT_TIMEOUT,
        )
        cls.__pools[db] = pool
        logger.info(f"Statement cache connected to {url}/{db}")
        return pool

    @classmethod
    async def close_all(cls) -> None:
        """Disconnect every pool; the next get_instance() reconnects."""
        for db, pool in cls.__pools.items():
            try:
                await pool.disconnect()
            except (OSError, ConnectionError) as ex:
                logger.error(f"Failed to disconnect Redis db {db}: {ex}")

        cls.__pools.clear()
        cls.__clients.clear()
