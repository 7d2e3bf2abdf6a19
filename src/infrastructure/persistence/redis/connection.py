"""
Redis Connection Pool Management.

Provides a process-wide connection pool for the Redis-backed order and cart
repositories, with a PING health check and connection retry.

Configuration (environment):
    - REDIS_URL: Full connection URL (takes precedence, e.g. redis://host:6379/2)
    - REDIS_HOST / REDIS_PORT / REDIS_DB: Used when REDIS_URL is not set
    - REDIS_MAX_CONNECTIONS: Pool size (default 10)
    - REDIS_TIMEOUT: Socket timeout in seconds (default 5)
    - REDIS_RETRY_ATTEMPTS: PING attempts before giving up (default 3)

Error Handling:
    - ConnectionError / TimeoutError: Logged and retried with exponential backoff
    - RedisError: Raised after all retries are exhausted
    - Health check failure: Returns False (never raises)

Examples:
    >>> client = get_redis_client()
    >>> client.set("key", "value")
    >>> health_check()
    True
    >>> close_connections()
"""

import logging
import os
import threading
import time
from typing import Optional

from redis import ConnectionPool, Redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

logger = logging.getLogger(__name__)

# Singleton connection pool (thread-safe)
_redis_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def _create_pool(
    url: Optional[str],
    host: str,
    port: int,
    db: int,
    max_connections: int,
    timeout: int,
) -> ConnectionPool:
    common = {
        "max_connections": max_connections,
        "socket_timeout": timeout,
        "socket_connect_timeout": timeout,
        "socket_keepalive": True,
        "decode_responses": True,  # JSON documents are stored as str
    }
    if url:
        logger.info(f"Creating Redis connection pool from URL (max_connections={max_connections})")
        return ConnectionPool.from_url(url, **common)

    logger.info(
        f"Creating Redis connection pool: host={host}, port={port}, db={db}, "
        f"max_connections={max_connections}, timeout={timeout}s"
    )
    return ConnectionPool(host=host, port=port, db=db, **common)


def get_redis_client(
    url: Optional[str] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
    db: Optional[int] = None,
) -> Redis:
    """
    Get Redis client backed by the shared connection pool.

    The pool is created on first call (double-checked locking) and reused
    afterwards; arguments only take effect on that first call.

    Args:
        url: Redis URL (default from env: REDIS_URL)
        host: Redis hostname (default from env: REDIS_HOST or "localhost")
        port: Redis port (default from env: REDIS_PORT or 6379)
        db: Redis database number (default from env: REDIS_DB or 0)

    Returns:
        Redis client instance using the pool

    Raises:
        RedisError: If PING fails after all retry attempts
    """
    global _redis_pool

    if _redis_pool is None:
        with _pool_lock:
            if _redis_pool is None:
                _redis_pool = _create_pool(
                    url=url or os.getenv("REDIS_URL"),
                    host=host or os.getenv("REDIS_HOST", "localhost"),
                    port=port or int(os.getenv("REDIS_PORT", "6379")),
                    db=db if db is not None else int(os.getenv("REDIS_DB", "0")),
                    max_connections=int(os.getenv("REDIS_MAX_CONNECTIONS", "10")),
                    timeout=int(os.getenv("REDIS_TIMEOUT", "5")),
                )

    client = Redis(connection_pool=_redis_pool)

    retry_attempts = int(os.getenv("REDIS_RETRY_ATTEMPTS", "3"))
    last_error: Optional[Exception] = None

    for attempt in range(retry_attempts):
        try:
            client.ping()
            logger.debug(f"Redis connection established (attempt {attempt + 1})")
            return client
        except (ConnectionError, TimeoutError) as e:
            last_error = e
            if attempt < retry_attempts - 1:
                delay = 2**attempt  # 1s, 2s, 4s...
                logger.warning(
                    f"Redis connection failed (attempt {attempt + 1}/{retry_attempts}): {e}. "
                    f"Retrying in {delay}s..."
                )
                time.sleep(delay)
            else:
                logger.error(f"Redis connection failed after {retry_attempts} attempts: {e}")

    raise RedisError(
        f"Failed to connect to Redis after {retry_attempts} attempts. "
        f"Last error: {last_error}"
    )


def health_check() -> bool:
    """
    Check Redis health with PING.

    Returns:
        True if Redis answered PING, False on any error (never raises)
    """
    try:
        if get_redis_client().ping():
            logger.debug("Redis health check: OK")
            return True
        logger.warning("Redis health check: PING returned False")
        return False
    except RedisError as e:
        logger.warning(f"Redis health check failed: {e}")
        return False


def close_connections() -> None:
    """
    Disconnect the pool and reset the singleton (idempotent).

    Called on application shutdown.
    """
    global _redis_pool

    with _pool_lock:
        if _redis_pool is None:
            logger.debug("Redis connection pool already closed or not initialized")
            return

        logger.info("Closing Redis connection pool")
        try:
            _redis_pool.disconnect()
        finally:
            _redis_pool = None
