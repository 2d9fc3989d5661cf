"""
Redis Connection Pool Management.

Provides the shared Redis connection pool used by the export status cache.

Responsibility:
    - Manage one process-wide connection pool
    - Verify connectivity with PING, retrying with exponential backoff
    - Health check for the API readiness endpoint (GET /health/ready)
    - Pool shutdown (API lifespan)

Architecture Notes:
    - Infrastructure Layer (external dependency on Redis)
    - Singleton pool guarded by threading.Lock (Celery threads, uvicorn workers)
    - Environment-based configuration

Configuration:
    - REDIS_HOST (default "localhost"), REDIS_PORT (default 6379)
    - REDIS_DB (default 0)
    - REDIS_MAX_CONNECTIONS (default 10)
    - REDIS_TIMEOUT in seconds (default 5)
    - REDIS_RETRY_ATTEMPTS (default 3), delays 1s, 2s, 4s ...

Examples:
    >>> client = get_redis_client()
    >>> client.setex("export:42:exp-1", 86400, '{"status": "success"}')
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

# Configure logger for this module
logger = logging.getLogger(__name__)

_redis_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()

RETRY_BACKOFF_BASE_SECONDS = 1


def _create_pool(
    host: Optional[str],
    port: Optional[int],
    db: Optional[int],
    max_connections: Optional[int],
    timeout: Optional[int],
) -> ConnectionPool:
    redis_host = host or os.getenv("REDIS_HOST", "localhost")
    redis_port = port or int(os.getenv("REDIS_PORT", "6379"))
    redis_db = db if db is not None else int(os.getenv("REDIS_DB", "0"))
    max_conn = max_connections or int(os.getenv("REDIS_MAX_CONNECTIONS", "10"))
    conn_timeout = timeout or int(os.getenv("REDIS_TIMEOUT", "5"))

    logger.info(
        f"Creating Redis connection pool: "
        f"host={redis_host}, port={redis_port}, db={redis_db}, "
        f"max_connections={max_conn}, timeout={conn_timeout}s"
    )
    return ConnectionPool(
        host=redis_host,
        port=redis_port,
        db=redis_db,
        max_connections=max_conn,
        socket_timeout=conn_timeout,
        socket_connect_timeout=conn_timeout,
        socket_keepalive=True,
        decode_responses=True,
    )


def get_redis_client(
    host: Optional[str] = None,
    port: Optional[int] = None,
    db: Optional[int] = None,
    max_connections: Optional[int] = None,
    timeout: Optional[int] = None,
) -> Redis:
    """
    Get a Redis client backed by the shared pool.

    The pool is created on the first call; arguments only matter then.
    Connectivity is checked with PING before the client is returned.

    Returns:
        Redis client (decode_responses=True)

    Raises:
        RedisError: If PING fails on every retry attempt
    """
    global _redis_pool

    if _redis_pool is None:
        with _pool_lock:
            if _redis_pool is None:
                _redis_pool = _create_pool(host, port, db, max_connections, timeout)

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
                delay = RETRY_BACKOFF_BASE_SECONDS * (2**attempt)
                logger.warning(
                    f"Redis connection failed (attempt {attempt + 1}/{retry_attempts}): {e}. "
                    f"Retrying in {delay}s..."
                )
                time.sleep(delay)
            else:
                logger.error(
                    f"Redis connection failed after {retry_attempts} attempts: {e}"
                )

    raise RedisError(
        f"Failed to connect to Redis after {retry_attempts} attempts. "
        f"Last error: {last_error}"
    )


def health_check() -> bool:
    """
    PING Redis through the shared pool.

    Returns:
        True if Redis answered, False otherwise (never raises)
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
    Disconnect the shared pool and reset it. Safe to call repeatedly.
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
            logger.info("Redis connection pool closed")
