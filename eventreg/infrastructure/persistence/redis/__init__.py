"""
Redis Infrastructure Module

Exports:
    - RedisStatusCache: Export status records with TTL
    - get_redis_client: Get Redis client with connection pooling
    - health_check: Check Redis health with PING test
    - close_connections: Close all Redis connections
"""

from .connection import close_connections, get_redis_client, health_check
from .status_cache import RedisStatusCache

__all__ = [
    "RedisStatusCache",
    "get_redis_client",
    "health_check",
    "close_connections",
]
