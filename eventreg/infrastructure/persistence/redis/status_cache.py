"""
Redis Status Cache

Stores export status records as JSON strings with a per-key TTL.

Storage Format:
    Key:   "export:{requester_id}:{export_id}"
    Value: '{"status": "success", "url": "https://..."}'
           '{"status": "failed", "message": "..."}'
    TTL:   24 hours by default (ExportConfig.status_ttl_seconds)

Error Handling:
    Redis errors are logged and raised as StatusCacheError. There is no
    fallback store: a status record that cannot be written must surface as
    a failure of the export.
"""

import json
import logging
from typing import Any, Dict, Optional

from redis import Redis
from redis.exceptions import RedisError

from eventreg.domain.shared.exceptions import StatusCacheError

from .connection import get_redis_client

# Configure logger for this module
logger = logging.getLogger(__name__)


class RedisStatusCache:
    """
    StatusCacheProtocol implementation on Redis.

    Examples:
        >>> cache = RedisStatusCache()
        >>> cache.put("export:42:exp-1", {"status": "success", "url": "https://..."}, 86400)
        >>> cache.get("export:42:exp-1")
        {'status': 'success', 'url': 'https://...'}
    """

    def __init__(self, redis_client: Optional[Redis] = None) -> None:
        """
        Args:
            redis_client: Client to use (default: pooled client from get_redis_client)
        """
        self.redis: Redis = redis_client or get_redis_client()

    def put(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        try:
            self.redis.setex(key, ttl_seconds, json.dumps(value))
        except RedisError as e:
            logger.error(f"Redis error writing {key}: {e}")
            raise StatusCacheError(
                "Failed to write status record", key=key, original_error=e
            ) from e
        logger.debug(f"Status written: {key} (ttl={ttl_seconds}s)")

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            raw = self.redis.get(key)
        except RedisError as e:
            logger.error(f"Redis error reading {key}: {e}")
            raise StatusCacheError(
                "Failed to read status record", key=key, original_error=e
            ) from e

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupted status record at {key}: {e}")
            raise StatusCacheError(
                "Status record is not valid JSON", key=key, original_error=e
            ) from e

    def delete(self, key: str) -> bool:
        """Remove a status record. Returns True if a record was deleted."""
        try:
            return bool(self.redis.delete(key))
        except RedisError as e:
            logger.error(f"Redis error deleting {key}: {e}")
            raise StatusCacheError(
                "Failed to delete status record", key=key, original_error=e
            ) from e
