"""
Tests for RedisStatusCache.

Covers:
- JSON serialization with TTL (SETEX)
- Missing keys
- Redis errors and corrupted values wrapped as StatusCacheError
"""

import json
from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError, RedisError

from eventreg.domain.shared.exceptions import StatusCacheError
from eventreg.infrastructure.persistence.redis.status_cache import RedisStatusCache


@pytest.fixture
def redis_client():
    return MagicMock()


@pytest.fixture
def cache(redis_client):
    return RedisStatusCache(redis_client=redis_client)


def test_put_uses_setex_with_ttl(cache, redis_client):
    cache.put("export:42:exp-1", {"status": "success", "url": "https://cdn/x.csv"}, 86400)

    key, ttl, raw = redis_client.setex.call_args.args
    assert key == "export:42:exp-1"
    assert ttl == 86400
    assert json.loads(raw) == {"status": "success", "url": "https://cdn/x.csv"}


def test_get_decodes_json(cache, redis_client):
    redis_client.get.return_value = '{"status": "failed", "message": "x"}'
    assert cache.get("export:42:exp-1") == {"status": "failed", "message": "x"}


def test_get_missing_returns_none(cache, redis_client):
    redis_client.get.return_value = None
    assert cache.get("export:42:exp-1") is None


def test_put_wraps_redis_error(cache, redis_client):
    redis_client.setex.side_effect = ConnectionError("down")

    with pytest.raises(StatusCacheError) as exc_info:
        cache.put("export:1:e", {"status": "success"}, 60)

    assert exc_info.value.key == "export:1:e"
    assert isinstance(exc_info.value.original_error, ConnectionError)


def test_get_wraps_redis_error(cache, redis_client):
    redis_client.get.side_effect = RedisError("down")
    with pytest.raises(StatusCacheError):
        cache.get("export:1:e")


def test_get_corrupted_value_raises(cache, redis_client):
    redis_client.get.return_value = "{not json"
    with pytest.raises(StatusCacheError, match="not valid JSON"):
        cache.get("export:1:e")


def test_delete(cache, redis_client):
    redis_client.delete.return_value = 1
    assert cache.delete("export:1:e") is True
    redis_client.delete.return_value = 0
    assert cache.delete("export:1:e") is False
