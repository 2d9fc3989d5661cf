"""
Status Cache Port
"""

from typing import Any, Dict, Optional, Protocol


class StatusCacheProtocol(Protocol):
    """
    Key/value cache with per-entry expiry for export status records.

    Implementations:
        - RedisStatusCache
    """

    def put(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        """
        Store value under key, overwriting any previous value.

        Raises:
            StatusCacheError: If the cache is unreachable
        """
        ...

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Stored value, None if absent or expired."""
        ...
