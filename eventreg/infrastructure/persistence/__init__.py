"""
Persistence Infrastructure Module

Exports:
    From database:
        - Base, get_engine, session_scope
    From order_filter:
        - OrderFilter
    From redis:
        - RedisStatusCache
"""

from .database import Base, get_engine, session_scope
from .order_filter import OrderFilter
from .redis import RedisStatusCache

__all__ = [
    "Base",
    "OrderFilter",
    "RedisStatusCache",
    "get_engine",
    "session_scope",
]
