"""
Redis Infrastructure Module

Shared Redis connection management for the Redis-backed repositories.

Exports:
    - get_redis_client: Get Redis client with connection pooling
    - health_check: Check Redis health with PING test
    - close_connections: Close all Redis connections
"""

from .connection import close_connections, get_redis_client, health_check

__all__ = [
    "get_redis_client",
    "health_check",
    "close_connections",
]
