"""Helpers shared by the Redis-backed DAOs

Functions:
    redis_location(client: redis.Redis) -> str
        'host:port/db' of the server a client talks to, for error messages.
    handle_redis_connection_error(method: Callable) -> Callable
        Decorator: translate Redis connectivity failures into DataStoreError.
"""

import functools
from collections.abc import Callable
from typing import Any

import redis

from linkredirect.dao.exceptions import DataStoreError


# Failures meaning "Redis is unreachable", as opposed to a bad command or key type
CONNECTIVITY_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def redis_location(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_connection_error[F: Callable[..., Any]](method: F) -> F:
    """Wrap a DAO method so an unreachable Redis surfaces as DataStoreError

    The redirect engine treats DataStoreError as "link not found", so a Redis
    outage degrades into 404s instead of crashing the Lambda. Any other Redis
    error (e.g. WRONGTYPE on a corrupted key) propagates unchanged.

    Example:
        >>> @handle_redis_connection_error
        ... def get(self, slug):
        ...     return self.redis.get(self.keys.link_key(slug))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except CONNECTIVITY_ERRORS as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_location(self.redis)}.") from e

    return wrapper
