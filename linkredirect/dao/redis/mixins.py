"""Shared Redis client setup for the link and access log DAOs

A Lambda invocation builds one LinkRedisDAO from the AppConfig `redis` block
and hands its client to AccessLogRedisDAO, so both DAOs share a single
connection pool:

    >>> link_dao = LinkRedisDAO(redis_host='redis.internal', prefix='linkredirect:prod')
    >>> access_log = AccessLogRedisDAO(redis_client=link_dao.redis, prefix='linkredirect:prod')
"""

import redis

from linkredirect.dao.redis.redis_key_schema import RedisKeySchema
from linkredirect.dao.redis.helpers import CONNECTIVITY_ERRORS, redis_location
from linkredirect.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Give a DAO a healthy Redis client (`self.redis`) and key schema (`self.keys`)

    The client is pinged on construction, so an unreachable Redis fails fast
    with DataStoreError before any link is looked up.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_decode_responses: bool = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_ssl: bool = False,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        """Initialize a Redis-based DAO

        Args:
            redis_host, redis_port, redis_db, redis_username, redis_password, redis_ssl:
                Connection settings, as found in the AppConfig `redis` block
                (ports and db indexes may arrive as strings).
            redis_decode_responses (bool):
                Decode replies to str. Link documents are JSON text, so this
                stays True unless a caller injects its own client.
            redis_client (redis.Redis | None):
                Existing client to reuse. Connection settings are ignored when given.
            prefix (str | None):
                Key namespace, e.g. 'linkredirect:prod'. None for unprefixed keys.

        Raises:
            DataStoreError:
                If Redis doesn't answer the healthcheck PING.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                ssl=bool(redis_ssl),
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis; return False or raise DataStoreError when it's unreachable"""
        try:
            self.redis.ping()
        except CONNECTIVITY_ERRORS as e:
            if not raise_error:
                return False
            raise DataStoreError(
                f"Can't connect to Redis at {redis_location(self.redis)}. Check the provided configuration parameters."
            ) from e
        return True
