from linkredirect.dao.redis.redis_key_schema import RedisKeySchema
from linkredirect.dao.redis.mixins import RedisClientMixin
from linkredirect.dao.redis.link_redis_dao import LinkRedisDAO
from linkredirect.dao.redis.access_log_redis_dao import AccessLogRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'LinkRedisDAO',
    'AccessLogRedisDAO',
]
