"""Data Access Object (DAO) implementation for the link access log in Redis

Each redirect appends one entry to the Redis stream `access:<slug>`. Streams are
trimmed approximately to DefaultRedirect.ACCESS_LOG_MAXLEN entries so the log
never grows unbounded.

Example:
    >>> dao = AccessLogRedisDAO(prefix=None)
    >>> dao.record(RequestContext(path='/promo', source_ip='203.0.113.7'), link)
"""

from beartype import beartype

from linkredirect.models import LinkModel, RequestContext
from linkredirect.dao.base import AccessLogBaseDAO
from linkredirect.dao.redis.mixins import RedisClientMixin
from linkredirect.dao.redis.helpers import handle_redis_connection_error
from linkredirect.dao.exceptions import AccessLogError
from linkredirect.constants import DefaultRedirect


class AccessLogRedisDAO(RedisClientMixin, AccessLogBaseDAO):
    """Redis stream backed access log."""

    @handle_redis_connection_error
    @beartype
    def record(self, request_context: RequestContext, link: LinkModel, **kwargs) -> None:
        """Append an access entry for `link` to its Redis stream

        Raises:
            AccessLogError:
                If the link carries no slug to key the stream on.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        if not link.slug:
            raise AccessLogError('Cannot record access for a link without a slug.')

        # XADD rejects None values, so missing request attributes are sent as ''
        entry = {
            'slug': link.slug,
            'url': link.url,
            'path': request_context.path,
            'ip': request_context.source_ip or '',
            'ua': request_context.user_agent or '',
            'referer': request_context.referer or '',
            'ts': int(request_context.requested_at.timestamp()),
        }
        self.redis.xadd(
            self.keys.access_log_key(link.slug),
            entry,
            maxlen=DefaultRedirect.ACCESS_LOG_MAXLEN,
            approximate=True,
        )
