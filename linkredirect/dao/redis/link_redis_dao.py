"""Data Access Object (DAO) implementation for reading links from Redis

Link records are stored by the link management API as JSON documents under
`link:<slug>` keys:

    link:promo -> {"url": "https://shop.example/sale", "slug": "promo",
                   "expiration": 1767225600, "expiryRedirectUrl": "https://shop.example"}

Responsibilities:
    - Retrieve link records from Redis and decode them into LinkModel;
    - Honor an optional cache-duration hint with a process-local cache,
      so warm Lambda containers skip Redis for hot links;
    - Raise appropriate DAO exceptions on connectivity issues or malformed records.

Classes:
    LinkRedisDAO:
        DAO for retrieving LinkModel from a Redis datastore.

Example:
    >>> from linkredirect.dao.redis import LinkRedisDAO

    >>> dao = LinkRedisDAO(prefix=None)
    >>> link = dao.get('promo', cache_ttl=60)
    >>> link.url
    'https://shop.example/sale'
    >>> dao.get('missing') is None
    True
"""

import json
import time
import logging

from beartype import beartype

from linkredirect.models import LinkModel
from linkredirect.dao.base import LinkBaseDAO
from linkredirect.dao.redis.mixins import RedisClientMixin
from linkredirect.dao.redis.helpers import handle_redis_connection_error
from linkredirect.dao.exceptions import MalformedLinkError
from linkredirect.constants import TTL


logger = logging.getLogger(__name__)

# Process-local link cache: redis key -> (monotonic deadline, link)
_LINK_CACHE: dict[str, tuple[float, LinkModel]] = {}


def clear_link_cache() -> None:
    _LINK_CACHE.clear()


def _evict_expired_links(now: float) -> None:
    for key in [key for key, (deadline, _) in _LINK_CACHE.items() if deadline <= now]:
        del _LINK_CACHE[key]


class LinkRedisDAO(RedisClientMixin, LinkBaseDAO):
    """Redis-based Data Access Object (DAO) for reading link records

    This class implements the LinkBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        get(slug: str, cache_ttl: int | None = None, **kwargs) -> LinkModel | None:
            Retrieve a link by its exact slug. Returns None when the key doesn't exist.
            Raises MalformedLinkError when the stored value isn't a link document.
            Raises DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def get(self, slug: str, cache_ttl: int | None = None, **kwargs) -> LinkModel | None:
        """Retrieve a stored link by slug

        When `cache_ttl` is a positive number of seconds, a found link is kept in
        a process-local cache for that long (capped at one hour). Missing links
        are never cached, so a newly created link becomes visible immediately.

        Args:
            slug (str):
                The exact slug identifier of the link (case preserved).
            cache_ttl (int | None):
                Optional cache-duration hint in seconds.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            LinkModel | None:
                The retrieved LinkModel instance if found, otherwise None.

        Raises:
            MalformedLinkError:
                If the stored value isn't valid JSON or isn't a link document.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('promo')
            LinkModel(url='https://shop.example/sale', slug='promo', expiration=None, expiry_redirect_url=None)
        """
        link_key = self.keys.link_key(slug)

        if cache_ttl:
            now = time.monotonic()
            cached = _LINK_CACHE.get(link_key)
            if cached is not None and cached[0] > now:
                logger.debug('Link cache hit.', extra={'slug': slug})
                return cached[1]
            _evict_expired_links(now)

        raw = self.redis.get(link_key)
        if raw is None:
            return None

        try:
            document = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise MalformedLinkError(f"Link record under '{link_key}' is not valid JSON.") from e

        link = LinkModel.from_dict(document)

        if cache_ttl:
            deadline = time.monotonic() + min(cache_ttl, TTL.ONE_HOUR)
            _LINK_CACHE[link_key] = (deadline, link)

        return link
