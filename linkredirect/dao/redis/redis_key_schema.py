import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for link records and access logs.

    Link records live under `link:<slug>`, the key scheme shared with the link
    management API. An optional prefix namespaces all generated keys, e.g.
    "linkredirect:prod"; leave it unset when the link management API writes
    unprefixed keys.
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_key(self, slug: str) -> str:
        return f'link:{slug}'

    @prefix_key
    def access_log_key(self, slug: str) -> str:
        return f'access:{slug}'
