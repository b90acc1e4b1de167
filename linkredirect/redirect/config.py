"""Redirect engine configuration

RedirectConfig is the explicit, immutable configuration value handed to the
redirect engine. It is built from the `redirect` block of the Lambda's AppConfig
section via `RedirectConfig.from_dict()`; every key is optional.

Example:
    >>> config = RedirectConfig.from_dict({'home_url': 'https://example.com', 'case_sensitive': True})
    >>> config.redirect_status_code
    302
"""

import re
from dataclasses import dataclass, field
from typing import Any

from linkredirect.constants import DefaultRedirect
from linkredirect.exceptions import BadConfigurationError


def _compile_slug_pattern(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


# fmt: off
@dataclass(frozen=True)
class RedirectConfig:
    home_url: str | None = None                 # Redirect target for the root path
    link_cache_ttl: int | None = None           # Cache-duration hint (seconds) for link lookups
    redirect_with_query: bool = DefaultRedirect.WITH_QUERY
    redirect_status_code: int = DefaultRedirect.STATUS_CODE
    case_sensitive: bool = DefaultRedirect.CASE_SENSITIVE
    reserved_slugs: frozenset[str] = frozenset(DefaultRedirect.RESERVED_SLUGS)
    slug_pattern: re.Pattern = field(default_factory=lambda: _compile_slug_pattern(DefaultRedirect.SLUG_PATTERN))
    token_param: str = DefaultRedirect.TOKEN_PARAM
    exclude_params: tuple[str, ...] = ()        # Extra parameters never forwarded
    compare_dates_only: bool = DefaultRedirect.COMPARE_DATES_ONLY
    access_log: bool = DefaultRedirect.ACCESS_LOG
    # fmt: on

    @property
    def excluded_params(self) -> tuple[str, ...]:
        """Parameters stripped from every forwarded redirect (date token first)"""
        return (self.token_param, *(p for p in self.exclude_params if p != self.token_param))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> 'RedirectConfig':
        """Build a validated RedirectConfig from an AppConfig `redirect` block

        Raises:
            BadConfigurationError:
                If any value has the wrong type or is out of range.
        """
        data = dict(data or {})
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise BadConfigurationError(f'Unknown redirect settings: {", ".join(sorted(unknown))}')

        kwargs: dict[str, Any] = {}

        if data.get('home_url') is not None:
            kwargs['home_url'] = _require(data, 'home_url', str)

        if data.get('link_cache_ttl') is not None:
            ttl = _require(data, 'link_cache_ttl', int)
            if ttl < 0:
                raise BadConfigurationError(f"'link_cache_ttl' must be non-negative (got {ttl}).")
            kwargs['link_cache_ttl'] = ttl or None

        for name in ('redirect_with_query', 'case_sensitive', 'compare_dates_only', 'access_log'):
            if name in data:
                kwargs[name] = _require(data, name, bool)

        if 'redirect_status_code' in data:
            status = _require(data, 'redirect_status_code', int)
            if status not in DefaultRedirect.ALLOWED_STATUS_CODES:
                allowed = ', '.join(str(s) for s in sorted(DefaultRedirect.ALLOWED_STATUS_CODES))
                raise BadConfigurationError(f"'redirect_status_code' must be one of {allowed} (got {status}).")
            kwargs['redirect_status_code'] = status

        if 'reserved_slugs' in data:
            slugs = _require_str_list(data, 'reserved_slugs')
            kwargs['reserved_slugs'] = frozenset(slug.lower() for slug in slugs)

        if 'slug_pattern' in data:
            pattern = _require(data, 'slug_pattern', str)
            try:
                kwargs['slug_pattern'] = _compile_slug_pattern(pattern)
            except re.error as e:
                raise BadConfigurationError(f"'slug_pattern' is not a valid regular expression: {e}") from e

        if 'token_param' in data:
            token_param = _require(data, 'token_param', str)
            if not token_param:
                raise BadConfigurationError("'token_param' must not be empty.")
            kwargs['token_param'] = token_param

        if 'exclude_params' in data:
            kwargs['exclude_params'] = tuple(_require_str_list(data, 'exclude_params'))

        return cls(**kwargs)


def _require(data: dict[str, Any], name: str, kind: type) -> Any:
    value = data[name]
    # bool is an int subclass, so reject it explicitly for numeric settings
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise BadConfigurationError(f"'{name}' must be of type {kind.__name__} (got {type(value).__name__}).")
    return value


def _require_str_list(data: dict[str, Any], name: str) -> list[str]:
    value = data[name]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise BadConfigurationError(f"'{name}' must be a list of strings.")
    return value
