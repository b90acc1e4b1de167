"""Unit tests for RedirectConfig in config.py."""

import re

import pytest

from linkredirect.exceptions import BadConfigurationError
from linkredirect.redirect.config import RedirectConfig


def test_defaults():
    config = RedirectConfig.from_dict({})

    assert config == RedirectConfig()
    assert config.home_url is None
    assert config.link_cache_ttl is None
    assert config.redirect_with_query is True
    assert config.redirect_status_code == 302
    assert config.case_sensitive is False
    assert config.reserved_slugs == frozenset({'dashboard'})
    assert config.token_param == 'urltoken'
    assert config.compare_dates_only is True
    assert config.access_log is True
    assert config.excluded_params == ('urltoken',)


def test_from_none():
    assert RedirectConfig.from_dict(None) == RedirectConfig()


def test_from_dict():
    config = RedirectConfig.from_dict(
        {
            'home_url': 'https://example.com',
            'link_cache_ttl': 60,
            'redirect_with_query': False,
            'redirect_status_code': 301,
            'case_sensitive': True,
            'reserved_slugs': ['Dashboard', 'api'],
            'slug_pattern': r'^[a-z]+$',
            'token_param': 'expires',
            'exclude_params': ['secret', 'expires'],
            'compare_dates_only': False,
            'access_log': False,
        }
    )

    assert config.home_url == 'https://example.com'
    assert config.link_cache_ttl == 60
    assert config.redirect_with_query is False
    assert config.redirect_status_code == 301
    assert config.case_sensitive is True
    assert config.reserved_slugs == frozenset({'dashboard', 'api'})
    assert config.slug_pattern.pattern == '^[a-z]+$'
    assert config.slug_pattern.flags & re.IGNORECASE
    assert config.excluded_params == ('expires', 'secret')
    assert config.compare_dates_only is False
    assert config.access_log is False


def test_zero_cache_ttl_disables_cache():
    assert RedirectConfig.from_dict({'link_cache_ttl': 0}).link_cache_ttl is None


@pytest.mark.parametrize(
    'data',
    [
        {'redirect_status_code': 200},
        {'redirect_status_code': '302'},
        {'redirect_status_code': True},
        {'link_cache_ttl': -1},
        {'link_cache_ttl': '60'},
        {'case_sensitive': 'yes'},
        {'reserved_slugs': 'dashboard'},
        {'reserved_slugs': ['dashboard', 1]},
        {'slug_pattern': '[unclosed'},
        {'token_param': ''},
        {'home_url': 42},
        {'unknown_setting': True},
    ],
)
def test_invalid_settings(data):
    with pytest.raises(BadConfigurationError):
        RedirectConfig.from_dict(data)
