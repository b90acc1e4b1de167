"""Unit tests for the RedirectEngine in engine.py

Test coverage includes:

1. Successful redirects (query forwarding, payload merging, precedence)
2. Not found (unknown, reserved, malformed slugs, storage failures)
3. Expiry handling (fallback URL, 410 errors, token exclusion)
4. Root path / home URL
5. Access log isolation
"""

import base64
import json
from datetime import datetime, UTC
from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlsplit

import pytest
from freezegun import freeze_time

from linkredirect.models import LinkModel, RedirectDecision, RequestContext
from linkredirect.exceptions import InvalidLinkTokenError, LinkExpiredError
from linkredirect.dao.base import AccessLogBaseDAO, LinkBaseDAO
from linkredirect.dao.exceptions import DataStoreError
from linkredirect.redirect.config import RedirectConfig
from linkredirect.redirect.engine import RedirectEngine


NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=UTC)
PAST_EPOCH = int(datetime(2026, 10, 1, tzinfo=UTC).timestamp())


def _payload(data: dict) -> str:
    return base64.b64encode(json.dumps(data).encode('utf-8')).decode('ascii')


def _query(location: str) -> dict:
    return parse_qs(urlsplit(location).query)


@pytest.fixture
def links() -> dict[str, LinkModel]:
    return {
        'promo': LinkModel(url='https://shop.example/sale', slug='promo'),
        'MySlug': LinkModel(url='https://example.com/mixed', slug='MySlug'),
        'expired': LinkModel(url='https://example.com', slug='expired', expiration=PAST_EPOCH),
        'expired-fallback': LinkModel(
            url='https://example.com',
            slug='expired-fallback',
            expiration=PAST_EPOCH,
            expiry_redirect_url='https://fallback.example',
        ),
        'campaign': LinkModel(url='https://example.com', slug='campaign', expiry_redirect_url='https://fallback.example'),
    }


@pytest.fixture
def link_dao(links) -> LinkBaseDAO:
    dao = MagicMock(spec=LinkBaseDAO)
    dao.get.side_effect = lambda slug, cache_ttl=None: links.get(slug)
    return dao


@pytest.fixture
def access_log() -> AccessLogBaseDAO:
    return MagicMock(spec=AccessLogBaseDAO)


@pytest.fixture
def engine(link_dao, access_log) -> RedirectEngine:
    return RedirectEngine(link_dao, RedirectConfig(), access_log=access_log)


# -------------------------------
# 1. Successful redirects
# -------------------------------


def test_redirect_with_query(engine):
    """End-to-end: /promo?coupon=SAVE10 redirects with the coupon forwarded."""
    decision = engine.resolve('/promo', {'coupon': 'SAVE10'}, now=NOW)

    assert decision == RedirectDecision(location='https://shop.example/sale?coupon=SAVE10', status_code=302, slug='promo')


def test_redirect_without_query_forwarding(link_dao):
    engine = RedirectEngine(link_dao, RedirectConfig(redirect_with_query=False))

    decision = engine.resolve('/promo', {'coupon': 'SAVE10'}, now=NOW)

    assert decision.location == 'https://shop.example/sale'


def test_redirect_with_query_retained_in_path(engine):
    decision = engine.resolve('/promo?coupon=SAVE10', now=NOW)
    assert decision.location == 'https://shop.example/sale?coupon=SAVE10'


def test_redirect_with_payload(engine):
    segment = _payload({'foo': 'bar', 'test': 123})

    decision = engine.resolve(f'/promo/{segment}', {'additional': 'param'}, now=NOW)

    assert _query(decision.location) == {'foo': ['bar'], 'test': ['123'], 'additional': ['param']}


def test_payload_takes_precedence_over_query(engine):
    segment = _payload({'foo': 'bar'})

    decision = engine.resolve(f'/promo/{segment}', {'foo': 'queryvalue'}, now=NOW)

    assert _query(decision.location) == {'foo': ['bar']}


@pytest.mark.parametrize(
    'segment',
    [
        'not-base64!!',
        'invalid-base64-data',
        base64.b64encode(b'[' * 100_000).decode('ascii'),
    ],
)
def test_malformed_payload_still_redirects(engine, segment):
    decision = engine.resolve(f'/promo/{segment}', now=NOW)

    assert decision.location == 'https://shop.example/sale'
    assert decision.status_code == 302


def test_configured_status_code_and_exclusions(link_dao):
    engine = RedirectEngine(link_dao, RedirectConfig(redirect_status_code=307, exclude_params=('secret',)))

    decision = engine.resolve('/promo', {'secret': 's', 'keep': 'k'}, now=NOW)

    assert decision.status_code == 307
    assert _query(decision.location) == {'keep': ['k']}


def test_case_insensitive_fallback(engine, link_dao):
    decision = engine.resolve('/MySlug', now=NOW)

    assert decision.location == 'https://example.com/mixed'
    assert [c.args[0] for c in link_dao.get.call_args_list] == ['myslug', 'MySlug']


# -------------------------------
# 2. Not found
# -------------------------------


@pytest.mark.parametrize('path', ['/unknown', '/dashboard', '/bad_slug', '/myslug', '/promo\n'])
def test_not_found(engine, access_log, path):
    assert engine.resolve(path, now=NOW) is None
    access_log.record.assert_not_called()


def test_storage_failure_is_not_found(access_log):
    dao = MagicMock(spec=LinkBaseDAO)
    dao.get.side_effect = DataStoreError('down')
    engine = RedirectEngine(dao, RedirectConfig(), access_log=access_log)

    assert engine.resolve('/promo', now=NOW) is None


# -------------------------------
# 3. Expiry handling
# -------------------------------


def test_expired_link_redirects_to_fallback(engine):
    decision = engine.resolve('/expired-fallback', {'utm': 'mail'}, now=NOW)

    assert decision.location == 'https://fallback.example?utm=mail'
    assert decision.expired is True


def test_expired_link_without_fallback(engine):
    with pytest.raises(LinkExpiredError) as exc_info:
        engine.resolve('/expired', now=NOW)

    assert exc_info.value.slug == 'expired'
    assert exc_info.value.status_code == 410
    assert exc_info.value.message == 'This link has expired.'


@freeze_time('2026-10-18 12:00:00')
def test_expired_link_uses_current_time():
    dao = MagicMock(spec=LinkBaseDAO)
    dao.get.return_value = LinkModel(url='https://example.com', slug='expired', expiration=PAST_EPOCH)

    with pytest.raises(LinkExpiredError):
        RedirectEngine(dao).resolve('/expired')


def test_expired_token_redirects_to_fallback(engine):
    decision = engine.resolve('/campaign', {'urltoken': '2026-10-01', 'utm': 'mail'}, now=NOW)

    assert decision.location == 'https://fallback.example?utm=mail'


def test_expired_token_in_payload(engine):
    segment = _payload({'urltoken': '2026-10-01'})

    with pytest.raises(LinkExpiredError):
        engine.resolve(f'/promo/{segment}', now=NOW)


def test_legacy_base64_token(engine):
    token = base64.b64encode(b'2026-10-01').decode('ascii')

    with pytest.raises(LinkExpiredError):
        engine.resolve('/promo', {'urltoken': token}, now=NOW)


def test_invalid_token(engine):
    with pytest.raises(InvalidLinkTokenError) as exc_info:
        engine.resolve('/promo', {'urltoken': 'dGVzdC10b2tlbg=='}, now=NOW)

    assert exc_info.value.status_code == 410
    assert exc_info.value.message == 'Invalid urltoken.'


@pytest.mark.parametrize(
    'path, query',
    [
        ('/promo', {'urltoken': '2030-01-01', 'coupon': 'SAVE10'}),
        ('/campaign', {'urltoken': '2026-10-01', 'coupon': 'SAVE10'}),
        ('/expired-fallback', {'urltoken': '2030-01-01', 'coupon': 'SAVE10'}),
        (f'/promo/{_payload({"urltoken": "2030-01-01"})}', {'coupon': 'SAVE10'}),
    ],
)
def test_token_is_never_forwarded(engine, path, query):
    decision = engine.resolve(path, query, now=NOW)

    assert 'urltoken' not in _query(decision.location)
    assert _query(decision.location)['coupon'] == ['SAVE10']


# -------------------------------
# 4. Root path / home URL
# -------------------------------


@pytest.mark.parametrize('path', ['', '/'])
def test_root_path_redirects_home(link_dao, path):
    engine = RedirectEngine(link_dao, RedirectConfig(home_url='https://example.com'))

    assert engine.resolve(path) == RedirectDecision(location='https://example.com', status_code=302)
    link_dao.get.assert_not_called()


def test_root_path_without_home_url(engine, link_dao):
    assert engine.resolve('/') is None
    link_dao.get.assert_not_called()


# -------------------------------
# 5. Access log isolation
# -------------------------------


def test_access_is_recorded(engine, access_log, links):
    ctx = RequestContext(path='/promo', source_ip='203.0.113.7')

    engine.resolve('/promo', request_context=ctx, now=NOW)

    access_log.record.assert_called_once_with(ctx, links['promo'])


def test_access_log_failure_does_not_change_redirect(engine, access_log, caplog):
    access_log.record.side_effect = RuntimeError('stream full')

    decision = engine.resolve('/promo', {'coupon': 'SAVE10'}, now=NOW)

    assert decision.location == 'https://shop.example/sale?coupon=SAVE10'
    assert 'Failed to write access log' in caplog.text


def test_engine_without_access_log(link_dao):
    decision = RedirectEngine(link_dao).resolve('/promo', now=NOW)
    assert decision.location == 'https://shop.example/sale'
