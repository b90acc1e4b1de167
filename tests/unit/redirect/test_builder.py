"""Unit tests for redirect target assembly in builder.py."""

import pytest

from linkredirect.redirect.builder import build_redirect


def test_forward_params():
    assert build_redirect('https://shop.example/sale', {'coupon': 'SAVE10'}, True) == ('https://shop.example/sale?coupon=SAVE10', 302)


def test_forwarding_disabled():
    assert build_redirect('https://shop.example/sale', {'coupon': 'SAVE10'}, False) == ('https://shop.example/sale', 302)


def test_no_params_keeps_target_unchanged():
    assert build_redirect('https://shop.example/sale?ref=a', {}, True) == ('https://shop.example/sale?ref=a', 302)


def test_existing_target_query_is_kept():
    location, _ = build_redirect('https://shop.example/sale?ref=a', {'coupon': 'SAVE10'}, True)
    assert location == 'https://shop.example/sale?ref=a&coupon=SAVE10'


def test_forwarded_param_replaces_target_param():
    location, _ = build_redirect('https://shop.example/sale?ref=a&lang=en&ref=c', {'ref': 'b'}, True)
    assert location == 'https://shop.example/sale?lang=en&ref=b'


@pytest.mark.parametrize(
    'target, expected',
    [
        ('https://example.com/?flag', 'https://example.com/?flag&coupon=SAVE10'),
        ('https://example.com/?q=a+b', 'https://example.com/?q=a+b&coupon=SAVE10'),
        ('https://example.com/?q=%7E&x=', 'https://example.com/?q=%7E&x=&coupon=SAVE10'),
    ],
)
def test_target_query_text_is_kept_verbatim(target, expected):
    location, _ = build_redirect(target, {'coupon': 'SAVE10'}, True)
    assert location == expected


def test_encoded_target_key_is_replaced():
    location, _ = build_redirect('https://example.com/?my+key=1&my%20key=2', {'my key': '3'}, True)
    assert location == 'https://example.com/?my%20key=3'


def test_fragment_is_preserved():
    location, _ = build_redirect('https://shop.example/sale#top', {'coupon': 'SAVE10'}, True)
    assert location == 'https://shop.example/sale?coupon=SAVE10#top'


@pytest.mark.parametrize(
    'value, expected',
    [
        (123, 'n=123'),
        (1.5, 'n=1.5'),
        (True, 'n=true'),
        (False, 'n=false'),
        (['a', 'b'], 'n=a&n=b'),
        ({'a': 1}, 'n=%7B%22a%22%3A1%7D'),
        ('hello world', 'n=hello%20world'),
        ('a&b=c', 'n=a%26b%3Dc'),
    ],
)
def test_value_rendering(value, expected):
    location, _ = build_redirect('https://example.com', {'n': value}, True)
    assert location == f'https://example.com?{expected}'


def test_none_values_are_dropped():
    location, _ = build_redirect('https://example.com/', {'n': None, 'm': '1'}, True)
    assert location == 'https://example.com/?m=1'


def test_only_none_values_keep_target_unchanged():
    assert build_redirect('https://example.com/', {'n': None}, True) == ('https://example.com/', 302)


@pytest.mark.parametrize('status_code', [301, 307, 308])
def test_configured_status_code(status_code):
    assert build_redirect('https://example.com', {}, True, status_code) == ('https://example.com', status_code)
