import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, unquote_plus, urlencode, urlsplit, urlunsplit

from linkredirect.constants import DefaultRedirect


def build_redirect(
    target_url: str,
    params: Mapping[str, Any],
    forward_params: bool,
    status_code: int = DefaultRedirect.STATUS_CODE,
) -> tuple[str, int]:
    """Assemble the final redirect target and status code

    With `forward_params`, `params` are appended to the target's own query
    string. Target parameters are kept verbatim unless a forwarded parameter of
    the same name replaces them. The fragment is preserved.

    Example:
        >>> build_redirect('https://shop.example/sale', {'coupon': 'SAVE10'}, True)
        ('https://shop.example/sale?coupon=SAVE10', 302)
        >>> build_redirect('https://shop.example/sale?ref=a', {'coupon': 'SAVE10'}, True)
        ('https://shop.example/sale?ref=a&coupon=SAVE10', 302)
    """
    if not forward_params or not params:
        return target_url, status_code

    forwarded: dict[str, str | list[str]] = {}
    for key, value in params.items():
        rendered = _render(value)
        if rendered is not None:
            forwarded[key] = rendered

    if not forwarded:
        return target_url, status_code

    parts = urlsplit(target_url)
    kept = [pair for pair in parts.query.split('&') if pair and _query_key(pair) not in forwarded]
    query = '&'.join([*kept, urlencode(forwarded, doseq=True, quote_via=quote)])

    return urlunsplit(parts._replace(query=query)), status_code


def _query_key(pair: str) -> str:
    return unquote_plus(pair.partition('=')[0])


def _render(value: Any) -> str | list[str] | None:
    """Render a parameter value as query string text"""
    if value is None:
        return None
    if isinstance(value, list):
        items = [_render_scalar(item) for item in value if item is not None]
        return items or None
    return _render_scalar(value)


def _render_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(',', ':'))
    return str(value)
