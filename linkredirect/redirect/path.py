"""Request path parsing

A redirect path carries a slug and, optionally, a base64 JSON payload:

    /promo                      -> slug 'promo'
    /promo/eyJmb28iOiJiYXIifQ== -> slug 'promo', payload 'eyJmb28iOiJiYXIifQ=='

Standard base64 may contain '/', so everything after the slug segment is
treated as the payload segment.
"""

from urllib.parse import parse_qs, unquote

from linkredirect.models import ParsedPath
from linkredirect.types import QueryParams


def parse_path(path: str | None) -> ParsedPath | None:
    """Split a raw request path into slug and optional payload segment

    Exactly one leading and one trailing '/' are stripped. Any '?' query
    suffix left in the path is cut off before splitting.

    Returns:
        ParsedPath | None: None for the root path (no slug).

    Example:
        >>> parse_path('/promo/eyJhIjoxfQ==?utm=x')
        ParsedPath(slug='promo', payload_segment='eyJhIjoxfQ==')
        >>> parse_path('/') is None
        True
    """
    if not path:
        return None

    path = path.split('?', 1)[0]
    path = path.removeprefix('/').removesuffix('/')

    slug, _, payload = path.partition('/')
    if not slug:
        return None

    # Percent-escapes never occur in base64, so unquoting the payload is lossless
    payload = unquote(payload) if '%' in payload else payload
    return ParsedPath(slug=slug, payload_segment=payload or None)


def query_from_path(path: str | None) -> QueryParams:
    """Parse a `?key=value&...` suffix retained in a raw request path

    Blank values are kept; repeated keys become lists.
    """
    if not path or '?' not in path:
        return {}

    query = path.split('?', 1)[1]
    return flatten_query(parse_qs(query, keep_blank_values=True))


def flatten_query(query: dict[str, list[str]]) -> QueryParams:
    return {key: values[0] if len(values) == 1 else list(values) for key, values in query.items()}
